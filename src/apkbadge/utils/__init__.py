"""Helpers around external tools and archives."""
