"""Dump parsing and artifact resolution."""
