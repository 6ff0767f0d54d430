"""apkbadge - package metadata, icons and signatures from Android APKs."""

from apkbadge.core.analyzer import analyze
from apkbadge.exceptions import ApkBadgeError, ManifestValidateError
from apkbadge.models.package import PackageMetadata

__version__ = "0.1.0"

__all__ = [
    "ApkBadgeError",
    "ManifestValidateError",
    "PackageMetadata",
    "__version__",
    "analyze",
]
