"""APK file validation utilities."""

from pathlib import Path

from apkbadge.exceptions import ApkBadgeError

# ZIP file magic header (APKs are ZIP files)
ZIP_FILE_HEADER = b"PK\x03\x04"


def validate_apk_path(
    apk_path: Path,
    *,
    require_zip_header: bool = False,
) -> None:
    """Validate that an APK file path is valid.

    Performs the following checks:
    - File exists
    - Path is a file (not a directory)
    - Optionally: file starts with ZIP magic header

    Unlike some tooling, the .apk extension is not enforced: aapt itself
    accepts any ZIP container.

    Args:
        apk_path: Path to the APK file to validate.
        require_zip_header: If True, also verify the file starts with ZIP header.

    Raises:
        ApkBadgeError: If validation fails.
    """
    if not apk_path.exists():
        raise ApkBadgeError(f"APK not found: {apk_path}")

    if not apk_path.is_file():
        raise ApkBadgeError(f"Not a file: {apk_path}")

    if require_zip_header:
        try:
            with apk_path.open("rb") as f:
                header = f.read(4)
        except OSError as e:
            raise ApkBadgeError(f"Failed to read APK header: {e}") from e

        if len(header) < len(ZIP_FILE_HEADER):
            raise ApkBadgeError("File is too small to be a valid APK")

        if header != ZIP_FILE_HEADER:
            raise ApkBadgeError(
                f"Header mismatch. Expected: {ZIP_FILE_HEADER!r}, got: {header!r}"
            )


def is_apk_file(apk_path: Path) -> bool:
    """Check an APK path without raising."""
    try:
        validate_apk_path(apk_path, require_zip_header=True)
    except ApkBadgeError:
        return False
    return True
