"""APK analysis: run aapt and turn its badging dump into PackageMetadata."""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Callable

from apkbadge.core.dump import DISALLOWED_DUPLICATE_TAGS, DumpParser
from apkbadge.core.extractor import MetadataExtractor
from apkbadge.exceptions import ApkBadgeError
from apkbadge.models.package import PackageMetadata
from apkbadge.utils.android_sdk import get_aapt
from apkbadge.utils.apk import is_apk_file
from apkbadge.utils.config import get_config_list
from apkbadge.utils.process import run_tool

logger = logging.getLogger(__name__)

DUMP_FAILED_MARKER = "ERROR: dump failed"
DISALLOWED_TAGS_CONFIG_KEY = "disallowed_duplicate_tags"

# Returns the dump text, or None when the tool could not dump the package
DumpProvider = Callable[[Path], str | None]


def dump_badging(apk_path: Path) -> str | None:
    """Run ``aapt dump badging`` on an APK.

    Returns:
        The dump text, or None if aapt is unavailable, could not be started,
        or reported a failure.
    """
    try:
        aapt = get_aapt()
        result = run_tool([str(aapt), "dump", "badging", str(apk_path)], check=False)
    except ApkBadgeError as e:
        logger.warning("Could not run aapt on %s: %s", apk_path, e)
        return None

    # aapt sometimes prints its errors to stdout
    output = result.stdout + result.stderr
    if not result.success or DUMP_FAILED_MARKER in output:
        logger.debug("aapt failed for %s (exit %d)", apk_path, result.returncode)
        return None

    return result.stdout


def disallowed_duplicate_tags() -> tuple[str, ...]:
    """Tags that must not repeat, from config or the built-in list."""
    configured = get_config_list(DISALLOWED_TAGS_CONFIG_KEY)
    return configured if configured is not None else DISALLOWED_DUPLICATE_TAGS


def analyze(
    filepath: Path | str,
    *,
    dump: DumpProvider | None = None,
    disallowed_duplicates: Iterable[str] | None = None,
) -> PackageMetadata | None:
    """Analyze an APK. Analyzed does not mean *valid*.

    Args:
        filepath: APK to analyze.
        dump: Produces the badging dump; defaults to running aapt.
        disallowed_duplicates: Tags that may appear only once.

    Returns:
        PackageMetadata, or None if the file is missing, is not an APK,
        or could not be dumped.

    Raises:
        ManifestValidateError: If the manifest repeats a tag that must be unique.
    """
    apk_path = Path(filepath)
    if not is_apk_file(apk_path):
        logger.debug("Not an APK: %s", apk_path)
        return None

    dump_fn = dump if dump is not None else dump_badging
    text = dump_fn(apk_path)
    if text is None:
        return None

    tags = disallowed_duplicate_tags() if disallowed_duplicates is None else disallowed_duplicates
    parsed = DumpParser(tags).parse(text)
    metadata = MetadataExtractor().extract(parsed, apk_path, results=text)
    logger.info("Analyzed %s (%s)", apk_path.name, metadata.package_name)
    return metadata
