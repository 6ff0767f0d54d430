"""Build PackageMetadata from a parsed badging dump."""

import re
from pathlib import Path

from apkbadge.core.dump import ParsedDump
from apkbadge.models.package import PackageMetadata

ICON_KEY_RE = re.compile(r"^application-icon-(\d+)$")
LABEL_KEY_RE = re.compile(r"^application-label-(\S+)$")
TEST_ONLY_FLAG = "testOnly='-1'"


class MetadataExtractor:
    """Reads the fields apkbadge cares about out of a :class:`ParsedDump`."""

    def _icons(self, parsed: ParsedDump) -> dict[int, str]:
        icons: dict[int, str] = {}
        for key in parsed:
            match = ICON_KEY_RE.match(key)
            if not match:
                continue
            density = int(match.group(1))
            path = parsed.scalar(key)
            if density > 0 and path is not None:
                icons[density] = path
        return icons

    def _labels(self, parsed: ParsedDump) -> dict[str, str]:
        labels: dict[str, str] = {}
        for key in parsed:
            match = LABEL_KEY_RE.match(key)
            if not match:
                continue
            label = parsed.scalar(key)
            if label is not None:
                labels[match.group(1)] = label
        return labels

    def extract(
        self, parsed: ParsedDump, filepath: Path | str, results: str = ""
    ) -> PackageMetadata:
        """Build the metadata record. Missing keys become None/empty."""
        return PackageMetadata(
            package_name=parsed.entry("package", "name"),
            version_code=parsed.entry("package", "versionCode"),
            version_name=parsed.entry("package", "versionName"),
            sdk_version=parsed.scalar("sdkVersion"),
            target_sdk_version=parsed.scalar("targetSdkVersion"),
            label=parsed.scalar("application-label"),
            labels=self._labels(parsed),
            icon=parsed.entry("application", "icon"),
            icons=self._icons(parsed),
            test_only=parsed.has_flag(TEST_ONLY_FLAG),
            filepath=Path(filepath),
            results=results,
        )
