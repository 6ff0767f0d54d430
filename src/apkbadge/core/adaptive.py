"""Adaptive icon detection."""

from __future__ import annotations

import contextlib
import logging
import posixpath
from collections.abc import Iterator

from pyaxmlparser.axmlprinter import AXMLPrinter  # type: ignore[import-untyped]

from apkbadge.models.results import AdaptiveIconResult
from apkbadge.utils.archive import ArchiveOpener

logger = logging.getLogger(__name__)

# API level that introduced <adaptive-icon>
ADAPTIVE_ICON_SDK = 26
ADAPTIVE_ICON_DIR = "res/mipmap-anydpi-v26/"
ADAPTIVE_ICON_MARKER = "adaptive-icon"
FALLBACK_ICON_DIR = "res/mipmap-xxxhdpi-v4/"


@contextlib.contextmanager
def quiet_decoder(level: int = logging.CRITICAL) -> Iterator[None]:
    """Temporarily raise pyaxmlparser's log level while decoding."""
    decoder_logger = logging.getLogger("pyaxmlparser")
    previous = decoder_logger.level
    decoder_logger.setLevel(level)
    try:
        yield
    finally:
        decoder_logger.setLevel(previous)


def decode_xml(data: bytes) -> str:
    """Decode an XML resource, compiled (binary AXML) or plain text."""
    if data.lstrip().startswith(b"<"):
        return data.decode("utf-8")

    with quiet_decoder():
        printer = AXMLPrinter(data)
        xml = printer.get_xml()
    return xml.decode("utf-8") if isinstance(xml, bytes) else str(xml)


def _to_int(value: str | None) -> int:
    try:
        return int(value or 0)
    except ValueError:
        return 0


class AdaptiveIconDetector:
    """Checks whether the launcher icon is an adaptive icon."""

    def __init__(self, icon: str | None, sdk_version: str | None, opener: ArchiveOpener):
        self.icon = icon
        self.sdk_version = sdk_version
        self.opener = opener

    def applies(self) -> bool:
        """Only icons under mipmap-anydpi-v26 can be adaptive."""
        icon = self.icon or ""
        return icon.startswith(ADAPTIVE_ICON_DIR) and icon.endswith(".xml")

    def fallback_path(self) -> str:
        """PNG shipped for pre-26 platforms next to the adaptive icon."""
        name = posixpath.basename(self.icon or "")
        return FALLBACK_ICON_DIR + name.removesuffix(".xml") + ".png"

    def is_adaptive(self) -> bool:
        icon = self.icon
        if icon is None or not self.applies():
            return False

        # Corrupt or undecodable resources just mean "not adaptive"
        try:
            with self.opener() as archive:
                data = archive.read(icon)
            if data is None:
                return False
            return ADAPTIVE_ICON_MARKER in decode_xml(data)
        except Exception as e:
            logger.warning("Could not inspect icon %s: %s", icon, e)
            return False

    def has_fallback(self) -> bool:
        with self.opener() as archive:
            return archive.exists(self.fallback_path())

    def detect(self) -> AdaptiveIconResult:
        adaptive = self.is_adaptive()
        backward_compatible = False
        if adaptive and _to_int(self.sdk_version) < ADAPTIVE_ICON_SDK:
            backward_compatible = self.has_fallback()

        return AdaptiveIconResult(
            is_adaptive=adaptive,
            has_backward_compatible_fallback=backward_compatible,
        )
