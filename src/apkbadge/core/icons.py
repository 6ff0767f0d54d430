"""Launcher icon lookup, with PNG fallbacks for vector and adaptive icons."""

import logging
import re
from typing import NamedTuple

from apkbadge.core.density import DensityResolver, density_resolver
from apkbadge.utils.archive import ArchiveOpener

logger = logging.getLogger(__name__)


class RewriteRule(NamedTuple):
    """Turns an XML icon path into the PNG path that build tools generate."""

    name: str
    pattern: re.Pattern[str]

    def apply(self, path: str, bucket: str) -> str:
        return self.pattern.sub(rf"res/\g<1>-{bucket}-v4/\g<2>.png", path)


# Evaluated in order; the first rule whose pattern matches wins
ICON_REWRITE_RULES: tuple[RewriteRule, ...] = (
    # res/mipmap-anydpi-v26/ic_launcher.xml
    RewriteRule(
        "adaptive",
        re.compile(r"res/(drawable|mipmap)-anydpi-(?:v\d+)/([^/]+)\.xml"),
    ),
    # Adaptive icons packaged under a non-standard qualifier (e.g. Cordova builds)
    RewriteRule(
        "qualified",
        re.compile(r"res/(drawable|mipmap)-.+?dpi-(?:v\d+)/([^/]+)\.xml"),
    ),
    # Plain vector drawable, rasterized by the build into density folders
    RewriteRule(
        "vector",
        re.compile(r"res/(drawable|mipmap)/([^/]+)\.xml"),
    ),
)


def rewrite_to_raster(path: str, bucket: str) -> str:
    """Rewrite an ``.xml`` icon path to its rasterized ``.png`` counterpart.

    Paths that match no rule are returned unchanged.
    """
    for rule in ICON_REWRITE_RULES:
        if rule.pattern.search(path):
            rewritten = rule.apply(path, bucket)
            logger.debug("Icon rule %r: %s -> %s", rule.name, path, rewritten)
            return rewritten
    logger.debug("No raster fallback for %s", path)
    return path


class IconResolver:
    """Resolves icon bytes for a given density."""

    def __init__(
        self,
        icon: str | None,
        icons: dict[int, str],
        opener: ArchiveOpener,
        densities: DensityResolver = density_resolver,
    ):
        self.icon = icon
        self.icons = icons
        self.opener = opener
        self.densities = densities

    def candidate_path(
        self, density: int | str | None = None, want_raster: bool = False
    ) -> str | None:
        """Pick the archive entry to read, or None if there is no icon."""
        if density is not None:
            try:
                path = self.icons.get(int(density))
            except (TypeError, ValueError):
                path = None
        else:
            path = self.icon

        if not path:
            return None

        if want_raster and path.endswith(".xml"):
            path = rewrite_to_raster(path, self.densities.bucket_for(density))

        return path

    def resolve(
        self, density: int | str | None = None, want_raster: bool = False
    ) -> bytes | None:
        """Read the icon for ``density`` (default icon when None).

        Args:
            density: dpi value, see ``SUPPORTED_DENSITIES``.
            want_raster: Ask for a PNG even when the icon is an XML drawable.

        Returns:
            Icon bytes, or None if the package has no such icon entry.
        """
        path = self.candidate_path(density, want_raster)
        if path is None:
            return None

        with self.opener() as archive:
            return archive.read(path)
