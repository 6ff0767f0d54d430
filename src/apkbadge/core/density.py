"""Screen density to resource-qualifier mapping."""

DENSITY_BUCKETS: dict[int, str] = {
    120: "ldpi",
    160: "mdpi",
    240: "hdpi",
    320: "xhdpi",
    480: "xxhdpi",
    640: "xxxhdpi",
}

SUPPORTED_DENSITIES: tuple[int, ...] = tuple(sorted(DENSITY_BUCKETS))

# Unknown densities resolve to the sharpest bucket
DEFAULT_BUCKET = "xxxhdpi"


def _to_density(density: int | str | None) -> int | None:
    if density is None:
        return None
    try:
        return int(density)
    except (TypeError, ValueError):
        return None


class DensityResolver:
    """Maps dpi values to drawable/mipmap qualifiers such as ``hdpi``."""

    def __init__(self, buckets: dict[int, str] | None = None):
        self.buckets = dict(DENSITY_BUCKETS if buckets is None else buckets)

    def bucket_for(self, density: int | str | None) -> str:
        """Resolve a density to its bucket name.

        Lookup is exact; anything outside the table (including None) falls
        back to ``xxxhdpi``.
        """
        return self.buckets.get(_to_density(density), DEFAULT_BUCKET)  # type: ignore[arg-type]

    def density_for(self, bucket: str) -> int | None:
        """Reverse lookup: ``"mdpi"`` -> 160."""
        for density, name in self.buckets.items():
            if name == bucket:
                return density
        return None


density_resolver = DensityResolver()
