"""Pydantic model for an analyzed package."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from apkbadge.core.adaptive import AdaptiveIconDetector
from apkbadge.core.density import density_resolver
from apkbadge.core.icons import IconResolver
from apkbadge.core.installability import uninstallable_reasons
from apkbadge.core.signature import SignatureExtractor
from apkbadge.models.results import AdaptiveIconResult, SigningResult, UninstallableReason
from apkbadge.utils.archive import archive_opener


class PackageMetadata(BaseModel):
    """Metadata of one APK, as reported by ``aapt dump badging``.

    Signature and adaptive-icon status are computed on first access and
    cached on the instance.
    """

    model_config = ConfigDict(frozen=True)

    package_name: str | None = None
    """Full package name (e.g., com.example.app)."""

    version_code: str | None = None
    """Version code, unparsed."""

    version_name: str | None = None
    """Version string (e.g., 1.0.0)."""

    sdk_version: str | None = None
    """Minimum sdk version."""

    target_sdk_version: str | None = None
    """Target sdk version."""

    label: str | None = None
    """Application label in the default resources."""

    labels: dict[str, str] = Field(default_factory=dict)
    """Application label per locale (e.g., {"ja": "サンプル"})."""

    icon: str | None = None
    """Archive path of the default icon."""

    icons: dict[int, str] = Field(default_factory=dict)
    """Archive path of the icon per density."""

    test_only: bool = False
    """Whether the manifest sets android:testOnly."""

    filepath: Path
    """The analyzed APK. Never moved or deleted by apkbadge."""

    results: str = Field(default="", repr=False)
    """Raw dump text the metadata was parsed from."""

    _signing: SigningResult | None = PrivateAttr(default=None)
    _adaptive: AdaptiveIconResult | None = PrivateAttr(default=None)

    @property
    def min_sdk_version(self) -> str | None:
        return self.sdk_version

    # Icons

    def dpi_str(self, density: int | str | None) -> str:
        """Resource qualifier for ``density``; ``xxxhdpi`` when unknown."""
        return density_resolver.bucket_for(density)

    def icon_resolver(self) -> IconResolver:
        return IconResolver(self.icon, self.icons, archive_opener(self.filepath))

    def icon_file(
        self, density: int | str | None = None, want_raster: bool = False
    ) -> bytes | None:
        """Read the application icon.

        Args:
            density: dpi value (e.g. 160); the default icon when None.
            want_raster: Request a PNG even if the icon is a vector/adaptive XML.

        Returns:
            Icon bytes, or None if the icon does not exist.
        """
        return self.icon_resolver().resolve(density, want_raster)

    # Signature

    def signing(self, extractor: SignatureExtractor | None = None) -> SigningResult:
        """Compute the signing result once and cache it."""
        if self._signing is None:
            extractor = extractor or SignatureExtractor()
            self._signing = extractor.extract(self.filepath, self.target_sdk_version)
        return self._signing

    @property
    def signature(self) -> str | None:
        """SHA-1 fingerprint of the first signer, or None."""
        return self.signing().signature

    @property
    def verified(self) -> bool:
        return self.signing().verified

    @property
    def signed(self) -> bool:
        return self.signature is not None

    # Installability

    @property
    def uninstallable_reasons(self) -> list[UninstallableReason]:
        return uninstallable_reasons(
            verified=self.verified,
            signed=self.signed,
            test_only=self.test_only,
        )

    @property
    def installable(self) -> bool:
        return not self.uninstallable_reasons

    # Adaptive icon

    def adaptive_icon_result(self) -> AdaptiveIconResult:
        if self._adaptive is None:
            detector = AdaptiveIconDetector(
                self.icon, self.sdk_version, archive_opener(self.filepath)
            )
            self._adaptive = detector.detect()
        return self._adaptive

    @property
    def adaptive_icon(self) -> bool:
        """Whether the launcher icon is an adaptive icon."""
        return self.adaptive_icon_result().is_adaptive

    @property
    def backward_compatible_adaptive_icon(self) -> bool:
        """Adaptive icon with a PNG fallback for pre-26 devices."""
        return self.adaptive_icon_result().has_backward_compatible_fallback
