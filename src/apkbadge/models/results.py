"""Pydantic models for derived package artifacts."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

SIGNATURE_LENGTH = 40


class UninstallableReason(str, Enum):
    """Why a package cannot be installed on a device."""

    UNVERIFIED = "unverified"
    UNSIGNED = "unsigned"
    TEST_ONLY = "test_only"


class StrategyOutput(BaseModel):
    """Raw text produced by one signature strategy."""

    model_config = ConfigDict(frozen=True)

    success: bool
    """Whether every tool in the strategy exited cleanly."""

    text: str = ""
    """Filtered output (only the fingerprint lines)."""

    @property
    def usable(self) -> bool:
        """A strategy counts only if it succeeded and printed something."""
        return self.success and bool(self.text.strip())


class SigningResult(BaseModel):
    """Signing-certificate fingerprint of a package."""

    model_config = ConfigDict(frozen=True)

    signature: str | None = None
    """SHA-1 fingerprint, 40 lowercase hex characters."""

    verified: bool = False
    """True only if apksigner verification succeeded."""

    @field_validator("signature")
    @classmethod
    def _check_signature(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if len(value) != SIGNATURE_LENGTH or value.strip("0123456789abcdef"):
            raise ValueError(f"Not a lowercase SHA-1 fingerprint: {value!r}")
        return value

    @property
    def signed(self) -> bool:
        """Check if a fingerprint was extracted."""
        return self.signature is not None


class AdaptiveIconResult(BaseModel):
    """Adaptive-icon status of a package's launcher icon."""

    model_config = ConfigDict(frozen=True)

    is_adaptive: bool = False
    """Icon is an <adaptive-icon> resource."""

    has_backward_compatible_fallback: bool = False
    """A raster fallback ships for platforms older than API 26."""
