"""Install eligibility of an analyzed package."""

from apkbadge.models.results import UninstallableReason


def uninstallable_reasons(
    *, verified: bool, signed: bool, test_only: bool
) -> list[UninstallableReason]:
    """Collect the reasons a device would refuse the package."""
    reasons = []
    if not verified:
        reasons.append(UninstallableReason.UNVERIFIED)
    if not signed:
        reasons.append(UninstallableReason.UNSIGNED)
    if test_only:
        reasons.append(UninstallableReason.TEST_ONLY)
    return reasons


def is_installable(*, verified: bool, signed: bool, test_only: bool) -> bool:
    return not uninstallable_reasons(verified=verified, signed=signed, test_only=test_only)
