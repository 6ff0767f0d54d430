"""
Tests for install eligibility.
"""

from apkbadge.core.installability import is_installable, uninstallable_reasons
from apkbadge.models.results import UninstallableReason


class TestUninstallableReasons:
    def test_clean_package(self):
        assert uninstallable_reasons(verified=True, signed=True, test_only=False) == []
        assert is_installable(verified=True, signed=True, test_only=False) is True

    def test_all_reasons_in_order(self):
        reasons = uninstallable_reasons(verified=False, signed=False, test_only=True)
        assert reasons == [
            UninstallableReason.UNVERIFIED,
            UninstallableReason.UNSIGNED,
            UninstallableReason.TEST_ONLY,
        ]

    def test_signed_but_unverified(self):
        reasons = uninstallable_reasons(verified=False, signed=True, test_only=False)
        assert reasons == [UninstallableReason.UNVERIFIED]
        assert is_installable(verified=False, signed=True, test_only=False) is False

    def test_test_only(self):
        assert uninstallable_reasons(verified=True, signed=True, test_only=True) == [
            UninstallableReason.TEST_ONLY
        ]

    def test_reason_values(self):
        assert [r.value for r in UninstallableReason] == ["unverified", "unsigned", "test_only"]
