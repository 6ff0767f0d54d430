"""Signing-certificate fingerprint extraction.

Three strategies are tried in order until one produces output:

1. ``apksigner verify --print-certs`` (also decides whether the APK verifies)
2. the v1 signature block piped through ``openssl pkcs7`` and ``keytool``
3. the v1 signature block fed to ``keytool -printcert`` directly (older JDKs)
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, NamedTuple
from zipfile import BadZipFile

from apkbadge.exceptions import ApkBadgeError
from apkbadge.models.results import SigningResult, StrategyOutput
from apkbadge.utils.android_sdk import get_apksigner
from apkbadge.utils.archive import ApkArchive
from apkbadge.utils.deps import require
from apkbadge.utils.process import run_tool

logger = logging.getLogger(__name__)

# 20 bytes of hex, optionally colon separated
FINGERPRINT_RE = re.compile(r"(?:[0-9A-Fa-f]{2}:?){20}")

SIGNATURE_BLOCK_PATTERNS = ("META-INF/*.RSA", "META-INF/*.DSA")

StrategyFunc = Callable[[Path, str | None], StrategyOutput]


class SignatureStrategy(NamedTuple):
    name: str
    run: StrategyFunc


def _grep(text: str, *needles: str) -> str:
    return "\n".join(
        line for line in text.splitlines() if all(needle in line for needle in needles)
    )


def read_signature_blocks(apk_path: Path) -> bytes:
    """Concatenate every RSA/DSA signature block in META-INF."""
    with ApkArchive(apk_path) as archive:
        blocks = [archive.read(name) for name in archive.glob(*SIGNATURE_BLOCK_PATTERNS)]
    return b"".join(block for block in blocks if block)


def verify_with_apksigner(apk_path: Path, target_sdk_version: str | None) -> StrategyOutput:
    # Use the target sdk as min sdk: some apks only carry a v2 signature even
    # though their real min sdk is lower. Only Signer #1 is considered.
    command = [str(get_apksigner()), "verify"]
    if target_sdk_version and target_sdk_version.isdigit():
        command.append(f"--min-sdk-version={target_sdk_version}")
    command += ["--print-certs", str(apk_path)]

    result = run_tool(command, check=False)
    text = _grep(result.stdout, "Signer #1", "SHA-1")
    return StrategyOutput(success=result.success and bool(text), text=text)


def print_with_openssl(apk_path: Path, target_sdk_version: str | None) -> StrategyOutput:
    require("openssl", "keytool")
    blocks = read_signature_blocks(apk_path)
    if not blocks:
        return StrategyOutput(success=False)

    pkcs7 = run_tool(
        ["openssl", "pkcs7", "-inform", "DER", "-text", "-print_certs"],
        check=False,
        input_data=blocks,
    )
    if not pkcs7.success:
        return StrategyOutput(success=False)

    certs = run_tool(
        ["keytool", "-printcert"],
        check=False,
        input_data=pkcs7.stdout.encode("utf-8"),
    )
    text = _grep(certs.stdout, "SHA1:")
    return StrategyOutput(success=certs.success and bool(text), text=text)


def print_with_keytool(apk_path: Path, target_sdk_version: str | None) -> StrategyOutput:
    require("keytool")
    blocks = read_signature_blocks(apk_path)
    if not blocks:
        return StrategyOutput(success=False)

    certs = run_tool(["keytool", "-printcert"], check=False, input_data=blocks)
    text = _grep(certs.stdout, "SHA1:")
    return StrategyOutput(success=certs.success and bool(text), text=text)


SIGNATURE_STRATEGIES: tuple[SignatureStrategy, ...] = (
    SignatureStrategy("apksigner", verify_with_apksigner),
    SignatureStrategy("openssl", print_with_openssl),
    SignatureStrategy("keytool", print_with_keytool),
)


def parse_fingerprint(text: str) -> str | None:
    """Pull the single SHA-1 fingerprint out of tool output.

    Returns:
        40 lowercase hex characters, or None if there is no match or the
        output is ambiguous (more than one candidate).
    """
    matches = FINGERPRINT_RE.findall(text)
    if len(matches) != 1:
        if matches:
            logger.warning("Ambiguous signer output: %d fingerprints found", len(matches))
        return None
    return matches[0].replace(":", "").lower()


class SignatureExtractor:
    """Runs the signature strategies and parses their output."""

    def __init__(self, strategies: tuple[SignatureStrategy, ...] | None = None):
        self.strategies = SIGNATURE_STRATEGIES if strategies is None else tuple(strategies)

    def _run(
        self, strategy: SignatureStrategy, apk_path: Path, target_sdk_version: str | None
    ) -> StrategyOutput:
        try:
            output = strategy.run(apk_path, target_sdk_version)
        except (ApkBadgeError, BadZipFile, OSError) as e:
            logger.debug("Strategy %s unavailable: %s", strategy.name, e)
            return StrategyOutput(success=False)
        logger.debug("Strategy %s usable=%s", strategy.name, output.usable)
        return output

    def extract(self, apk_path: Path | str, target_sdk_version: str | None) -> SigningResult:
        """Extract the SHA-1 fingerprint of the first signer.

        ``verified`` reflects only the first strategy; later strategies can
        still supply the fingerprint.
        """
        apk_path = Path(apk_path)
        verified = False
        for index, strategy in enumerate(self.strategies):
            output = self._run(strategy, apk_path, target_sdk_version)
            if index == 0:
                verified = output.usable
            if output.usable:
                return SigningResult(
                    signature=parse_fingerprint(output.text),
                    verified=verified,
                )

        return SigningResult(signature=None, verified=verified)
