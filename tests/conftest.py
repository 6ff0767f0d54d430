"""
Shared test fixtures and configuration.
"""

import struct
import textwrap
import zipfile
from pathlib import Path
from typing import Callable

import pytest

from apkbadge.core.signature import SignatureStrategy
from apkbadge.models.results import StrategyOutput

SAMPLE_DUMP = textwrap.dedent("""\
    package: name='com.example.sample' versionCode='1' versionName='1.0'
    sdkVersion:'7'
    targetSdkVersion:'15'
    application-label:'sample'
    application-label-ja:'サンプル'
    application-icon-120:'res/drawable-ldpi/ic_launcher.png'
    application-icon-160:'res/drawable-mdpi/ic_launcher.png'
    application-icon-240:'res/drawable-hdpi/ic_launcher.png'
    application: label='sample' icon='res/drawable-mdpi/ic_launcher.png'
    launchable-activity: name='com.example.sample.MainActivity'  label='sample' icon=''
    uses-permission: name='android.permission.INTERNET'
    supports-screens: 'small' 'normal' 'large'
    locales: '--_--' 'ja'
    densities: '120' '160' '240'
""")

SAMPLE_FINGERPRINT = "c1f285f69cc02a397135ed182aa79af53d5d20a1"

ADAPTIVE_ICON_XML = (
    b'<?xml version="1.0" encoding="utf-8"?>\n'
    b'<adaptive-icon xmlns:android="http://schemas.android.com/apk/res/android">\n'
    b'  <background android:drawable="@color/ic_launcher_background"/>\n'
    b'  <foreground android:drawable="@mipmap/ic_launcher_foreground"/>\n'
    b"</adaptive-icon>\n"
)

VECTOR_ICON_XML = (
    b'<?xml version="1.0" encoding="utf-8"?>\n'
    b'<vector xmlns:android="http://schemas.android.com/apk/res/android"'
    b' android:width="48dp" android:height="48dp"/>\n'
)


def compile_xml(tag: str) -> bytes:
    """Build a compiled (binary AXML) document holding one empty element."""
    text = struct.pack("<H", len(tag)) + tag.encode("utf-16-le") + b"\x00\x00"
    text += b"\x00" * (-len(text) % 4)
    strings_start = 28 + 4
    pool = (
        struct.pack("<HHIIIIII", 0x0001, 28, strings_start + len(text), 1, 0, 0, strings_start, 0)
        + struct.pack("<I", 0)
        + text
    )
    no_ref = 0xFFFFFFFF
    start = struct.pack("<HHIIIIIIII", 0x0102, 16, 36, 1, no_ref, no_ref, 0, 0x00140014, 0, 0)
    end = struct.pack("<HHIIIII", 0x0103, 16, 24, 1, no_ref, no_ref, 0)
    body = pool + start + end
    return struct.pack("<HHI", 0x0003, 8, 8 + len(body)) + body


@pytest.fixture
def make_apk(tmp_path: Path) -> Callable[..., Path]:
    """Build an APK (a ZIP archive) holding the given entries."""

    def _make(entries: dict[str, bytes] | None = None, name: str = "app.apk") -> Path:
        apk_path = tmp_path / name
        with zipfile.ZipFile(apk_path, "w") as zf:
            zf.writestr("AndroidManifest.xml", b"\x03\x00\x08\x00")
            for entry, content in (entries or {}).items():
                zf.writestr(entry, content)
        return apk_path

    return _make


@pytest.fixture
def sample_apk(make_apk: Callable[..., Path]) -> Path:
    """APK whose entries match SAMPLE_DUMP."""
    return make_apk(
        {
            "res/drawable-ldpi/ic_launcher.png": b"ldpi-png",
            "res/drawable-mdpi/ic_launcher.png": b"mdpi-png",
            "res/drawable-hdpi/ic_launcher.png": b"hdpi-png",
        },
        name="sample.apk",
    )


def fake_strategy(
    name: str,
    output: StrategyOutput | None = None,
    calls: list[str] | None = None,
    error: Exception | None = None,
) -> SignatureStrategy:
    """Signature strategy returning a canned output and recording its calls."""

    def _run(apk_path: Path, target_sdk_version: str | None) -> StrategyOutput:
        if calls is not None:
            calls.append(name)
        if error is not None:
            raise error
        return output or StrategyOutput(success=False)

    return SignatureStrategy(name, _run)


def colon_hex(fingerprint: str, upper: bool = True) -> str:
    """Render a 40-char fingerprint as AA:BB:... like keytool does."""
    pairs = [fingerprint[i : i + 2] for i in range(0, len(fingerprint), 2)]
    joined = ":".join(pairs)
    return joined.upper() if upper else joined
