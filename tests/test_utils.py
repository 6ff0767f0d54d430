"""
Tests for utils — subprocess wrapper, archive access, config, tool lookup.
"""

import json
import sys
from pathlib import Path
from typing import Callable

import pytest

from apkbadge.exceptions import ApkBadgeError, ProcessError, ToolNotFoundError
from apkbadge.utils import android_sdk
from apkbadge.utils import config as config_module
from apkbadge.utils.apk import is_apk_file, validate_apk_path
from apkbadge.utils.archive import ApkArchive
from apkbadge.utils.deps import AAPT_ENV_VAR, get_configured_tool, require
from apkbadge.utils.process import run_tool


class TestRunTool:
    def test_captures_stdout(self):
        result = run_tool([sys.executable, "-c", "print('hello')"])
        assert result.success
        assert result.stdout.strip() == "hello"

    def test_feeds_stdin(self):
        script = "import sys; sys.stdout.write(sys.stdin.read().upper())"
        result = run_tool([sys.executable, "-c", script], input_data=b"abc")
        assert result.stdout == "ABC"

    def test_non_zero_with_check(self):
        with pytest.raises(ProcessError) as exc_info:
            run_tool([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert exc_info.value.returncode == 3

    def test_non_zero_without_check(self):
        result = run_tool([sys.executable, "-c", "import sys; sys.exit(3)"], check=False)
        assert result.returncode == 3
        assert not result.success

    def test_missing_command(self):
        with pytest.raises(ProcessError, match="Command not found"):
            run_tool(["apkbadge-no-such-tool-xyz"])

    def test_not_executable(self, tmp_path: Path):
        tool = tmp_path / "aapt"
        tool.write_text("#!/bin/sh\n")
        tool.chmod(0o644)
        with pytest.raises(ProcessError, match="Cannot run") as exc_info:
            run_tool([str(tool)], check=False)
        assert exc_info.value.returncode == -1

    def test_undecodable_output(self):
        script = "import sys; sys.stdout.buffer.write(b'ok\\xff')"
        result = run_tool([sys.executable, "-c", script])
        assert result.stdout.startswith("ok")


class TestApkArchive:
    def test_read_and_exists(self, make_apk: Callable[..., Path]):
        apk = make_apk({"res/a.png": b"a"})
        with ApkArchive(apk) as archive:
            assert archive.exists("res/a.png")
            assert archive.read("res/a.png") == b"a"
            assert archive.read("res/missing.png") is None

    def test_glob(self, make_apk: Callable[..., Path]):
        apk = make_apk({"META-INF/CERT.RSA": b"1", "META-INF/sub/X.RSA": b"2", "x.RSA": b"3"})
        with ApkArchive(apk) as archive:
            assert archive.glob("META-INF/*.RSA") == ["META-INF/CERT.RSA", "META-INF/sub/X.RSA"]

    def test_requires_context(self, make_apk: Callable[..., Path]):
        with pytest.raises(RuntimeError):
            ApkArchive(make_apk()).namelist()


class TestValidateApkPath:
    def test_valid(self, make_apk: Callable[..., Path]):
        apk = make_apk()
        validate_apk_path(apk, require_zip_header=True)
        assert is_apk_file(apk)

    def test_missing(self, tmp_path: Path):
        with pytest.raises(ApkBadgeError, match="APK not found"):
            validate_apk_path(tmp_path / "nope.apk")
        assert not is_apk_file(tmp_path / "nope.apk")

    def test_directory(self, tmp_path: Path):
        with pytest.raises(ApkBadgeError, match="Not a file"):
            validate_apk_path(tmp_path)

    def test_wrong_header(self, tmp_path: Path):
        fake = tmp_path / "fake.apk"
        fake.write_bytes(b"MZ\x90\x00")
        with pytest.raises(ApkBadgeError, match="Header mismatch"):
            validate_apk_path(fake, require_zip_header=True)

    def test_too_small(self, tmp_path: Path):
        fake = tmp_path / "tiny.apk"
        fake.write_bytes(b"PK")
        assert not is_apk_file(fake)


class TestConfig:
    @pytest.fixture(autouse=True)
    def isolated_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "config.json")
        config_module.reload_config()
        yield
        config_module.reload_config()

    def test_missing_file(self):
        assert config_module.load_config() == {}

    def test_invalid_json(self, tmp_path: Path):
        (tmp_path / "config.json").write_text("{nope")
        assert config_module.load_config() == {}

    def test_list_value(self, tmp_path: Path):
        (tmp_path / "config.json").write_text(
            json.dumps({"disallowed_duplicate_tags": ["application", 3, ""]})
        )
        assert config_module.get_config_list("disallowed_duplicate_tags") == ("application",)
        assert config_module.get_config_list("missing") is None

    def test_configured_tool(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        aapt = tmp_path / "aapt"
        aapt.write_text("#!/bin/sh\n")
        (tmp_path / "config.json").write_text(json.dumps({"aapt_path": str(aapt)}))
        monkeypatch.delenv(AAPT_ENV_VAR, raising=False)
        assert get_configured_tool("aapt") == aapt
        assert get_configured_tool("apksigner") is None
        assert get_configured_tool("keytool") is None


class TestToolLookup:
    def test_env_override_for_aapt(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        aapt = tmp_path / "my-aapt"
        aapt.write_text("#!/bin/sh\n")
        monkeypatch.setenv(AAPT_ENV_VAR, str(aapt))
        assert android_sdk.get_aapt() == aapt

    def test_build_tools_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        for version in ("28.0.3", "34.0.0", "25.0.0", "not-a-version"):
            (tmp_path / "build-tools" / version).mkdir(parents=True)
        apksigner = tmp_path / "build-tools" / "34.0.0" / "apksigner"
        apksigner.write_text("#!/bin/sh\n")

        monkeypatch.setattr(android_sdk, "get_configured_tool", lambda name: None)
        monkeypatch.setattr(android_sdk.shutil, "which", lambda name: None)
        monkeypatch.setattr(android_sdk.platform, "system", lambda: "Linux")
        monkeypatch.setenv("ANDROID_HOME", str(tmp_path))

        assert android_sdk.get_build_tools_path() == tmp_path / "build-tools" / "34.0.0"
        assert android_sdk.get_apksigner() == apksigner
        with pytest.raises(ToolNotFoundError, match="aapt"):
            android_sdk.get_aapt()

    def test_require_missing_tool(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr("apkbadge.utils.deps.shutil.which", lambda name: None)
        with pytest.raises(ToolNotFoundError) as exc_info:
            require("keytool")
        assert exc_info.value.tool == "keytool"
        assert "JDK" in str(exc_info.value)
