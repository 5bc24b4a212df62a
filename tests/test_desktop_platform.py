from __future__ import annotations

import asyncio
import shlex
import sys

import pytest

from wheatscan.config import Settings
from wheatscan.services.platform import (
    Capability,
    IntentOutcome,
    PermissionStatus,
    SettingsPanel,
    get_platform,
)
from wheatscan.services.platform.desktop import DesktopPlatform, command_argv


def test_command_argv_substitutes_placeholder():
    assert command_argv("libcamera-still -n -o {output}", output="/tmp/a b.jpg") == [
        "libcamera-still",
        "-n",
        "-o",
        "/tmp/a b.jpg",
    ]


def test_command_argv_appends_missing_placeholder():
    assert command_argv("fswebcam --no-banner", output="/tmp/x.jpg") == ["fswebcam", "--no-banner", "/tmp/x.jpg"]
    assert command_argv(None, output="/tmp/x.jpg") == []


def test_camera_capability_needs_writable_dir(tmp_path):
    platform = DesktopPlatform(capture_dir=tmp_path / "pics")
    assert asyncio.run(platform.request_capability(Capability.CAMERA)) is PermissionStatus.GRANTED
    assert (tmp_path / "pics").is_dir()


def test_camera_capability_denied_when_dir_blocked(tmp_path):
    blocker = tmp_path / "pics"
    blocker.write_text("")
    platform = DesktopPlatform(capture_dir=blocker)
    assert asyncio.run(platform.request_capability(Capability.CAMERA)) is PermissionStatus.DENIED


def test_storage_capability(tmp_path):
    assert asyncio.run(
        DesktopPlatform(capture_dir=tmp_path).request_capability(Capability.STORAGE)
    ) is PermissionStatus.UNAVAILABLE
    assert asyncio.run(
        DesktopPlatform(capture_dir=tmp_path, selection="x.jpg").request_capability(Capability.STORAGE)
    ) is PermissionStatus.GRANTED


def test_capture_without_camera_program(tmp_path):
    platform = DesktopPlatform(capture_dir=tmp_path)
    assert asyncio.run(platform.capture_photo(tmp_path / "a.jpg")) is IntentOutcome.UNAVAILABLE
    platform = DesktopPlatform(capture_dir=tmp_path, camera_command="no-such-camera-program-xyz {output}")
    assert asyncio.run(platform.capture_photo(tmp_path / "a.jpg")) is IntentOutcome.UNAVAILABLE


def test_capture_runs_camera_program(tmp_path):
    script = "import sys; open(sys.argv[1], 'wb').write(b'jpeg')"
    command = f"{shlex.quote(sys.executable)} -c {shlex.quote(script)} {{output}}"
    platform = DesktopPlatform(capture_dir=tmp_path, camera_command=command)
    target = tmp_path / "shot.jpg"
    assert asyncio.run(platform.capture_photo(target)) is IntentOutcome.OK
    assert target.read_bytes() == b"jpeg"


def test_capture_program_failure_counts_as_cancel(tmp_path):
    command = f"{shlex.quote(sys.executable)} -c 'raise SystemExit(1)'"
    platform = DesktopPlatform(capture_dir=tmp_path, camera_command=command)
    assert asyncio.run(platform.capture_photo(tmp_path / "shot.jpg")) is IntentOutcome.CANCELLED


def test_pick_uses_preset_selection_once(tmp_path):
    platform = DesktopPlatform(capture_dir=tmp_path, selection="/photos/leaf.jpg")
    first = asyncio.run(platform.pick_photo())
    assert first.outcome is IntentOutcome.OK and first.value == "/photos/leaf.jpg"
    assert asyncio.run(platform.pick_photo()).outcome is IntentOutcome.UNAVAILABLE


def test_pick_reads_program_output(tmp_path):
    command = f"{shlex.quote(sys.executable)} -c 'print(\"/photos/field.png\")'"
    platform = DesktopPlatform(capture_dir=tmp_path, picker_command=command)
    result = asyncio.run(platform.pick_photo())
    assert result.outcome is IntentOutcome.OK
    assert result.value == "/photos/field.png"


def test_pick_program_with_no_answer_is_cancel(tmp_path):
    command = f"{shlex.quote(sys.executable)} -c 'pass'"
    platform = DesktopPlatform(capture_dir=tmp_path, picker_command=command)
    assert asyncio.run(platform.pick_photo()).outcome is IntentOutcome.CANCELLED


def test_open_stream_rejects_unknown_scheme(tmp_path):
    with pytest.raises(FileNotFoundError):
        DesktopPlatform(capture_dir=tmp_path).open_stream("content://media/1")


def test_open_settings(tmp_path, monkeypatch):
    launched = []
    monkeypatch.setattr(
        "wheatscan.services.platform.desktop.subprocess.Popen",
        lambda argv, **kwargs: launched.append(argv),
    )
    platform = DesktopPlatform(
        capture_dir=tmp_path,
        settings_commands={SettingsPanel.WIFI: "nm-connection-editor", SettingsPanel.MOBILE_DATA: None},
    )
    assert platform.open_settings(SettingsPanel.WIFI) is True
    assert platform.open_settings(SettingsPanel.MOBILE_DATA) is False
    assert launched == [["nm-connection-editor"]]


def test_open_settings_missing_program(tmp_path):
    platform = DesktopPlatform(
        capture_dir=tmp_path, settings_commands={SettingsPanel.WIFI: "no-such-settings-app-xyz"}
    )
    assert platform.open_settings(SettingsPanel.WIFI) is False


def test_open_url(tmp_path, monkeypatch):
    opened = []
    monkeypatch.setattr(
        "wheatscan.services.platform.desktop.webbrowser.open",
        lambda url, new=0: opened.append(url) or True,
    )
    assert DesktopPlatform(capture_dir=tmp_path).open_url("https://example.test") is True
    assert opened == ["https://example.test"]


def test_registry(tmp_path):
    platform = get_platform(Settings(capture_dir=tmp_path), selection="leaf.jpg")
    assert isinstance(platform, DesktopPlatform)
    with pytest.raises(ValueError):
        get_platform(Settings(platform="android"))
