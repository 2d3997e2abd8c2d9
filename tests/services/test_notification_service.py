"""Tests for the desktop notifier."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock

import pytest

from pom_cli.services.notification_service import NotificationError, Notifier


def _patch_platform(mocker, system: str, tool: str | None):
    mocker.patch(
        "pom_cli.services.notification_service.platform.system", return_value=system
    )
    mocker.patch(
        "pom_cli.services.notification_service.shutil.which",
        side_effect=lambda name: f"/usr/bin/{name}" if name == tool else None,
    )


def _completed(returncode=0, stderr=b""):
    result = MagicMock()
    result.returncode = returncode
    result.stderr = stderr
    return result


class TestNotifier:
    def test_linux_uses_notify_send(self, mocker):
        _patch_platform(mocker, "Linux", "notify-send")
        run = mocker.patch("subprocess.run", return_value=_completed())

        Notifier().notify("Pomodoro", "Break is over.")

        assert run.call_args[0][0] == ["notify-send", "Pomodoro", "Break is over."]

    def test_macos_uses_osascript_with_escaping(self, mocker):
        _patch_platform(mocker, "Darwin", "osascript")
        run = mocker.patch("subprocess.run", return_value=_completed())

        Notifier().notify('Say "hi"', "done")

        command = run.call_args[0][0]
        assert command[:2] == ["osascript", "-e"]
        assert 'with title "Say \\"hi\\""' in command[2]
        assert 'display notification "done"' in command[2]

    def test_no_tool_available(self, mocker):
        _patch_platform(mocker, "Linux", None)
        run = mocker.patch("subprocess.run")

        with pytest.raises(NotificationError, match="no notification tool"):
            Notifier().notify("t", "m")
        run.assert_not_called()

    def test_unsupported_platform(self, mocker):
        _patch_platform(mocker, "Windows", None)
        with pytest.raises(NotificationError):
            Notifier().notify("t", "m")

    def test_non_zero_exit(self, mocker):
        _patch_platform(mocker, "Linux", "notify-send")
        mocker.patch(
            "subprocess.run", return_value=_completed(1, b"no dbus session")
        )
        with pytest.raises(NotificationError, match="no dbus session"):
            Notifier().notify("t", "m")

    def test_timeout(self, mocker):
        _patch_platform(mocker, "Linux", "notify-send")
        mocker.patch(
            "subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="notify-send", timeout=5),
        )
        with pytest.raises(NotificationError):
            Notifier().notify("t", "m")
