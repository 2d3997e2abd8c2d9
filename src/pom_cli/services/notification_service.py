"""Best-effort desktop notifications."""

from __future__ import annotations

import platform
import shutil
import subprocess


class NotificationError(Exception):
    """Raised when a notification could not be delivered."""


class Notifier:
    """Sends desktop notifications with ``osascript`` or ``notify-send``."""

    def __init__(self, timeout: float = 5.0):
        self.timeout = timeout

    def notify(self, title: str, message: str) -> None:
        """Show a notification.

        Raises:
            NotificationError: if the platform has no supported tool or the
                tool failed.
        """
        command = self._build_command(title, message)
        try:
            result = subprocess.run(
                command,
                check=False,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise NotificationError(f"{command[0]} failed: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or b"").decode("utf-8", errors="replace").strip()
            raise NotificationError(
                f"{command[0]} exited with status {result.returncode}: {stderr}"
            )

    def _build_command(self, title: str, message: str) -> list[str]:
        system_name = platform.system().lower()
        if system_name == "darwin" and shutil.which("osascript"):
            script = (
                "display notification "
                f'"{self._escape(message)}" with title "{self._escape(title)}"'
            )
            return ["osascript", "-e", script]
        if system_name == "linux" and shutil.which("notify-send"):
            return ["notify-send", title, message]
        raise NotificationError(f"no notification tool available on {system_name}")

    @staticmethod
    def _escape(text: str) -> str:
        return text.replace("\\", "\\\\").replace('"', '\\"')
