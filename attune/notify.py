"""Best-effort user notifications for finished intervals."""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Optional

from attune.display import print_notification

log = logging.getLogger(__name__)


class ConsoleNotifier:
    """Show notifications as a panel in the terminal."""

    def request_notification(self, title: str, body: str) -> None:
        print_notification(title, body)


class DesktopNotifier:
    """Send desktop notifications through ``notify-send``.

    Permission is settled once, on the first request: it is granted when the
    ``notify-send`` binary can be found. Without permission requests are
    dropped quietly.
    """

    def __init__(self, binary: str = "notify-send") -> None:
        self.binary = binary
        self._granted: Optional[bool] = None
        self._path: Optional[str] = None

    @property
    def permission_granted(self) -> bool:
        if self._granted is None:
            self._path = shutil.which(self.binary)
            self._granted = self._path is not None
            if not self._granted:
                log.info("%s not found; desktop notifications disabled.", self.binary)
        return self._granted

    def request_notification(self, title: str, body: str) -> None:
        if not self.permission_granted:
            return
        try:
            subprocess.run(
                [self._path or self.binary, "--app-name=Attune", title, body],
                check=False,
                capture_output=True,
                timeout=5,
            )
        except (OSError, subprocess.SubprocessError):
            log.debug("notify-send failed", exc_info=True)
