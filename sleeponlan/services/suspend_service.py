"""Suspend action — shells out to the platform suspend mechanism."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

logger = logging.getLogger(__name__)


class SuspendService:
    """Runs the configured suspend command (``systemctl suspend`` by default).

    Failures are logged and reported through the return value of
    :meth:`suspend`; they never propagate to the receive loop.
    """

    def __init__(
        self,
        command: Sequence[str] = ("systemctl", "suspend"),
        timeout: float | None = 30.0,
        dry_run: bool = False,
    ):
        self._command = list(command)
        self._timeout = timeout
        self._dry_run = dry_run

    @property
    def command(self) -> list[str]:
        return list(self._command)

    def suspend(self) -> bool:
        """Run the suspend command. Returns True on success, False on failure."""
        if self._dry_run:
            logger.info("[DEV] System suspend (not executed): %s", " ".join(self._command))
            return True

        try:
            result = subprocess.run(
                self._command,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError:
            logger.error("Failed to suspend system: %s not found", self._command[0])
            return False
        except subprocess.TimeoutExpired:
            logger.error(
                "Failed to suspend system: %s timed out after %ss",
                " ".join(self._command), self._timeout,
            )
            return False
        except OSError as e:
            logger.error("Failed to suspend system: %s", e)
            return False

        if result.returncode != 0:
            logger.error(
                "%s failed (exit %d): %s",
                " ".join(self._command), result.returncode, result.stderr.strip(),
            )
            return False

        logger.info("System suspend initiated")
        return True

    def __call__(self) -> None:
        self.suspend()
