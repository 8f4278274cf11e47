"""Local opencode process management for the PROVIDER section."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from pathlib import Path
from typing import Sequence

from oc_common.errors import ServiceError

logger = logging.getLogger(__name__)

PID_FILE_NAME = "provider.pid"


class ProcessProvider:
    """Start, stop and toggle an ``opencode`` server process.

    The pid of the started process is kept in ``state_dir`` so a later
    invocation can stop it.
    """

    def __init__(self, cmd: Sequence[str], port: int, state_dir: Path) -> None:
        if not cmd:
            raise ServiceError("Provider command is empty")
        self.cmd = list(cmd)
        self.port = port
        self.state_dir = Path(state_dir).expanduser()

    @property
    def pid_file(self) -> Path:
        return self.state_dir / PID_FILE_NAME

    def _read_pid(self) -> int | None:
        try:
            return int(self.pid_file.read_text().strip())
        except (OSError, ValueError):
            return None

    def _alive(self, pid: int) -> bool:
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            return False
        except PermissionError:
            return True
        return True

    def running_pid(self) -> int | None:
        pid = self._read_pid()
        if pid is None:
            return None
        if not self._alive(pid):
            self.pid_file.unlink(missing_ok=True)
            return None
        return pid

    def is_running(self) -> bool:
        return self.running_pid() is not None

    def start(self) -> int:
        pid = self.running_pid()
        if pid is not None:
            logger.info("opencode already running (pid %s)", pid)
            return pid
        command = [*self.cmd, "--port", str(self.port)]
        try:
            proc = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            raise ServiceError(
                f"Failed to start {command[0]}", context={"cmd": command}, cause=exc
            ) from exc
        self.state_dir.mkdir(parents=True, exist_ok=True)
        self.pid_file.write_text(str(proc.pid))
        logger.info("Started opencode (pid %s) on port %s", proc.pid, self.port)
        return proc.pid

    def stop(self) -> bool:
        pid = self.running_pid()
        if pid is None:
            logger.info("opencode is not running")
            return False
        try:
            os.kill(pid, signal.SIGTERM)
        except ProcessLookupError:
            pass
        except PermissionError as exc:
            raise ServiceError(
                f"Not allowed to stop opencode (pid {pid})", context={"pid": pid}, cause=exc
            ) from exc
        self.pid_file.unlink(missing_ok=True)
        logger.info("Stopped opencode (pid %s)", pid)
        return True

    def toggle(self) -> None:
        if self.is_running():
            self.stop()
        else:
            self.start()
