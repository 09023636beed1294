"""
Lifecycle management for the supervised JupyterLab process.

The supervisor owns at most one child process. ``start`` and ``stop`` hold a
lifecycle lock for their whole duration, so they never overlap. The process
handle is guarded by a separate condition: the exit watcher thread reports
back through a future (spawn result) and that condition (exit), so the handle
is only ever touched while the condition's lock is held.
"""

import logging
import os
import signal
import subprocess
import threading
import time
from concurrent.futures import Future
from enum import Enum
from typing import List, Optional

from ..logging_config import get_logger
from .models import LabOptions


class ProcessState(str, Enum):
    """Lifecycle states of the supervised process.

    A child that exits on its own goes straight from RUNNING to IDLE; the
    watcher clears the handle in one step, so no STOPPING phase is visible.
    """

    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"


def describe_exit(returncode: int) -> str:
    """Human readable exit status, naming the signal for signal deaths."""
    if returncode < 0:
        try:
            name = signal.Signals(-returncode).name
        except ValueError:
            name = f"signal {-returncode}"
        return f"killed by {name}"
    return f"exit status {returncode}"


class JupyterLabSupervisor:
    """Start and stop a single JupyterLab server."""

    def __init__(
        self,
        python_bin: str,
        jupyter_bin: str,
        notebook_dir: str = ".",
        options: Optional[LabOptions] = None,
        stop_poll_interval: float = 0.1,
        stop_timeout: float = 5.0,
        logger: Optional[logging.Logger] = None,
    ):
        self.python_bin = python_bin
        self.jupyter_bin = jupyter_bin
        self.notebook_dir = notebook_dir
        self.options = options or LabOptions()
        self.stop_poll_interval = stop_poll_interval
        self.stop_timeout = stop_timeout
        self.logger = logger or get_logger(__name__)

        self._lifecycle = threading.Lock()
        self._cond = threading.Condition(threading.Lock())
        self._process: Optional[subprocess.Popen] = None
        self._state = ProcessState.IDLE

    @property
    def state(self) -> ProcessState:
        with self._cond:
            return self._state

    @property
    def pid(self) -> Optional[int]:
        with self._cond:
            return self._process.pid if self._process is not None else None

    @property
    def is_running(self) -> bool:
        with self._cond:
            return self._process is not None

    def build_command(self) -> List[str]:
        """Full argument vector of the child process."""
        return [
            self.python_bin,
            self.jupyter_bin,
            *self.options.to_args(self.notebook_dir),
        ]

    def start(self) -> None:
        """Launch JupyterLab unless it is already running.

        Blocks until the spawn itself succeeds or fails, never until the
        child exits. Failures are logged, not raised.
        """
        with self._lifecycle, self._cond:
            if self._process is not None:
                self.logger.debug("Start requested but process already running")
                return

            self._state = ProcessState.STARTING
            spawned: "Future[subprocess.Popen]" = Future()
            watcher = threading.Thread(
                target=self._watch,
                args=(self.build_command(), spawned),
                name="jupyter-watcher",
                daemon=True,
            )
            watcher.start()

            try:
                process = spawned.result()
            except Exception as e:
                self._state = ProcessState.IDLE
                self.logger.error(
                    f"Failed to start: cmd='{self.jupyter_bin}' error: {e}"
                )
                return

            self._process = process
            self._state = ProcessState.RUNNING
            self.logger.info(f"JupyterLab started with pid {process.pid}")

    def _watch(self, command: List[str], spawned: "Future[subprocess.Popen]") -> None:
        """Spawn the child, then wait for it to exit and clear the handle."""
        try:
            # New session: the child leads its own process group, so stop()
            # can signal the whole server tree.
            process = subprocess.Popen(command, start_new_session=True)
        except Exception as e:
            spawned.set_exception(e)
            return
        spawned.set_result(process)

        returncode = process.wait()
        if returncode == 0:
            self.logger.info("JupyterLab exited with status 0")
        else:
            self.logger.error(f"JupyterLab failed: {describe_exit(returncode)}")

        with self._cond:
            # start() may still hold the handle lock; it records the handle
            # before releasing, so compare identity before clearing.
            if self._process is process:
                self._process = None
                self._state = ProcessState.IDLE
            self._cond.notify_all()

    def stop(self) -> None:
        """Interrupt JupyterLab and wait a bounded time for it to exit.

        Returns normally on timeout; the process is not killed.
        """
        with self._lifecycle, self._cond:
            process = self._process
            if process is None:
                return

            self._state = ProcessState.STOPPING
            self.logger.info(f"Sending SIGINT to JupyterLab (pid {process.pid})")
            self._send_interrupt(process)

            deadline = time.monotonic() + self.stop_timeout
            while self._process is process:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    self.logger.error(
                        f"Timeout: JupyterLab did not exit within {self.stop_timeout}s"
                    )
                    return
                # Releases the handle lock, not the lifecycle lock, so the
                # watcher can clear the handle while start() keeps waiting
                self._cond.wait(min(self.stop_poll_interval, remaining))

            self.logger.info("JupyterLab stopped")

    def _send_interrupt(self, process: subprocess.Popen) -> None:
        try:
            os.killpg(os.getpgid(process.pid), signal.SIGINT)
        except ProcessLookupError:
            # Group already gone; the watcher will observe the exit
            self.logger.debug(f"Process group of pid {process.pid} not found")
        except PermissionError:
            process.send_signal(signal.SIGINT)
