#!/usr/bin/env python3
"""
neo-jupyter CLI Script

Runs JupyterLab under supervision until the supervisor itself receives
SIGINT or SIGTERM, then shuts the server down gracefully.

Usage:
    neo-jupyter [-pid <path>] [--log-level LEVEL]

Example:
    MACHBASE_NEO_FILE=/data/notebooks neo-jupyter -pid /run/neo-jupyter.pid
"""

import argparse
import logging
import os
import signal
import sys
import threading
from typing import Any, Dict, List, Optional

from neo_jupyter.logging_config import get_logger, parse_level
from neo_jupyter.supervisor.discovery import find_jupyter_executable, find_python
from neo_jupyter.supervisor.models import (
    DEFAULT_PID_FILE,
    ConfigurationError,
    parse_environment_variables,
)
from neo_jupyter.supervisor.process import JupyterLabSupervisor

HANDLED_SIGNALS = (signal.SIGTERM, signal.SIGINT)


class SignalHandler:
    """Turn SIGTERM/SIGINT into a shutdown request for the main thread."""

    def __init__(self, supervisor: JupyterLabSupervisor, logger: logging.Logger):
        self.supervisor = supervisor
        self.logger = logger
        self._original_handlers: Dict[int, Any] = {}
        self._received = threading.Event()
        self.signum: Optional[int] = None

    def setup(self) -> None:
        """Install handlers, remembering the ones they replace."""
        for signum in HANDLED_SIGNALS:
            self._original_handlers[signum] = signal.signal(signum, self._handle)

    def _handle(self, signum: int, frame: Any) -> None:
        self.signum = signum
        self._received.set()

    def wait(self, poll_interval: float = 0.5) -> int:
        """Block until a handled signal arrives and return its number."""
        # Timed waits keep the main thread responsive to signal delivery
        while not self._received.wait(poll_interval):
            pass
        return self.signum

    def shutdown(self) -> None:
        """Log and stop the supervised process."""
        self.logger.info("stopping...")
        self.supervisor.stop()

    def restore(self) -> None:
        for signum, handler in self._original_handlers.items():
            signal.signal(signum, handler)
        self._original_handlers.clear()


class NeoJupyter:
    """Entry point tying discovery, supervision and signal handling together."""

    def __init__(self):
        self.logger = get_logger(__name__)

    def parse_arguments(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        parser = argparse.ArgumentParser(
            prog="neo-jupyter", description="Run JupyterLab under supervision"
        )
        parser.add_argument(
            "-pid",
            "--pid",
            dest="pid",
            default=DEFAULT_PID_FILE,
            help=f"pid file (default: {DEFAULT_PID_FILE})",
        )
        parser.add_argument(
            "--log-level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR"],
            help="Log level (overrides LOG_LEVEL)",
        )
        return parser.parse_args(argv)

    def write_pid_file(self, path: str) -> None:
        """Write this process's id as decimal text."""
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(str(os.getpid()))
            self.logger.debug(f"Wrote pid file '{path}'")
        except OSError as e:
            self.logger.error(f"Failed to write pid file '{path}': {e}")

    def run(self, argv: Optional[List[str]] = None) -> int:
        args = self.parse_arguments(argv)

        try:
            config = parse_environment_variables()
        except ConfigurationError as e:
            print(f"ERROR: Configuration error: {e}", file=sys.stderr)
            return 1

        self.logger.setLevel(parse_level(args.log_level or config.log_level))
        config.pid_file = args.pid

        python_bin = find_python()
        if not python_bin:
            print("ERROR: python not found", file=sys.stderr)
            return 1
        jupyter_bin = find_jupyter_executable()
        if not jupyter_bin:
            print("ERROR: jupyter not found", file=sys.stderr)
            return 1

        supervisor = JupyterLabSupervisor(
            python_bin,
            jupyter_bin,
            notebook_dir=config.notebook_dir,
            stop_poll_interval=config.stop_poll_interval,
            stop_timeout=config.stop_timeout,
            logger=self.logger,
        )
        supervisor.start()

        self.write_pid_file(config.pid_file)

        signal_handler = SignalHandler(supervisor, self.logger)
        signal_handler.setup()
        try:
            self.logger.info("started, press ctrl+c to stop...")
            signal_handler.wait()
            signal_handler.shutdown()
        finally:
            signal_handler.restore()

        return 0


def main() -> int:
    """Main entry point for the neo-jupyter CLI."""
    return NeoJupyter().run()


if __name__ == "__main__":
    sys.exit(main())
