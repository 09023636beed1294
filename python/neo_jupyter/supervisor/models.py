"""Configuration management for the JupyterLab supervisor."""

import os
from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..logging_config import get_logger

logger = get_logger(__name__)

NOTEBOOK_DIR_ENV = "MACHBASE_NEO_FILE"
DEFAULT_PID_FILE = "neo-jupyter.pid"
DEFAULT_BASE_URL = "/web/apps/neo-jupyter/base/"

# Names logging.Logger.setLevel understands; numeric levels are accepted too
ALLOWED_LOG_LEVELS = [
    "debug",
    "info",
    "warning",
    "warn",
    "error",
    "critical",
    "fatal",
    "notset",
]


class ConfigurationError(Exception):
    """Exception raised for configuration validation errors."""

    pass


class LabOptions(BaseModel):
    """Fixed command-line surface of the JupyterLab child process."""

    mode: str = "lab"
    answer_yes: bool = True
    no_browser: bool = True
    ip: str = "127.0.0.1"
    port: int = Field(default=8888, ge=1, le=65535)
    base_url: str = DEFAULT_BASE_URL
    allow_remote_access: bool = True
    token: str = ""

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        if not value.startswith("/") or not value.endswith("/"):
            raise ValueError(f"base_url must start and end with '/', got '{value}'")
        return value

    def to_args(self, notebook_dir: str) -> List[str]:
        """Render the options as arguments following the jupyter executable."""
        args = [self.mode]
        if self.answer_yes:
            args.append("-y")
        if self.no_browser:
            args.append("--no-browser")
        args.extend(["--notebook-dir", notebook_dir])
        args.append(f"--ip={self.ip}")
        args.append(f"--port={self.port}")
        args.append(f"--ServerApp.base_url={self.base_url}")
        args.append(f"--ServerApp.allow_remote_access={self.allow_remote_access}")
        # An empty token disables authentication
        args.append(f"--LabApp.token='{self.token}'")
        return args


@dataclass
class SupervisorConfig:
    """Runtime settings for the supervisor.

    Attributes:
        notebook_dir: Working directory handed to JupyterLab
        pid_file: File receiving the supervisor's own process id
        stop_poll_interval: Seconds between exit checks while stopping
        stop_timeout: Seconds to wait for the child to exit after SIGINT
        log_level: Logging level for the package logger
    """

    notebook_dir: str = "."
    pid_file: str = DEFAULT_PID_FILE
    stop_poll_interval: float = 0.1
    stop_timeout: float = 5.0
    log_level: str = "info"


def resolve_notebook_dir(value: Optional[str]) -> str:
    """Return the first path-list token of ``value``, or the current directory."""
    if not value:
        return "."
    first = value.split(os.pathsep)[0]
    return first or "."


def _get_env_str(name: str, default: str, allowed: Optional[list] = None) -> str:
    """Get string from environment with validation."""
    value = os.getenv(name, default).strip()
    if allowed and value.lower() not in allowed:
        raise ConfigurationError(f"{name} must be one of {allowed}, got '{value}'")
    return value


def _get_env_log_level() -> str:
    """Get the log level from NEO_JUPYTER_LOG_LEVEL or LOG_LEVEL with validation.

    Accepts the same values as the package logger: level names and numbers.
    """
    name = "NEO_JUPYTER_LOG_LEVEL"
    if not os.getenv(name):
        name = "LOG_LEVEL"
    value = os.getenv(name, "info").strip()
    if value.isdigit():
        return value
    return _get_env_str(name, "info", ALLOWED_LOG_LEVELS).lower()


def parse_environment_variables() -> SupervisorConfig:
    """Parse environment variables and return SupervisorConfig instance."""
    try:
        notebook_dir = resolve_notebook_dir(os.getenv(NOTEBOOK_DIR_ENV))
        logger.debug(f"Notebook directory resolved to '{notebook_dir}'")

        return SupervisorConfig(
            notebook_dir=notebook_dir,
            log_level=_get_env_log_level(),
        )
    except ConfigurationError as e:
        logger.error(f"Configuration validation failed: {e}")
        raise
