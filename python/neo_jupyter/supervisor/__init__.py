"""
Process supervision for a local JupyterLab server.

This module locates a python interpreter and a jupyter executable, runs
JupyterLab as a single child process and shuts it down gracefully on request.
"""

from .discovery import find_jupyter_executable, find_path, find_python
from .models import (
    ConfigurationError,
    LabOptions,
    SupervisorConfig,
    parse_environment_variables,
    resolve_notebook_dir,
)
from .process import JupyterLabSupervisor, ProcessState

__all__ = [
    "JupyterLabSupervisor",
    "ProcessState",
    "LabOptions",
    "SupervisorConfig",
    "ConfigurationError",
    "parse_environment_variables",
    "resolve_notebook_dir",
    "find_path",
    "find_python",
    "find_jupyter_executable",
]
