"""Supervisor for a local JupyterLab server.

The supervisor lives in the ``supervisor`` submodule:
- from .supervisor import JupyterLabSupervisor, find_python, find_jupyter_executable
"""

__version__ = "0.1.0"
