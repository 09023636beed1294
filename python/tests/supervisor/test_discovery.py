"""Unit tests for executable discovery."""

import os
from unittest.mock import patch

from neo_jupyter.supervisor import discovery
from neo_jupyter.supervisor.discovery import (
    JUPYTER_CANDIDATES,
    PYTHON_CANDIDATES,
    find_jupyter_executable,
    find_path,
    find_python,
)


class TestFindPath:
    """Test the generic candidate probe."""

    def test_returns_first_existing(self, tmp_path):
        first = tmp_path / "a"
        second = tmp_path / "b"
        first.touch()
        second.touch()

        assert find_path([str(first), str(second)]) == str(first)

    def test_skips_missing_candidates(self, tmp_path):
        missing = tmp_path / "a"
        present = tmp_path / "b"
        present.touch()

        assert find_path([str(missing), str(present)]) == str(present)

    def test_none_when_nothing_exists(self, tmp_path):
        assert find_path([str(tmp_path / "a"), str(tmp_path / "b")]) is None

    def test_empty_candidate_list(self):
        assert find_path([]) is None

    def test_expands_environment_variables(self, tmp_path):
        target = tmp_path / ".local" / "bin" / "jupyter"
        target.parent.mkdir(parents=True)
        target.touch()

        with patch.dict(os.environ, {"HOME": str(tmp_path)}):
            assert find_path(["${HOME}/.local/bin/jupyter"]) == str(target)

    def test_does_not_execute_candidates(self, tmp_path):
        """A plain, non-executable file still counts as found."""
        target = tmp_path / "jupyter"
        target.write_text("not a program")
        os.chmod(target, 0o600)

        assert find_path([str(target)]) == str(target)


class TestProbes:
    """Test the python and jupyter probes."""

    def test_candidate_order(self):
        assert PYTHON_CANDIDATES == ["/usr/bin/python3", "/usr/bin/python"]
        assert JUPYTER_CANDIDATES == [
            "${HOME}/.local/bin/jupyter",
            "/home/${USER}/.local/bin/jupyter",
            "/usr/local/bin/jupyter",
        ]

    def test_find_python_uses_python_candidates(self, tmp_path):
        python = tmp_path / "python3"
        python.touch()

        with patch.object(discovery, "PYTHON_CANDIDATES", ["/nonexistent", str(python)]):
            assert find_python() == str(python)

    def test_find_jupyter_prefers_home_install(self, tmp_path):
        home_jupyter = tmp_path / ".local" / "bin" / "jupyter"
        home_jupyter.parent.mkdir(parents=True)
        home_jupyter.touch()

        with patch.dict(os.environ, {"HOME": str(tmp_path)}):
            assert find_jupyter_executable() == str(home_jupyter)

    def test_find_jupyter_not_found(self, tmp_path):
        with patch.object(discovery, "JUPYTER_CANDIDATES", [str(tmp_path / "jupyter")]):
            assert find_jupyter_executable() is None
