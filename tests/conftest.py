"""Shared fixtures for dir2prompt tests."""

import pytest


@pytest.fixture
def project_dir(tmp_path):
    """Create a small project tree.

    Layout::

        docs/readme.md
        src/main.py
        src/utils/helpers.py
        src/utils/notes.txt
        Zeta.py
        a.txt
        b.log
    """
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "readme.md").write_text("# Docs")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.py").write_text("print('main')")
    (tmp_path / "src" / "utils").mkdir()
    (tmp_path / "src" / "utils" / "helpers.py").write_text("def helper(): pass")
    (tmp_path / "src" / "utils" / "notes.txt").write_text("notes")
    (tmp_path / "Zeta.py").write_text("")
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b.log").write_text("b")
    return tmp_path
