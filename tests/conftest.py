"""Test configuration and fixtures for llmview."""

from pathlib import Path
from typing import Dict, Union

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


def build_files(root: Path, files: Dict[str, Union[str, bytes]]) -> Path:
    """Create files (and their parent directories) below root from a path -> content mapping."""
    for relative_path, content in files.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
    return root


@pytest.fixture
def make_files(tmp_path):
    """Factory fixture creating a file layout inside tmp_path."""

    def _make_files(files: Dict[str, Union[str, bytes]]) -> Path:
        return build_files(tmp_path, files)

    return _make_files


@pytest.fixture
def flask_project(tmp_path):
    """A small Flask project with a backend, its migrations and some docs."""
    return build_files(
        tmp_path / "flask_app",
        {
            "backend/main.py": "from flask import Flask\n\napp = Flask(__name__)\n",
            "backend/models.py": "class User:\n    pass\n",
            "backend/migrations/001_init.sql": "CREATE TABLE users (id INTEGER PRIMARY KEY);\n",
            "docs/style_guide.md": "# Style guide\n\nUse black.\n",
            "docs/roadmap.md": "# Roadmap\n",
            "frontend/app.ts": "export const app = 1;\n",
            ".gitignore": "*.log\n",
            "server.log": "GET / 200\n",
        },
    )
