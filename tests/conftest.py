"""Shared fixtures for Flow Auditor tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes a file under tmp_path and returns its path."""

    def _make(rel_path: str, content: str) -> Path:
        path = tmp_path / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _make


@pytest.fixture
def empty_project(tmp_path: Path) -> Path:
    """A project with no auditable source files."""
    project = tmp_path / "empty-project"
    project.mkdir()
    (project / "README.md").write_text("# Empty\n", encoding="utf-8")
    return project


@pytest.fixture
def react_project(tmp_path: Path) -> Path:
    """Create a small React project with a known set of issues."""
    project = tmp_path / "react-app"
    src = project / "src"
    src.mkdir(parents=True)

    (src / "App.jsx").write_text(
        "import React from 'react';\n"
        "import { BrowserRouter, Route } from 'react-router-dom';\n"
        "\n"
        "export default function App() {\n"
        "  return (\n"
        "    <BrowserRouter>\n"
        '      <Route path="/home" element={<Home />} />\n'
        '      <Route path="/about" element={<About />} />\n'
        '      <Route path="/home" element={<Home />} />\n'
        "    </BrowserRouter>\n"
        "  );\n"
        "}\n",
        encoding="utf-8",
    )
    (src / "api.js").write_text(
        "export async function loadItems() {\n"
        "  try {\n"
        "    const res = await fetch('/api/items');\n"
        "    return res.json();\n"
        "  } catch (e) {\n"
        "    return [];\n"
        "  }\n"
        "}\n",
        encoding="utf-8",
    )
    (src / "debug.js").write_text(
        "console.log('debug');\n"
        "const x = eval(userInput);\n",
        encoding="utf-8",
    )
    (src / "styles.css").write_text(
        ".card {\n"
        "  width: 300px;\n"
        "}\n",
        encoding="utf-8",
    )

    public = project / "public"
    public.mkdir()
    (public / "index.html").write_text(
        "<html><head><title>App</title></head><body></body></html>\n",
        encoding="utf-8",
    )

    # Never scanned
    vendored = project / "node_modules" / "left-pad"
    vendored.mkdir(parents=True)
    (vendored / "index.js").write_text("console.log('vendored');\n", encoding="utf-8")
    (project / "notes.md").write_text("console.log('in markdown')\n", encoding="utf-8")
    return project
