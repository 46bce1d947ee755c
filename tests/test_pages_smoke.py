"""Smoke tests for Streamlit pages.

These tests compile the entry point and each page file to catch syntax
errors.  They do not start a Streamlit server or execute the pages.
"""

from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
PAGES = sorted((ROOT / "pages").glob("*.py"))


def test_pages_present():
    assert len(PAGES) == 5


@pytest.mark.parametrize("path", [ROOT / "app.py"] + PAGES, ids=lambda p: p.name)
def test_compiles(path):
    source = path.read_text(encoding="utf-8")
    compile(source, str(path), "exec")
    assert "def page()" in source or "def main()" in source
