"""Pytest configuration and shared fixtures for iconx tests.

This module provides an auto-use fixture that keeps ICONX_* environment
variables from leaking into tests, and helpers for building fake icon trees.
"""

import os

import pytest


ICONX_ENV_VARS = (
    'ICONX_REPO_URL',
    'ICONX_CLONE_DIR',
    'ICONX_ICONS_DIR',
    'ICONX_OUTPUT_DIR',
    'ICONX_MAX_WORKERS',
    'ICONX_LOG_LEVEL',
)


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Auto-use fixture that clears ICONX_* variables for each test."""
    for name in ICONX_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def write_svg(path, body: str = '') -> str:
    """Write a small SVG file, creating parent directories. Returns the path as str."""
    path = str(path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    content = body or f'<svg xmlns="http://www.w3.org/2000/svg"><!-- {os.path.basename(path)} --></svg>'
    with open(path, 'w') as f:
        f.write(content)
    return path


@pytest.fixture
def icon_tree(tmp_path):
    """Create a devicon-like tree with a mix of naming conventions.

    icons/
      react/      react-original.svg, react-plain.svg, react-line.svg
      go/         icon.svg, go.svg
      python/     python-line.svg, python-plain.svg
      rust/       nested/deep/rust-mark.svg
      empty/      README.md (no SVGs)
      README.md   (top-level file, not a technology)
    """
    root = tmp_path / 'icons'
    write_svg(root / 'react' / 'react-original.svg')
    write_svg(root / 'react' / 'react-plain.svg')
    write_svg(root / 'react' / 'react-line.svg')
    write_svg(root / 'go' / 'icon.svg')
    write_svg(root / 'go' / 'go.svg')
    write_svg(root / 'python' / 'python-plain.svg')
    write_svg(root / 'python' / 'python-line.svg')
    write_svg(root / 'rust' / 'nested' / 'deep' / 'rust-mark.svg')
    (root / 'empty').mkdir()
    (root / 'empty' / 'README.md').write_text('no icons here\n')
    (root / 'README.md').write_text('top level\n')
    return root


@pytest.fixture
def output_dir(tmp_path):
    """An existing, empty output directory."""
    out = tmp_path / 'out'
    out.mkdir()
    return out


@pytest.fixture
def make_svg():
    """Fixture giving tests the write_svg helper."""
    return write_svg
