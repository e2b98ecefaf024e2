"""Version string for ``indentnav --version``."""

from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import Optional


def _installed_version() -> Optional[str]:
    try:
        return importlib.metadata.version("indentnav")
    except importlib.metadata.PackageNotFoundError:
        return None


def _checkout_root(package_dir: Optional[Path] = None) -> Optional[Path]:
    """Project root when the package runs from its own git checkout."""
    here = package_dir or Path(__file__).resolve().parent
    root = here.parent
    # An enclosing repository (e.g. a venv inside another project) does not count
    if not (root / ".git").exists():
        return None
    return root


def _git_commit(package_dir: Optional[Path] = None) -> Optional[str]:
    root = _checkout_root(package_dir)
    if root is None:
        return None
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short=7", "HEAD"],
            cwd=str(root),
            stderr=subprocess.DEVNULL,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode().strip() or None


def get_version_string() -> str:
    version = _installed_version() or "unknown"
    commit = _git_commit()
    return f"{version} ({commit})" if commit else version
