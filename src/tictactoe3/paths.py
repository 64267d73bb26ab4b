"""Centralized path helpers for config and result locations.

Environment-first, with fallbacks that still work when installed as a
package or executed from arbitrary CWDs.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

CONFIG_FILENAME = "ttt3.json"


def _find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(5):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


def repo_root() -> Path:
    """Best-effort repository root.

    Order: env var TTT3_REPO_ROOT -> nearest parent containing .git -> CWD.
    """
    env = os.getenv("TTT3_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path(__file__).resolve())
    if git_root is not None:
        return git_root
    return Path.cwd()


def default_config_path() -> Path | None:
    """Config file to load when none is given explicitly.

    TTT3_CONFIG wins even if the file is missing, so a typo surfaces as an
    error instead of silently falling back to defaults.
    """
    env = os.getenv("TTT3_CONFIG")
    if env:
        return Path(env)
    candidate = repo_root() / CONFIG_FILENAME
    return candidate if candidate.exists() else None


def get_git_commit() -> str | None:
    """Return the current git commit hash if available, else None."""
    root = repo_root()
    try:
        out = subprocess.check_output(
            ["git", "-C", str(root), "rev-parse", "HEAD"],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
        return out.strip() or None
    except (OSError, subprocess.SubprocessError):
        head = root / ".git" / "HEAD"
        try:
            txt = head.read_text().strip()
        except OSError:
            return None
        if txt.startswith("ref:"):
            ref_file = root / ".git" / txt.split()[1]
            return ref_file.read_text().strip() if ref_file.exists() else None
        return txt or None
