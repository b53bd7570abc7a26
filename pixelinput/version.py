"""Build identification: git commit and date of the running code."""

from __future__ import annotations

import importlib.metadata
import json
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

DISTRIBUTION = "pixelinput"


class BuildInfo(NamedTuple):
    commit: Optional[str]
    date: Optional[str]
    dirty: bool


UNKNOWN_BUILD = BuildInfo(commit=None, date=None, dirty=False)


def _git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None
    return out.decode().strip() or None


def from_git_checkout(path: Optional[Path] = None) -> Optional[BuildInfo]:
    """Build info of the git checkout containing ``path``, if any."""
    here = path or Path(__file__).resolve().parent
    root = _git(["rev-parse", "--show-toplevel"], here)
    if not root:
        return None
    commit = _git(["rev-parse", "HEAD"], Path(root))
    date = _git(["show", "-s", "--format=%cI", "HEAD"], Path(root))
    status = _git(["status", "--porcelain"], Path(root))
    return BuildInfo(commit=commit, date=date, dirty=bool(status))


def from_embedded_file() -> Optional[BuildInfo]:
    # Generated at build time by the hatch build hook
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None
    commit = getattr(_build_info, "COMMIT", None)
    date = getattr(_build_info, "DATE", None)
    if commit or date:
        return BuildInfo(commit=commit, date=date, dirty=False)
    return None


def from_direct_url() -> Optional[BuildInfo]:
    # PEP 610 direct_url.json carries the commit when installed from VCS
    try:
        text = importlib.metadata.distribution(DISTRIBUTION).read_text("direct_url.json")
    except importlib.metadata.PackageNotFoundError:
        return None
    if not text:
        return None
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    commit = (data.get("vcs_info") or {}).get("commit_id")
    if commit:
        return BuildInfo(commit=commit, date=None, dirty=False)
    return None


def get_build_info() -> BuildInfo:
    # Priority: live git checkout -> embedded file -> direct_url.json -> unknown
    for getter in (from_git_checkout, from_embedded_file, from_direct_url):
        info = getter()
        if info and (info.commit or info.date):
            return info
    return UNKNOWN_BUILD


def format_version(info: BuildInfo) -> str:
    """Render build info as '<short commit>[-dirty] <date>'."""
    commit = info.commit[:7] if info.commit else "unknown"
    dirty_suffix = "-dirty" if info.dirty else ""
    return f"{commit}{dirty_suffix} {info.date or 'unknown'}"


def get_version_string() -> str:
    return format_version(get_build_info())
