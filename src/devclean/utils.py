"""Shared utility functions."""

from __future__ import annotations

import logging
import os
import platform
import shutil
import stat
from datetime import datetime, timezone
from pathlib import Path

log = logging.getLogger(__name__)


def has_command(name: str) -> bool:
    """Check if a command exists on the system."""
    return shutil.which(name) is not None


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def xdg_data_home() -> Path:
    """Return XDG_DATA_HOME, defaulting to ~/.local/share."""
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def dev_directories(extra: list[str] | None = None) -> list[Path]:
    """Return the usual developer directories under the home folder that exist.

    Extra roots (e.g. from settings) are appended after the defaults;
    duplicates are dropped while keeping the first occurrence.
    """
    home = Path.home()
    candidates = [
        home / "Downloads",
        home / "Desktop",
        home / "Documents",
        home / "Projects",
        home / "Code",
        home / "workspace",
    ]
    if platform.system() == "Darwin":
        candidates.append(home / "Developer")
    candidates.extend(Path(p).expanduser() for p in extra or [])

    roots: list[Path] = []
    for path in candidates:
        if path.is_dir() and path not in roots:
            roots.append(path)
    return roots


def dir_size(path: Path | str) -> int:
    """Calculate total size of a directory tree.

    Symlinks are followed. Every directory and file is keyed by
    ``(st_dev, st_ino)`` so a cyclic link cannot loop forever and a
    hard-linked file is only counted once.  Entries that cannot be read
    are left out of the total.
    """
    total = 0
    seen: set[tuple[int, int]] = set()

    try:
        st = os.stat(path)
    except OSError:
        log.debug("Cannot stat: %s", path)
        return 0
    seen.add((st.st_dev, st.st_ino))

    stack: list[Path | str] = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        est = entry.stat()
                    except OSError:
                        log.debug("Cannot stat: %s", entry.path)
                        continue
                    key = (est.st_dev, est.st_ino)
                    if key in seen:
                        continue
                    seen.add(key)
                    if stat.S_ISDIR(est.st_mode):
                        stack.append(entry.path)
                    else:
                        total += est.st_size
        except OSError:
            log.debug("Cannot read directory: %s", current)
    return total


def months_ago(months: int, now: datetime | None = None) -> datetime:
    """Return the moment ``months`` calendar months before ``now``.

    The day of month is clamped, so 31 May minus three months is 28/29 Feb.
    A naive ``now`` is taken as local time and converted to UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.astimezone(timezone.utc)
    month_index = now.year * 12 + (now.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    if month == 12:
        next_month = datetime(year + 1, 1, 1)
    else:
        next_month = datetime(year, month + 1, 1)
    last_day = (next_month - datetime(year, month, 1)).days
    return now.replace(year=year, month=month, day=min(now.day, last_day))


def is_older_than(path: Path | str, months: int, now: datetime | None = None) -> bool:
    """Check whether ``path`` was last modified more than ``months`` ago.

    A path that cannot be stat'ed counts as freshly modified.
    """
    try:
        mtime = os.stat(path).st_mtime
    except OSError:
        return False
    cutoff = months_ago(months, now)
    return datetime.fromtimestamp(mtime, timezone.utc) < cutoff


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string."""
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes == 0:
        return "0 B"

    units = ("B", "KB", "MB", "GB", "TB")
    value = float(size_bytes)
    for unit in units[:-1]:
        if abs(value) < 1024:
            return f"{value:.1f} {unit}" if unit != "B" else f"{int(value)} B"
        value /= 1024
    return f"{value:.1f} {units[-1]}"


def format_relative_time(iso_timestamp: str) -> str:
    """Format an ISO timestamp as relative time ('2 hours ago')."""
    dt = datetime.fromisoformat(iso_timestamp)
    seconds = int((datetime.now(timezone.utc) - dt).total_seconds())

    if seconds < 60:
        return "just now"
    if seconds < 3600:
        m = seconds // 60
        return f"{m} minute{'s' if m != 1 else ''} ago"
    if seconds < 86400:
        h = seconds // 3600
        return f"{h} hour{'s' if h != 1 else ''} ago"
    d = seconds // 86400
    if d < 30:
        return f"{d} day{'s' if d != 1 else ''} ago"
    mo = d // 30
    if mo < 12:
        return f"{mo} month{'s' if mo != 1 else ''} ago"
    y = d // 365
    return f"{y} year{'s' if y != 1 else ''} ago"
