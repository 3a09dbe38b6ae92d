"""Clearing of JavaScript package manager caches."""

from __future__ import annotations

import logging
import subprocess

from devclean.utils import has_command

log = logging.getLogger(__name__)

PACKAGE_MANAGERS: dict[str, list[str]] = {
    "npm": ["npm", "cache", "clean", "--force"],
    "yarn": ["yarn", "cache", "clean"],
    "pnpm": ["pnpm", "store", "prune"],
}


def available_managers() -> list[str]:
    """Return the package managers installed on this system."""
    return [name for name in PACKAGE_MANAGERS if has_command(name)]


def clear_cache(manager: str) -> bool:
    """Run the cache clean command of ``manager``. Returns True on success."""
    try:
        cmd = PACKAGE_MANAGERS[manager]
    except KeyError:
        raise ValueError(f"Unknown package manager: {manager!r}") from None

    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=300)
    except (OSError, subprocess.TimeoutExpired) as e:
        log.warning("Failed to clear %s cache: %s", manager, e)
        return False

    if proc.returncode != 0:
        log.warning("Failed to clear %s cache: %s", manager, proc.stderr.strip())
        return False
    log.info("Cleared %s cache", manager)
    return True
