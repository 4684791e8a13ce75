import logging
import os
import platform
import sys

from enum import Enum
from typing import Dict, Optional

from .ai.types import FileIOError

logger = logging.getLogger(__name__)

PRIMARY_ALIAS = "pls"
# Kept for people who installed the tool under its old name.
LEGACY_ALIAS = "ol"

WINDOWS_SHIM = '@echo off\n{command} %*\n'
POSIX_SHIM = '#!/bin/sh\nexec {command} "$@"\n'


class AliasStatus(Enum):
    CREATED = "created"
    REMOVED = "removed"
    NOT_FOUND = "not found"
    FAILED = "failed"


def _is_windows(system: Optional[str]) -> bool:
    return (system or platform.system()) == "Windows"


def default_target() -> str:
    return os.path.abspath(sys.argv[0])


def shim_command(target: str) -> str:
    """The command line the shim runs, quoted for the shell."""
    if target.endswith(".py"):
        # Started as `python -m please`: there is no launcher to point at.
        return f'"{sys.executable}" -m please'
    return f'"{target}"'


def shim_directory(target: str) -> str:
    """Where the shims go: next to the launcher, or next to the interpreter."""
    if target.endswith(".py"):
        return os.path.dirname(os.path.abspath(sys.executable))
    return os.path.dirname(target)


def shim_filename(alias: str, system: Optional[str] = None) -> str:
    return f"{alias}.bat" if _is_windows(system) else alias


def shim_content(target: str, system: Optional[str] = None) -> str:
    template = WINDOWS_SHIM if _is_windows(system) else POSIX_SHIM
    return template.format(command=shim_command(target))


def _write_shim(path: str, content: str, system: Optional[str]):
    with open(path, "w", encoding="utf-8", newline="\r\n" if _is_windows(system) else "\n") as f:
        f.write(content)
    if not _is_windows(system):
        os.chmod(path, 0o755)


def install_alias(
    target: Optional[str] = None, system: Optional[str] = None
) -> Dict[str, AliasStatus]:
    """
    Writes the `pls` and `ol` shims next to the executable.

    Installing again overwrites the shims with identical content.

    Raises:
        FileIOError: if the primary `pls` shim cannot be written. A failure on
            the legacy shim is only reported in the returned statuses.
    """
    target = target or default_target()
    directory = shim_directory(target)
    content = shim_content(target, system)
    statuses: Dict[str, AliasStatus] = {}

    for alias in (PRIMARY_ALIAS, LEGACY_ALIAS):
        path = os.path.join(directory, shim_filename(alias, system))
        try:
            _write_shim(path, content, system)
        except OSError as e:
            if alias == PRIMARY_ALIAS:
                raise FileIOError(f"Failed to create {os.path.basename(path)}: {e}") from e
            logger.warning("Failed to create %s: %s", path, e)
            statuses[alias] = AliasStatus.FAILED
            continue
        logger.debug("Wrote alias shim %s", path)
        statuses[alias] = AliasStatus.CREATED

    return statuses


def uninstall_alias(
    target: Optional[str] = None, system: Optional[str] = None
) -> Dict[str, AliasStatus]:
    """
    Removes the `pls` and `ol` shims. Missing shims are reported as NOT_FOUND.

    Raises:
        FileIOError: if an existing shim cannot be removed.
    """
    target = target or default_target()
    directory = shim_directory(target)
    statuses: Dict[str, AliasStatus] = {}

    for alias in (PRIMARY_ALIAS, LEGACY_ALIAS):
        path = os.path.join(directory, shim_filename(alias, system))
        try:
            os.remove(path)
        except FileNotFoundError:
            statuses[alias] = AliasStatus.NOT_FOUND
            continue
        except OSError as e:
            raise FileIOError(f"Failed to remove {os.path.basename(path)}: {e}") from e
        statuses[alias] = AliasStatus.REMOVED

    return statuses
