"""
Actual-user resolution.

Provisioning runs under sudo, but shell configuration belongs to the person who
invoked sudo. SUDO_USER names that person; without it the current process
owner is used.
"""

import logging
import os
import pwd
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from laravelino.errors import ResolutionError

logger = logging.getLogger("laravelino")

INVOKING_USER_VAR = "SUDO_USER"
CURRENT_USER_VAR = "USER"
HOME_VAR = "HOME"


@dataclass(frozen=True)
class ActualUser:
    """The non-elevated identity on whose behalf files are written."""

    name: str
    home: Path
    uid: Optional[int] = None
    gid: Optional[int] = None

    def is_superuser(self, superuser: str = "root") -> bool:
        return self.name == superuser or self.uid == 0


def resolve_actual_user(
    environ: Optional[Mapping[str, str]] = None, superuser: str = "root"
) -> ActualUser:
    """
    Determine the user whose shell configuration should be updated.

    Args:
        environ: Environment to read, defaults to os.environ.
        superuser: Name of the elevated identity.

    Returns:
        The resolved ActualUser with a home directory.

    Raises:
        ResolutionError: If the invoking user is unknown or no home directory
            can be determined.
    """
    env = os.environ if environ is None else environ
    invoking = env.get(INVOKING_USER_VAR)

    if invoking and invoking != superuser:
        try:
            entry = pwd.getpwnam(invoking)
        except KeyError:
            raise ResolutionError(f"Unknown invoking user '{invoking}'")
        if not entry.pw_dir:
            raise ResolutionError(f"User '{invoking}' has no home directory")
        user = ActualUser(entry.pw_name, Path(entry.pw_dir), entry.pw_uid, entry.pw_gid)
    else:
        user = _process_owner(env)

    logger.debug(f"Resolved actual user {user.name} (home: {user.home})")
    return user


def _process_owner(env: Mapping[str, str]) -> ActualUser:
    uid = os.getuid()
    try:
        entry = pwd.getpwuid(uid)
    except KeyError:
        # Container UIDs without a passwd entry fall back to the environment.
        name = env.get(CURRENT_USER_VAR) or str(uid)
        home = env.get(HOME_VAR)
        if not home:
            raise ResolutionError(f"Cannot determine home directory for UID {uid}")
        return ActualUser(name, Path(home), uid, os.getgid())
    if not entry.pw_dir:
        raise ResolutionError(f"User '{entry.pw_name}' has no home directory")
    return ActualUser(entry.pw_name, Path(entry.pw_dir), entry.pw_uid, entry.pw_gid)
