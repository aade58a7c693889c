"""
Post-configuration guidance for the interactive shell.

Nothing here affects correctness: the hint is cosmetic and a failed re-source
only produces a SourceWarning.
"""

import logging
import os
import shlex
from pathlib import Path
from typing import List, Mapping, Optional

from laravelino.errors import SourceWarning
from laravelino.runner import CommandRunner

logger = logging.getLogger("laravelino")

SHELL_VAR = "SHELL"
DEFAULT_SHELL = "/bin/bash"

PRIMARY_CONFIGS = {
    "bash": ".bashrc",
    "zsh": ".zshrc",
}
FALLBACK_CONFIG = ".profile"


def detect_shell(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the shell family name (e.g. 'bash') from $SHELL."""
    env = os.environ if environ is None else environ
    return os.path.basename(env.get(SHELL_VAR) or DEFAULT_SHELL)


def primary_config(shell: str, home: Path) -> Path:
    return home / PRIMARY_CONFIGS.get(shell, FALLBACK_CONFIG)


def apply_hint(primary: Path, system_profile: str) -> List[str]:
    """Lines telling the operator how to pick up the new PATH now."""
    return [
        f"source {primary}",
        f"source {system_profile}",
        "Or simply restart your terminal",
    ]


def source_config(runner: CommandRunner, shell: str, config_file: Path) -> Optional[SourceWarning]:
    """
    Source a shell config through the runner to confirm it loads cleanly.

    Args:
        runner: Command runner used to spawn the shell.
        shell: Shell family name, used as the executable.
        config_file: File to source.

    Returns:
        None on success, otherwise the SourceWarning that was logged.
    """
    result = runner.run(shell, ["-c", f". {shlex.quote(str(config_file))}"])
    if result.ok:
        logger.info(f"✓ Sourced {config_file}")
        return None
    detail = result.stderr.strip() or f"exit code {result.exit_code}"
    warning = SourceWarning(f"Could not source {config_file}: {detail}", config_file)
    logger.warning(str(warning))
    return warning
