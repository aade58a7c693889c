"""
Shell PATH configuration for PHP and Composer.

Per-user startup files (.bashrc, .zshrc, .profile) are appended to at most once
per export, grouped under a marker comment. The system-wide profile fragment is
owned entirely by this module and regenerated on every run.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from laravelino.config import AppConfig
from laravelino.errors import LaravelinoWarning, OwnershipWarning, WriteError
from laravelino.users import ActualUser

logger = logging.getLogger("laravelino")

SYSTEM_FRAGMENT_MODE = 0o755
SHEBANG = "#!/bin/bash"


# ------------------------------
# Data Models
# ------------------------------
class TargetScope(str, Enum):
    USER = "user"
    SYSTEM = "system"


class TargetStatus(str, Enum):
    """Outcome of processing a single target."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    REGENERATED = "regenerated"


@dataclass(frozen=True)
class PathExport:
    """A PATH augmentation and the pattern that detects it."""

    name: str
    fragment: str
    pattern: str

    @property
    def line(self) -> str:
        return f"export PATH=$PATH:{self.fragment}"

    def is_present(self, content: str) -> bool:
        # Line oriented, like grep: '.' never crosses a newline.
        return re.search(self.pattern, content, re.MULTILINE) is not None


@dataclass(frozen=True)
class ConfigTarget:
    path: Path
    scope: TargetScope
    owner: Optional[ActualUser] = None

    @property
    def exists(self) -> bool:
        return self.path.exists()

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class TargetResult:
    target: ConfigTarget
    status: TargetStatus
    added: List[str] = field(default_factory=list)
    warnings: List[LaravelinoWarning] = field(default_factory=list)

    @property
    def modified(self) -> bool:
        return self.status != TargetStatus.UNCHANGED


@dataclass
class ConfigureReport:
    """Results of one configuration run, in target order."""

    user: ActualUser
    results: List[TargetResult] = field(default_factory=list)

    @property
    def warnings(self) -> List[LaravelinoWarning]:
        return [w for result in self.results for w in result.warnings]

    @property
    def modified_targets(self) -> List[ConfigTarget]:
        return [result.target for result in self.results if result.modified]


@dataclass
class InspectionResult:
    target: ConfigTarget
    exists: bool
    missing: List[str] = field(default_factory=list)

    @property
    def needs_changes(self) -> bool:
        return bool(self.missing)


# ------------------------------
# Targets and Exports
# ------------------------------
def path_exports(config: AppConfig) -> List[PathExport]:
    """Return the PHP and Composer exports, in insertion order."""
    return [
        PathExport("php", config.PHP_BIN_DIR, config.PHP_PATTERN),
        PathExport("composer", config.LOCAL_BIN_DIR, config.LOCAL_BIN_PATTERN),
    ]


def enumerate_targets(user: ActualUser, config: AppConfig) -> List[ConfigTarget]:
    """
    Build the ordered list of configuration targets for a user.

    Args:
        user: The resolved actual user; their home directory anchors the
            user-scope files.
        config: Application configuration.

    Returns:
        User-scope targets in SHELL_CONFIG_FILES order, followed by the
        system-wide fragment.
    """
    targets = [
        ConfigTarget(user.home / name, TargetScope.USER, user)
        for name in config.SHELL_CONFIG_FILES
    ]
    targets.append(ConfigTarget(Path(config.SYSTEM_PROFILE), TargetScope.SYSTEM))
    return targets


def render_system_fragment(config: AppConfig) -> str:
    lines = [SHEBANG, config.MARKER] + [export.line for export in path_exports(config)]
    return "\n".join(lines) + "\n"


# ------------------------------
# Ownership
# ------------------------------
def apply_ownership(
    path: Path, user: Optional[ActualUser], config: AppConfig
) -> Optional[OwnershipWarning]:
    """
    Hand a user file to the actual user.

    Returns:
        None on success or when no change is needed, otherwise the
        OwnershipWarning that was logged.
    """
    if user is None or user.uid is None or user.is_superuser(config.SUPERUSER):
        return None
    gid = user.gid if user.gid is not None else -1
    try:
        os.chown(path, user.uid, gid)
    except OSError as e:
        warning = OwnershipWarning(
            f"Could not set ownership of {path} to {user.name}: {e}", path
        )
        logger.warning(str(warning))
        return warning
    return None


# ------------------------------
# Idempotent Exporter
# ------------------------------
def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise WriteError(path, f"Cannot read shell config ({e.strerror})") from e


def pending_block(content: str, exports: List[PathExport], marker: str) -> List[str]:
    """
    Compute the lines that must be appended to content.

    The marker is emitted, preceded by a blank line, ahead of the first
    inserted export unless it already appears somewhere in content.
    """
    lines: List[str] = []
    marker_present = marker in content
    for export in exports:
        if export.is_present(content + "\n".join(lines)):
            continue
        if not marker_present:
            lines.extend(["", marker])
            marker_present = True
        lines.append(export.line)
    return lines


def ensure_exports(
    target: ConfigTarget, exports: List[PathExport], config: AppConfig
) -> TargetResult:
    """
    Make sure every export is present in a user-scope target.

    Args:
        target: User-scope configuration file.
        exports: Exports that must be present.
        config: Application configuration.

    Returns:
        TargetResult describing what changed.

    Raises:
        WriteError: If the file cannot be created, read, or appended to.
    """
    path = target.path
    warnings: List[LaravelinoWarning] = []
    created = False

    if not path.exists():
        try:
            path.touch()
        except OSError as e:
            raise WriteError(path, f"Cannot create shell config ({e.strerror})") from e
        created = True
        warning = apply_ownership(path, target.owner, config)
        if warning:
            warnings.append(warning)

    content = _read(path)
    lines = pending_block(content, exports, config.MARKER)
    added = [line for line in lines if line and line != config.MARKER]

    if lines:
        text = "\n".join(lines) + "\n"
        if content and not content.endswith("\n"):
            text = "\n" + text
        try:
            with path.open("a", encoding="utf-8") as fh:
                fh.write(text)
        except OSError as e:
            raise WriteError(path, f"Cannot append to shell config ({e.strerror})") from e

    if created:
        status = TargetStatus.CREATED
    elif added:
        status = TargetStatus.UPDATED
    else:
        status = TargetStatus.UNCHANGED

    if status != TargetStatus.UNCHANGED:
        logger.info(f"✓ PATH configured in {target.name}")
        if not warnings:
            warning = apply_ownership(path, target.owner, config)
            if warning:
                warnings.append(warning)
    else:
        logger.info(f"PATH already configured in {target.name}")

    return TargetResult(target, status, added, warnings)


# ------------------------------
# System Fragment Writer
# ------------------------------
def write_system_fragment(target: ConfigTarget, config: AppConfig) -> TargetResult:
    """Overwrite the system fragment with the canonical block and mark it executable."""
    path = target.path
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_system_fragment(config), encoding="utf-8")
        os.chmod(path, SYSTEM_FRAGMENT_MODE)
    except OSError as e:
        raise WriteError(path, f"Cannot write system profile fragment ({e.strerror})") from e
    logger.info("✓ System-wide PATH configuration created")
    added = [export.line for export in path_exports(config)]
    return TargetResult(target, TargetStatus.REGENERATED, added)


# ------------------------------
# Entry Points
# ------------------------------
def configure_universal_shell_path(config: AppConfig, user: ActualUser) -> ConfigureReport:
    """
    Configure PATH for PHP and Composer across all shell startup files.

    Targets are processed one at a time; a WriteError aborts the run and
    propagates to the caller. Re-running is always safe.
    """
    logger.info("Configuring universal shell PATH for PHP and Composer")
    logger.info(f"Configuring PATH for user: {user.name} (home: {user.home})")

    exports = path_exports(config)
    report = ConfigureReport(user)
    for target in enumerate_targets(user, config):
        if target.scope == TargetScope.SYSTEM:
            report.results.append(write_system_fragment(target, config))
        else:
            report.results.append(ensure_exports(target, exports, config))
    return report


def inspect_targets(config: AppConfig, user: ActualUser) -> List[InspectionResult]:
    """Report what a configuration run would change, without touching any file."""
    exports = path_exports(config)
    results = []
    for target in enumerate_targets(user, config):
        exists = target.exists
        content = _read(target.path) if exists else ""
        if target.scope == TargetScope.SYSTEM:
            missing = []
            if content != render_system_fragment(config):
                missing.append("canonical block")
            if exists and not os.access(target.path, os.X_OK):
                missing.append("executable bit")
        else:
            missing = [export.name for export in exports if not export.is_present(content)]
        results.append(InspectionResult(target, exists, missing))
    return results
