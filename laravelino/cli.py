#!/usr/bin/env python3
"""
Laravel Shell PATH Configurator

Makes PHP and Composer available on PATH for the user who ran sudo:
  • Appends the exports to ~/.bashrc, ~/.zshrc and ~/.profile, once each
  • Regenerates the system-wide /etc/profile.d fragment
  • Keeps user files owned by the user, not by root
  • Logs every outcome to the console and to an append-only log file

Safe to re-run at any time. Note: Run this script with root privileges.
"""

import logging
import os
import sys
from typing import Optional

import click

from laravelino import VERSION
from laravelino.config import AppConfig
from laravelino.errors import LaravelinoError, PrivilegeError, SourceWarning
from laravelino.followup import apply_hint, detect_shell, primary_config, source_config
from laravelino.runner import CommandRunner, SubprocessRunner
from laravelino.shell_path import configure_universal_shell_path, inspect_targets
from laravelino.ui import (
    print_error,
    print_header,
    print_hint,
    print_section,
    print_warning,
    render_inspection,
    render_summary,
    setup_logger,
)
from laravelino.users import ActualUser, resolve_actual_user

logger = logging.getLogger("laravelino")


def check_root() -> None:
    if os.geteuid() != 0:
        raise PrivilegeError("This script must be run as root (use sudo)")


def run_followup(
    config: AppConfig, user: ActualUser, source: Optional[bool], runner: CommandRunner
) -> Optional[SourceWarning]:
    """
    Print the apply-now hint and optionally re-source the primary config.

    Returns:
        The SourceWarning from a failed re-source, otherwise None.
    """
    shell = detect_shell()
    primary = primary_config(shell, user.home)
    logger.warning("To apply PATH changes immediately, run one of the following:")
    print_hint(apply_hint(primary, config.SYSTEM_PROFILE))
    if source is None:
        source = sys.stdin.isatty()
    if not source:
        return None
    return source_config(runner, shell, primary)


def check_shell_configuration(config: AppConfig, user: ActualUser) -> int:
    """Read-only check; returns the process exit code."""
    results = inspect_targets(config, user)
    print_section("Checking shell configuration")
    render_inspection(results)
    pending = [r for r in results if r.needs_changes]
    if pending:
        logger.warning(f"{len(pending)} target(s) need configuration")
        return 1
    logger.info("✓ Shell configuration is up to date")
    return 0


@click.command()
@click.option("--log-file", default=AppConfig.LOG_FILE, show_default=True, help="Append-only log file")
@click.option(
    "--profile-fragment",
    default=AppConfig.SYSTEM_PROFILE,
    show_default=True,
    help="System-wide profile fragment to regenerate",
)
@click.option(
    "--source/--no-source",
    default=None,
    help="Source the primary shell config afterwards (default: only when interactive)",
)
@click.option("--check", is_flag=True, help="Report what would change without writing anything")
@click.version_option(VERSION, prog_name="laravelino")
def main(log_file: str, profile_fragment: str, source: Optional[bool], check: bool) -> None:
    """Configure shell PATH for PHP and Composer."""
    print_header("Laravelino")

    try:
        check_root()
    except PrivilegeError as e:
        print_error(str(e))
        print_warning("Run with: sudo laravelino")
        sys.exit(1)

    config = AppConfig(LOG_FILE=log_file, SYSTEM_PROFILE=profile_fragment)
    setup_logger(config.LOG_FILE)
    logger.info("Starting Laravel shell PATH configuration")

    try:
        user = resolve_actual_user(superuser=config.SUPERUSER)
        if check:
            sys.exit(check_shell_configuration(config, user))
        report = configure_universal_shell_path(config, user)
        render_summary(report, config)
        warning = run_followup(config, user, source, SubprocessRunner(config.COMMAND_TIMEOUT))
        if warning:
            print_warning(str(warning))
    except LaravelinoError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print_warning("Operation cancelled by user.")
        sys.exit(130)

    logger.info("✓ Laravel shell configuration completed successfully!")


if __name__ == "__main__":
    main()
