"""
Nord-themed console output and logging shared by every module.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, List, Union

import pyfiglet
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

if TYPE_CHECKING:
    from laravelino.config import AppConfig
    from laravelino.shell_path import ConfigureReport, InspectionResult


LOGGER_NAME = "laravelino"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# ------------------------------
# Nord-Themed Styles & Console Setup
# ------------------------------
@dataclass
class NordColors:
    """Nord color theme palette."""

    SNOW_STORM_1: str = "#D8DEE9"

    FROST_1: str = "#8FBCBB"
    FROST_2: str = "#88C0D0"
    FROST_3: str = "#81A1C1"
    FROST_4: str = "#5E81AC"

    RED: str = "#BF616A"
    YELLOW: str = "#EBCB8B"
    GREEN: str = "#A3BE8C"


console = Console()


# ------------------------------
# Console Helpers
# ------------------------------
def print_header(text: str) -> None:
    """Print a striking ASCII art header using pyfiglet."""
    ascii_art = pyfiglet.figlet_format(text, font="slant")
    console.print(ascii_art, style=f"bold {NordColors.FROST_2}")


def print_section(text: str) -> None:
    """Print a section header."""
    console.print(f"\n[bold {NordColors.FROST_2}]{text}[/bold {NordColors.FROST_2}]")


def print_warning(text: str) -> None:
    """Print a warning message."""
    console.print(f"[bold {NordColors.YELLOW}]⚠ {text}[/bold {NordColors.YELLOW}]")


def print_error(text: str) -> None:
    """Print an error message."""
    console.print(f"[bold {NordColors.RED}]✗ {text}[/bold {NordColors.RED}]")


def print_hint(lines: List[str]) -> None:
    for line in lines:
        console.print(f"  [{NordColors.YELLOW}]{line}[/{NordColors.YELLOW}]")


# ------------------------------
# Reports
# ------------------------------
def render_summary(report: "ConfigureReport", config: "AppConfig") -> None:
    """
    Print the final report: project details, one row per target, and any
    warnings collected during the run.
    """
    print_section("=== Laravel Shell Configuration Complete ===")
    console.print(f"Project Name: [bold {NordColors.YELLOW}]{config.APP_NAME}[/]")
    console.print(f"Project Location: [bold {NordColors.YELLOW}]{config.project_path}[/]")
    console.print(f"Configured User: [bold {NordColors.YELLOW}]{report.user.name}[/]")
    console.print(f"Log File: [bold {NordColors.YELLOW}]{config.LOG_FILE}[/]")

    table = Table(box=box.ROUNDED, title="Shell Configuration", title_style=f"bold {NordColors.FROST_2}")
    table.add_column("Target", style=NordColors.SNOW_STORM_1)
    table.add_column("Scope", style=NordColors.FROST_3)
    table.add_column("Status")
    table.add_column("Exports Added", justify="right")

    for result in report.results:
        color = NordColors.GREEN if result.modified else NordColors.FROST_4
        table.add_row(
            str(result.target.path),
            result.target.scope.value,
            f"[{color}]{result.status.value}[/{color}]",
            str(len(result.added)),
        )
    console.print(table)

    if report.warnings:
        print_section("Warnings")
        for warning in report.warnings:
            print_warning(str(warning))


def render_inspection(results: List["InspectionResult"]) -> None:
    """Print the read-only check report."""
    table = Table(box=box.ROUNDED, title="Shell Configuration Check", title_style=f"bold {NordColors.FROST_2}")
    table.add_column("Target", style=NordColors.SNOW_STORM_1)
    table.add_column("Exists")
    table.add_column("Missing")

    for result in results:
        missing = ", ".join(result.missing) if result.missing else "-"
        color = NordColors.RED if result.needs_changes else NordColors.GREEN
        table.add_row(
            str(result.target.path),
            "yes" if result.exists else "no",
            f"[{color}]{missing}[/{color}]",
        )
    console.print(table)


# ------------------------------
# Logging
# ------------------------------
def setup_logger(log_file: Union[str, Path]) -> logging.Logger:
    log_file = Path(log_file)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
        h.close()
    console_handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    console_handler.setLevel(logging.INFO)
    logger.addHandler(console_handler)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as e:
        logger.warning(f"Could not open log file {log_file}: {e}; logging to console only")
        return logger
    file_handler.setLevel(logging.DEBUG)
    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    try:
        os.chmod(str(log_file), 0o600)
    except Exception as e:
        logger.warning(f"Could not set permissions on log file {log_file}: {e}")
    return logger
