"""Application configuration settings."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

OPERATION_TIMEOUT = 300  # default timeout in seconds


@dataclass
class AppConfig:
    """
    Process-wide settings, built once by the CLI and passed to every operation.
    """

    APP_NAME: str = "my_app_name"
    PROJECT_DIR: str = "/var/www/html"
    LOG_FILE: str = "/var/log/laravel_setup.log"

    MARKER: str = "# Added by Laravel setup script"
    PHP_BIN_DIR: str = "/usr/bin/php"
    LOCAL_BIN_DIR: str = "/usr/local/bin"
    PHP_PATTERN: str = r"export PATH.*php"
    LOCAL_BIN_PATTERN: str = r"export PATH.*local/bin"

    SYSTEM_PROFILE: str = "/etc/profile.d/laravel-setup.sh"
    SHELL_CONFIG_FILES: List[str] = field(
        default_factory=lambda: [".bashrc", ".zshrc", ".profile"]
    )

    SUPERUSER: str = "root"
    COMMAND_TIMEOUT: int = OPERATION_TIMEOUT

    @property
    def project_path(self) -> Path:
        return Path(self.PROJECT_DIR) / "proj" / self.APP_NAME
