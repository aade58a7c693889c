import logging
import os
from pathlib import Path
from typing import List, Tuple

import pytest

from laravelino.config import AppConfig
from laravelino.users import ActualUser


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger("laravelino")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home" / "alice"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        LOG_FILE=str(tmp_path / "log" / "laravel_setup.log"),
        SYSTEM_PROFILE=str(tmp_path / "profile.d" / "laravel-setup.sh"),
    )


@pytest.fixture
def user(home: Path) -> ActualUser:
    return ActualUser("alice", home, 1000, 1000)


@pytest.fixture
def chown_calls(monkeypatch) -> List[Tuple[str, int, int]]:
    calls: List[Tuple[str, int, int]] = []

    def fake_chown(path, uid, gid):
        calls.append((str(path), uid, gid))

    monkeypatch.setattr(os, "chown", fake_chown)
    return calls
