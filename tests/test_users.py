"""Tests for actual-user resolution under sudo and direct execution."""

import os
import pwd
from pathlib import Path

import pytest

from laravelino.errors import ResolutionError
from laravelino.users import ActualUser, resolve_actual_user


def passwd_entry(name: str, uid: int, home: str) -> pwd.struct_passwd:
    return pwd.struct_passwd((name, "x", uid, uid, "", home, "/bin/bash"))


@pytest.fixture
def fake_passwd(monkeypatch):
    entries = {
        "alice": passwd_entry("alice", 1000, "/home/alice"),
        "root": passwd_entry("root", 0, "/root"),
    }
    by_uid = {entry.pw_uid: entry for entry in entries.values()}

    def getpwnam(name):
        return entries[name]

    def getpwuid(uid):
        return by_uid[uid]

    monkeypatch.setattr(pwd, "getpwnam", getpwnam)
    monkeypatch.setattr(pwd, "getpwuid", getpwuid)
    return entries


def test_sudo_user_is_looked_up(fake_passwd, monkeypatch) -> None:
    monkeypatch.setattr(os, "getuid", lambda: 0)

    user = resolve_actual_user({"SUDO_USER": "alice", "USER": "root", "HOME": "/root"})

    assert user == ActualUser("alice", Path("/home/alice"), 1000, 1000)
    assert not user.is_superuser()


def test_unknown_sudo_user_fails(fake_passwd) -> None:
    with pytest.raises(ResolutionError, match="mallory"):
        resolve_actual_user({"SUDO_USER": "mallory"})


def test_sudo_from_root_falls_back_to_process_owner(fake_passwd, monkeypatch) -> None:
    monkeypatch.setattr(os, "getuid", lambda: 0)

    user = resolve_actual_user({"SUDO_USER": "root", "HOME": "/root"})

    assert user.home == Path("/root")
    assert user.is_superuser()


def test_direct_execution_uses_process_owner_home(fake_passwd, monkeypatch) -> None:
    monkeypatch.setattr(os, "getuid", lambda: 1000)

    user = resolve_actual_user({"USER": "someone-else", "HOME": "/tmp/elsewhere"})

    assert user.name == "alice"
    assert user.home == Path(pwd.getpwuid(1000).pw_dir)


def test_missing_passwd_entry_uses_environment(fake_passwd, monkeypatch) -> None:
    monkeypatch.setattr(os, "getuid", lambda: 4242)
    monkeypatch.setattr(os, "getgid", lambda: 4242)

    user = resolve_actual_user({"USER": "builder", "HOME": "/workspace"})

    assert user == ActualUser("builder", Path("/workspace"), 4242, 4242)


def test_missing_passwd_entry_without_home_fails(fake_passwd, monkeypatch) -> None:
    monkeypatch.setattr(os, "getuid", lambda: 4242)

    with pytest.raises(ResolutionError):
        resolve_actual_user({"USER": "builder"})


def test_custom_superuser_name(fake_passwd, monkeypatch) -> None:
    monkeypatch.setattr(os, "getuid", lambda: 1000)

    user = resolve_actual_user({"SUDO_USER": "alice"}, superuser="alice")

    assert user.name == "alice"
    assert user.is_superuser("alice")
