#!/usr/bin/env python3
"""
Pytest configuration and shared fixtures for CryptShell tests.

No test runs the real provider or touches real mounts: mount state is
simulated with a FakeMounts table patched over is_mount_point.
"""

import io
from pathlib import Path

import pytest

from cryptshell.core.config import SessionConfig
from cryptshell.core.constants import ConsoleStyle
from cryptshell.scripts.cli_output import CLIOutput, set_output

# =============================================================================
# Shared helpers
# =============================================================================


class FakeMounts:
    """In-memory mount table standing in for the host's."""

    def __init__(self):
        self.mounted = set()
        self.attach_calls = []
        self.detach_calls = []
        self.checks = 0
        self.detach_succeeds = True

    def is_mount_point(self, path) -> bool:
        self.checks += 1
        return Path(path) in self.mounted

    def attach(self, config, store, target, guard=None):
        self.attach_calls.append((Path(store), Path(target)))
        self.mounted.add(Path(target))

    def detach(self, target) -> bool:
        self.detach_calls.append(Path(target))
        if self.detach_succeeds:
            self.mounted.discard(Path(target))
        return self.detach_succeeds


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def output():
    """CLIOutput writing ASCII to an in-memory buffer; installed as the default."""
    buffer = io.StringIO()
    out = CLIOutput(ConsoleStyle(ConsoleStyle.ASCII), stream=buffer)
    out.buffer = buffer
    set_output(out)
    yield out
    set_output(None)


@pytest.fixture
def fake_mounts(monkeypatch):
    """FakeMounts patched in as the session's mount-point check."""
    mounts = FakeMounts()
    monkeypatch.setattr("cryptshell.core.session.is_mount_point", mounts.is_mount_point)
    return mounts


@pytest.fixture
def runtime_dir(tmp_path, monkeypatch):
    """Private XDG_RUNTIME_DIR so ephemeral targets land under tmp_path."""
    run_dir = tmp_path / "run"
    run_dir.mkdir()
    monkeypatch.setenv("XDG_RUNTIME_DIR", str(run_dir))
    return run_dir


@pytest.fixture
def store(tmp_path):
    """An existing (empty) store directory."""
    path = tmp_path / "store"
    path.mkdir()
    return path


@pytest.fixture
def make_config(tmp_path):
    """Factory for SessionConfig with test-friendly defaults."""

    def _make(**overrides):
        values = {
            "store_path": tmp_path / "store",
            "session_command": "true",
        }
        values.update(overrides)
        return SessionConfig(**values)

    return _make
