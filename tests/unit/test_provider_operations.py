"""
Tests for provider command lines and exit status handling.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from cryptshell.core.errors import ProviderNotFoundError, ProviderOperationError
from cryptshell.scripts.provider_cli import (
    attach_command,
    attach_store,
    init_command,
    initialize_store,
    passwd_command,
    run_provider,
)


class TestCommandLines:
    """Argument order handed to the provider."""

    def test_init_command(self, make_config):
        config = make_config(init_options="-plaintextnames -scryptn 16")
        store = Path("/data/store")
        assert init_command(config, store) == [
            "gocryptfs",
            "-init",
            "-plaintextnames",
            "-scryptn",
            "16",
            "/data/store",
        ]

    def test_attach_command_options_before_paths(self, make_config):
        config = make_config(mount_options="-ro -o allow_other")
        assert attach_command(config, Path("/s"), Path("/t")) == ["gocryptfs", "-ro", "-o", "allow_other", "/s", "/t"]

    def test_attach_command_quoted_option_stays_one_word(self, make_config):
        config = make_config(mount_options="-extpass 'pass show vault'")
        assert attach_command(config, Path("/s"), Path("/t")) == [
            "gocryptfs",
            "-extpass",
            "pass show vault",
            "/s",
            "/t",
        ]

    def test_attach_command_without_options(self, make_config):
        assert attach_command(make_config(), Path("/s"), Path("/t")) == ["gocryptfs", "/s", "/t"]

    def test_passwd_command(self, make_config):
        assert passwd_command(make_config(), Path("/s")) == ["gocryptfs", "-passwd", "/s"]

    def test_custom_provider(self, make_config):
        config = make_config(provider="/opt/bin/gocryptfs")
        assert passwd_command(config, Path("/s"))[0] == "/opt/bin/gocryptfs"


class TestRunProvider:
    """Exit status mapping."""

    def test_zero_exit(self):
        with patch("cryptshell.scripts.provider_cli.run_foreground", return_value=0) as mock_run:
            run_provider(["gocryptfs", "-init", "/s"], "Initialization")
        mock_run.assert_called_once_with(["gocryptfs", "-init", "/s"], guard=None)

    def test_nonzero_exit_raises_with_status(self):
        with patch("cryptshell.scripts.provider_cli.run_foreground", return_value=12):
            with pytest.raises(ProviderOperationError) as excinfo:
                run_provider(["gocryptfs", "/s", "/t"], "Mount")
        assert excinfo.value.returncode == 12
        assert excinfo.value.message == "Mount failed (exit 12)"

    def test_missing_executable(self):
        with patch("cryptshell.scripts.provider_cli.run_foreground", side_effect=FileNotFoundError("gocryptfs")):
            with pytest.raises(ProviderNotFoundError):
                run_provider(["gocryptfs", "/s", "/t"], "Mount")

    def test_attach_failure_has_remedy(self, make_config):
        with patch("cryptshell.scripts.provider_cli.run_foreground", return_value=1):
            with pytest.raises(ProviderOperationError) as excinfo:
                attach_store(make_config(), Path("/s"), Path("/t"))
        assert "password" in excinfo.value.remedy

    def test_initialize_store_passes_options(self, make_config):
        config = make_config(init_options="-aessiv")
        with patch("cryptshell.scripts.provider_cli.run_foreground", return_value=0) as mock_run:
            initialize_store(config, Path("/s"))
        assert mock_run.call_args[0][0] == ["gocryptfs", "-init", "-aessiv", "/s"]
