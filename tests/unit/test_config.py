"""
Tests for SessionConfig.from_environment and option splitting.
"""

import unittest
from pathlib import Path

import pytest

from cryptshell.core.config import SessionConfig
from cryptshell.core.errors import CryptShellError


class TestFromEnvironment(unittest.TestCase):
    """Environment variables map onto SessionConfig fields."""

    def test_defaults(self):
        config = SessionConfig.from_environment({})
        self.assertEqual(config.store_path, Path("~/.cryptshell/store").expanduser())
        self.assertIsNone(config.mount_point)
        self.assertEqual(config.init_options, "")
        self.assertEqual(config.mount_options, "")
        self.assertEqual(config.session_command, "/bin/sh")
        self.assertEqual(config.provider, "gocryptfs")
        self.assertFalse(config.debug)
        self.assertTrue(config.uses_ephemeral_target)

    def test_shell_is_default_command(self):
        config = SessionConfig.from_environment({"SHELL": "/bin/zsh"})
        self.assertEqual(config.session_command, "/bin/zsh")

    def test_explicit_command_beats_shell(self):
        env = {"SHELL": "/bin/zsh", "CRYPTSHELL_COMMAND": "ls -la"}
        self.assertEqual(SessionConfig.from_environment(env).session_command, "ls -la")

    def test_all_variables(self):
        env = {
            "CRYPTSHELL_STORE": "/data/vault",
            "CRYPTSHELL_MOUNTPOINT": "/mnt/clear",
            "CRYPTSHELL_INIT_OPTS": "-plaintextnames",
            "CRYPTSHELL_MOUNT_OPTS": "-ro",
            "CRYPTSHELL_PROVIDER": "/opt/gocryptfs",
            "CRYPTSHELL_DEBUG": "yes",
        }
        config = SessionConfig.from_environment(env)
        self.assertEqual(config.store_path, Path("/data/vault"))
        self.assertEqual(config.mount_point, Path("/mnt/clear"))
        self.assertEqual(config.init_args, ["-plaintextnames"])
        self.assertEqual(config.mount_args, ["-ro"])
        self.assertEqual(config.provider, "/opt/gocryptfs")
        self.assertTrue(config.debug)
        self.assertFalse(config.uses_ephemeral_target)

    def test_blank_values_count_as_unset(self):
        env = {"CRYPTSHELL_STORE": "  ", "CRYPTSHELL_MOUNTPOINT": "", "CRYPTSHELL_PROVIDER": ""}
        config = SessionConfig.from_environment(env)
        self.assertEqual(config.store_path, Path("~/.cryptshell/store").expanduser())
        self.assertIsNone(config.mount_point)
        self.assertEqual(config.provider, "gocryptfs")

    def test_tilde_expanded(self):
        config = SessionConfig.from_environment({"CRYPTSHELL_STORE": "~/vault"})
        self.assertEqual(config.store_path, Path.home() / "vault")

    def test_debug_off_for_other_values(self):
        self.assertFalse(SessionConfig.from_environment({"CRYPTSHELL_DEBUG": "0"}).debug)

    def test_frozen(self):
        config = SessionConfig.from_environment({})
        with self.assertRaises(Exception):
            config.provider = "other"


class TestOptionSplitting:
    """Option strings are split like a shell would, never validated."""

    def test_quoted_word(self):
        config = SessionConfig(store_path=Path("/s"), mount_options='-o "a b" -ro')
        assert config.mount_args == ["-o", "a b", "-ro"]

    def test_unknown_options_pass_through(self):
        config = SessionConfig(store_path=Path("/s"), init_options="--not-a-real-flag")
        assert config.init_args == ["--not-a-real-flag"]

    def test_unbalanced_quote_raises(self):
        config = SessionConfig(store_path=Path("/s"), mount_options="-o 'broken")
        with pytest.raises(CryptShellError, match="CRYPTSHELL_MOUNT_OPTS"):
            config.mount_args
