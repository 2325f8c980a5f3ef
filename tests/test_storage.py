"""
Tests for gitopolis.storage and state file location.
"""
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from gitopolis import storage
from gitopolis.config import get_state_path
from gitopolis.exit_codes import StateError
from gitopolis.repos import Repos


STATE_TOML = """[[repos]]
path = "test_repo"
tags = ["foo", "bar"]
[repos.remotes.origin]
name = "origin"
url = "git://example.org/test_url"
"""


class TestStorage(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.state_path = Path(self.temp_dir) / ".gitopolis.toml"

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_missing_file_is_empty_list(self):
        repos = storage.load(self.state_path)
        self.assertEqual(len(repos), 0)

    def test_parse_state_file(self):
        repos = storage.parse(STATE_TOML)
        self.assertEqual(len(repos), 1)
        repo = repos.get("test_repo")
        self.assertEqual(repo.tags, ["foo", "bar"])
        self.assertEqual(repo.remotes["origin"].url, "git://example.org/test_url")

    def test_save_then_load(self):
        repos = Repos()
        repos.add("a", {"origin": "git@example.org:a.git", "upstream": "https://example.org/a"})
        repos.add("b")
        repos.add_tag("work", ["a"])

        storage.save(repos, self.state_path)
        loaded = storage.load(self.state_path)

        self.assertEqual([r.path for r in loaded], ["a", "b"])
        self.assertEqual(loaded.get("a").tags, ["work"])
        self.assertEqual(loaded.get("a").remotes["upstream"].url, "https://example.org/a")
        self.assertEqual(loaded.get("b").remotes, {})

    def test_invalid_toml_raises(self):
        self.state_path.write_text("[[repos]\npath = ")
        with self.assertRaises(StateError):
            storage.load(self.state_path)

    def test_missing_repos_entry_raises(self):
        self.state_path.write_text('something = "else"\n')
        with self.assertRaises(StateError):
            storage.load(self.state_path)

    def test_entry_without_path_raises(self):
        with self.assertRaises(StateError):
            storage.parse('[[repos]]\ntags = []\n')

    def test_unwritable_location_raises(self):
        with self.assertRaises(StateError):
            storage.save(Repos(), Path(self.temp_dir) / "missing-dir" / "state.toml")


class TestGetStatePath(unittest.TestCase):

    def test_defaults_to_working_directory(self):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("GITOPOLIS_STATE_FILE", None)
            self.assertEqual(get_state_path(), Path.cwd() / ".gitopolis.toml")

    def test_env_override(self):
        with patch.dict(os.environ, {"GITOPOLIS_STATE_FILE": "/tmp/elsewhere.toml"}):
            self.assertEqual(get_state_path(), Path("/tmp/elsewhere.toml"))
