"""
Tests for the remembered output directory and directory resolution.
"""

import os
import tempfile
import unittest

import pytest

from slicer.errors import NoOutputDirectory
from slicer.output_dir import load_last_output_dir, resolve_output_dir, store_last_output_dir


class TestLastOutputDir(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.state_file = os.path.join(self.tmp.name, "config", "state.json")

    def tearDown(self):
        self.tmp.cleanup()

    def test_nothing_remembered(self):
        self.assertEqual(load_last_output_dir(self.state_file), "")

    def test_round_trip(self):
        store_last_output_dir("/data/pdfs", self.state_file)

        self.assertEqual(load_last_output_dir(self.state_file), "/data/pdfs")

    def test_unreadable_state(self):
        os.makedirs(os.path.dirname(self.state_file))
        with open(self.state_file, "w") as f:
            f.write("{not json")

        self.assertEqual(load_last_output_dir(self.state_file), "")

    def test_unexpected_state_shape(self):
        os.makedirs(os.path.dirname(self.state_file))
        with open(self.state_file, "w") as f:
            f.write('["a", "b"]')

        self.assertEqual(load_last_output_dir(self.state_file), "")


class TestResolveOutputDir(unittest.TestCase):

    def test_cancelled_choice(self):
        for chosen in (None, "", "   "):
            with pytest.raises(NoOutputDirectory):
                resolve_output_dir(chosen)

    def test_creates_directory(self):
        with tempfile.TemporaryDirectory() as tmp:
            target = os.path.join(tmp, "out", "pdfs")

            resolved = resolve_output_dir(target)

            self.assertEqual(resolved, os.path.abspath(target))
            self.assertTrue(os.path.isdir(target))

    def test_path_that_is_a_file(self):
        with tempfile.NamedTemporaryFile() as f:
            with pytest.raises(NoOutputDirectory):
                resolve_output_dir(os.path.join(f.name, "sub"))
