"""Tests for resolving the program input."""

import io
import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from jsonnice.input_reader import InputError, read_input


class TestReadInput(unittest.TestCase):

    def test_code_is_returned_verbatim(self):
        self.assertEqual(read_input(True, '{ a: 1 }'), ('<cmdline>', '{ a: 1 }'))

    def test_code_named_dash_is_not_stdin(self):
        self.assertEqual(read_input(True, '-', stdin=io.StringIO("unused")), ('<cmdline>', '-'))

    def test_stdin(self):
        stdin = io.StringIO("{ b: 2 }\n")
        self.assertEqual(read_input(False, '-', stdin=stdin), ('<stdin>', "{ b: 2 }\n"))

    def test_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'main.jsonnet')
            with open(path, 'w', encoding='utf-8') as f:
                f.write("local x = 'é'; x\n")

            self.assertEqual(read_input(False, path), (path, "local x = 'é'; x\n"))

    def test_missing_file(self):
        with self.assertRaises(InputError) as ctx:
            read_input(False, '/nonexistent/main.jsonnet')
        self.assertTrue(str(ctx.exception).startswith(
            "Opening input file: /nonexistent/main.jsonnet: "))

    def test_undecodable_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'bad.jsonnet')
            with open(path, 'wb') as f:
                f.write(b"\xff\xfe\xfa")

            with self.assertRaises(InputError) as ctx:
                read_input(False, path)

        self.assertTrue(str(ctx.exception).startswith(f"Reading input file: {path}: "))


if __name__ == '__main__':
    unittest.main()
