"""Tests for the jsonnet evaluator wrapper."""

import json
import os
import re
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from jsonnice.evaluator import (
    EvaluationError, evaluate_expression, evaluate_snippet, jsonnet_version,
)


class TestEvaluateSnippet(unittest.TestCase):

    def test_arithmetic(self):
        self.assertEqual(json.loads(evaluate_snippet('<cmdline>', '1+1')), 2)

    def test_object(self):
        output = evaluate_snippet('<cmdline>', "{ a: 1, b: self.a + 1 }")
        self.assertEqual(json.loads(output), {'a': 1, 'b': 2})

    def test_runtime_error(self):
        with self.assertRaises(EvaluationError) as ctx:
            evaluate_snippet('<cmdline>', "error 'boom'")
        self.assertIn("boom", str(ctx.exception))

    def test_syntax_error(self):
        with self.assertRaises(EvaluationError):
            evaluate_snippet('<cmdline>', "{ a: ")

    def test_import_through_jpath(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with open(os.path.join(tmpdir, 'lib.libsonnet'), 'w', encoding='utf-8') as f:
                f.write("{ answer: 42 }")

            output = evaluate_snippet('<cmdline>', "(import 'lib.libsonnet').answer", [tmpdir])

        self.assertEqual(json.loads(output), 42)

    def test_version(self):
        self.assertIsInstance(jsonnet_version(), str)
        self.assertTrue(jsonnet_version())


class TestEvaluateExpression(unittest.TestCase):

    def test_top_is_program_value(self):
        output = evaluate_expression('<cmdline>', "{ a: 1 }", "top.a + 1")
        self.assertEqual(json.loads(output), 2)

    def test_program_with_locals(self):
        source = "local x = 2;\n{ a: x }\n// trailing comment"
        output = evaluate_expression('<cmdline>', source, "top.a * 10")
        self.assertEqual(json.loads(output), 20)

    def test_without_program(self):
        self.assertEqual(json.loads(evaluate_expression('<evaluate>', None, "3 * 3")), 9)

    def test_bad_expression(self):
        with self.assertRaises(EvaluationError):
            evaluate_expression('<cmdline>', "{ a: 1 }", "top.missing")

    def test_error_lines_match_program(self):
        source = "{\n  a: error 'boom',\n}"

        with self.assertRaises(EvaluationError) as direct:
            evaluate_snippet('m.jsonnet', source)
        with self.assertRaises(EvaluationError) as via_top:
            evaluate_expression('m.jsonnet', source, 'top.a')

        location = re.compile(r"m\.jsonnet:(\d+):")
        self.assertEqual(location.search(str(direct.exception)).group(1), '2')
        self.assertEqual(location.search(str(via_top.exception)).group(1), '2')


if __name__ == '__main__':
    unittest.main()
