#!/usr/bin/env python3
"""Test runner for the jsonnice debugger.
"""

import sys
import unittest
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))


def run_unit_tests(verbosity: int = 2) -> bool:
    """Run all unit tests."""
    print("Running unit tests...")

    loader = unittest.TestLoader()
    start_dir = Path(__file__).parent
    suite = loader.discover(str(start_dir), pattern='test_*.py')

    runner = unittest.TextTestRunner(verbosity=verbosity)
    result = runner.run(suite)

    return result.wasSuccessful()


def main():
    """Run all tests."""
    print("Jsonnice Test Suite")
    print("=" * 40)

    all_passed = run_unit_tests()

    print("\n" + "=" * 40)
    if all_passed:
        print("All tests PASSED!")
        sys.exit(0)
    else:
        print("Some tests FAILED!")
        sys.exit(1)


if __name__ == '__main__':
    main()
