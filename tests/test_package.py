"""
Package Tests

Tests for the public package surface.
"""

import unittest
from importlib import metadata

import bindwire


class TestPackage(unittest.TestCase):
    """bindwire package attributes"""

    def test_version_matches_distribution(self):
        self.assertEqual(bindwire.__version__, metadata.version("bindwire"))

    def test_all_names_are_exported(self):
        missing = [name for name in bindwire.__all__ if not hasattr(bindwire, name)]

        self.assertEqual(missing, [])


if __name__ == '__main__':
    unittest.main()
