import unittest
from unittest import mock

import helpers

from latexast import packages


class TestGetPackage(unittest.TestCase):

    def test_known_packages(self):
        for name in packages.default_packages:
            with self.subTest(name=name):
                macros, environments = packages.get_package(name)
                self.assertIsInstance(macros, dict)
                self.assertIsInstance(environments, dict)
        macros, environments = packages.get_package('amsmath')
        self.assertEqual(environments['align']['renderInfo']['alignContent'], True)

    def test_unknown_package(self):
        for name in ('nosuchpackage', '', 'amsmath.extra'):
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    packages.get_package(name)

    def test_failing_import_inside_package_module(self):
        err = ModuleNotFoundError("No module named 'missing_dependency'",
                                  name='missing_dependency')
        with mock.patch('latexast.packages.importlib.import_module', side_effect=err):
            with self.assertRaises(ModuleNotFoundError) as cm:
                packages.get_package('amsmath')
        self.assertEqual(cm.exception.name, 'missing_dependency')


class TestMergeTables(unittest.TestCase):

    def test_later_tables_win(self):
        merged = packages.merge_tables({'a': 'm', 'b': 'o'}, None, {'b': 'm m'})
        self.assertEqual(merged, {'a': 'm', 'b': 'm m'})


if __name__ == '__main__':
    helpers.test_main()
