# Copyright (c) 2025, The huffpack developers; All Rights Reserved
# huffpack is published under the PSF license.
#
# Author: The huffpack developers
"""
Tests for the huffpack command line interface
"""
import os
import shutil
import tempfile
import unittest
from io import StringIO
from contextlib import redirect_stdout, redirect_stderr

from huffpack.cli import main


class CLITests(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.plain = self.path('plain.txt')
        with open(self.plain, 'wb') as fo:
            fo.write(b'aabbbcccc\n' * 50)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def path(self, name):
        return os.path.join(self.tmpdir, name)

    def run_main(self, *args):
        out, err = StringIO(), StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            try:
                status = main(list(args))
            except SystemExit as e:
                status = e.code
        return status, out.getvalue(), err.getvalue()

    def test_round_trip(self):
        huff = self.path('plain.huff')
        status, out, err = self.run_main('encode', self.plain, '-o', huff)
        self.assertEqual(status, 0)
        self.assertIn('Encoding successful', out)
        self.assertIn('Bits: 950 / 4000', out)
        self.assertEqual(err, '')

        restored = self.path('restored.txt')
        status, out, err = self.run_main('decode', huff,
                                         '--output', restored)
        self.assertEqual(status, 0)
        self.assertIn('Decoding successful', out)
        with open(restored, 'rb') as fi:
            self.assertEqual(fi.read(), b'aabbbcccc\n' * 50)

    def test_empty_file(self):
        empty = self.path('empty')
        open(empty, 'wb').close()
        status, out, err = self.run_main('encode', empty,
                                         '-o', self.path('empty.huff'))
        self.assertEqual(status, 0)
        self.assertNotIn('Ratio', out)
        status, out, err = self.run_main('decode', self.path('empty.huff'),
                                         '-o', self.path('empty.out'))
        self.assertEqual(status, 0)
        self.assertEqual(os.path.getsize(self.path('empty.out')), 0)

    def test_verbose(self):
        huff = self.path('plain.huff')
        status, out, err = self.run_main('encode', self.plain,
                                         '-o', huff, '-v')
        self.assertEqual(status, 0)
        self.assertIn(' symbol     char', out)
        self.assertIn("'c'", out)

        status, out, err = self.run_main('decode', huff, '-o',
                                         self.path('out'), '-v')
        self.assertEqual(status, 0)
        self.assertIn('Header: HUFF, entries: 4, padding: 2', out)

    def test_tree(self):
        dot = self.path('tree.dot')
        status, out, err = self.run_main('encode', self.plain, '-o',
                                         self.path('plain.huff'), '-t', dot)
        self.assertEqual(status, 0)
        with open(dot) as fi:
            self.assertTrue(fi.read().startswith('digraph'))

    def test_missing_output(self):
        status, out, err = self.run_main('encode', self.plain)
        self.assertNotEqual(status, 0)
        self.assertIn('missing -o', err)
        self.assertEqual(os.listdir(self.tmpdir), ['plain.txt'])

    def test_unknown_command(self):
        status, out, err = self.run_main('compress', self.plain,
                                         '-o', self.path('x'))
        self.assertNotEqual(status, 0)
        self.assertIn('Usage:', err)
        self.assertIn("unknown command 'compress'", err)

    def test_wrong_number_of_args(self):
        for args in [(), ('encode',), ('encode', 'a', 'b', '-o', 'c')]:
            status, out, err = self.run_main(*args)
            self.assertNotEqual(status, 0)
            self.assertIn('Usage:', err)

    def test_tree_on_decode(self):
        status, out, err = self.run_main('decode', self.plain, '-o',
                                         self.path('x'), '-t', 'tree.dot')
        self.assertNotEqual(status, 0)

    def test_invalid_input(self):
        out_path = self.path('out')
        status, out, err = self.run_main('decode', self.plain,
                                         '-o', out_path)
        self.assertEqual(status, 1)
        self.assertIn('huffpack: error: invalid magic', err)
        self.assertFalse(os.path.exists(out_path))

    def test_missing_input(self):
        status, out, err = self.run_main('encode', self.path('missing'),
                                         '-o', self.path('out'))
        self.assertEqual(status, 1)
        self.assertIn('huffpack: error:', err)


if __name__ == '__main__':
    unittest.main()
