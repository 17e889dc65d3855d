# Copyright (c) 2025, The huffpack developers; All Rights Reserved
# huffpack is published under the PSF license.
#
# Author: The huffpack developers
"""
Command line interface:

    huffpack encode FILE -o OUTPUT
    huffpack decode FILE -o OUTPUT
"""
import sys
from optparse import OptionParser

from huffpack.container import encode_file, decode_file
from huffpack.errors import HuffmanError
from huffpack.tree import huffman_tree, print_code, write_dot


COMMANDS = ('encode', 'decode')


def make_parser():
    p = OptionParser(
        usage="%prog {encode,decode} FILE -o OUTPUT [options]",
        prog="huffpack",
        description="Compress (encode) or decompress (decode) FILE using "
                    "a static Huffman code, which is calculated from "
                    "the frequency of the bytes in FILE itself, and stored "
                    "in the header of the encoded file.")
    p.add_option(
        '-o', '--output',
        action="store",
        metavar="OUTPUT",
        help="output file (required)")
    p.add_option(
        '-v', '--verbose',
        action="store_true",
        help="print the Huffman code table")
    p.add_option(
        '-t', '--tree',
        action="store",
        metavar="DOTFILE",
        help="when encoding, store the Huffman tree as a graphviz .dot file")
    return p


def encode(opts, filename):
    info = encode_file(filename, opts.output)
    if opts.verbose:
        print_code(info.freq, info.code)
    if opts.tree and info.freq:
        # the tree is deterministic, so we may simply build it again
        with open(opts.tree, 'w') as fo:
            write_dot(huffman_tree(info.freq), fo)
    if info.insize:
        print('Bits: %d / %d' % (info.nbits, 8 * info.insize))
        print('Ratio =%6.2f%%' % (100.0 * info.outsize / info.insize))
    print('Encoding successful: %s -> %s' % (filename, opts.output))


def decode(opts, filename):
    info = decode_file(filename, opts.output)
    if opts.verbose:
        print('Header: %s, entries: %d, padding: %d' % (
            info.magic.decode(), len(info.code), info.padbits))
        print_code({}, info.code)
    print('Decoding successful: %s -> %s' % (filename, opts.output))


def main(argv=None):
    p = make_parser()
    opts, args = p.parse_args(argv)
    if len(args) != 2:
        p.error("command and input file expected")
    command, filename = args
    if command not in COMMANDS:
        p.error("unknown command '%s' (choose from %s)" %
                (command, ', '.join(COMMANDS)))
    if opts.output is None:
        p.error("missing -o option")
    if opts.tree and command != 'encode':
        p.error("option -t only applies to encode")

    try:
        if command == 'encode':
            encode(opts, filename)
        else:
            decode(opts, filename)
    except (HuffmanError, OSError) as e:
        sys.stderr.write('%s: error: %s\n' % (p.get_prog_name(), e))
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
