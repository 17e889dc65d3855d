# Copyright (c) 2025, The huffpack developers; All Rights Reserved
"""
This package implements a lossless file compressor based on static Huffman
coding.  The Huffman code is derived from the byte frequencies of the input
and stored in the header of the compressed file, such that decoding needs
nothing but the compressed file itself.

Bit sequences are represented using bitarray objects.

Author: The huffpack developers
"""
from huffpack.errors import (HuffmanError, EmptyInputError,
                             InvalidFormatError, CorruptStreamError)
from huffpack.freq import frequencies, count_frequencies
from huffpack.tree import huffman_tree, code_table, huffman_code
from huffpack.bitio import BitWriter, BitReader
from huffpack.container import (
    MAGIC, WIDE_MAGIC, read_header, write_header, decode_table,
    encode_stream, decode_stream, encode_bytes, decode_bytes,
    encode_file, decode_file,
)

__version__ = '1.0.0'

__all__ = [
    'HuffmanError', 'EmptyInputError', 'InvalidFormatError',
    'CorruptStreamError',
    'frequencies', 'count_frequencies',
    'huffman_tree', 'code_table', 'huffman_code',
    'BitWriter', 'BitReader',
    'MAGIC', 'WIDE_MAGIC', 'read_header', 'write_header', 'decode_table',
    'encode_stream', 'decode_stream', 'encode_bytes', 'decode_bytes',
    'encode_file', 'decode_file',
]


def test(verbosity=1):
    """test(verbosity=1) -> TextTestResult

Run self-test, and return `unittest.runner.TextTestResult` object.
"""
    from huffpack import test_huffpack
    return test_huffpack.run(verbosity=verbosity)
