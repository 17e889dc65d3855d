# Copyright (c) 2025, The huffpack developers; All Rights Reserved
# huffpack is published under the PSF license.
#
# Author: The huffpack developers
"""
The huffpack container format, and the encode / decode pipeline.

A container starts with a header, which embeds the Huffman code, followed
by the packed bits (most significant bit first) of the encoded data:

    offset   size   field
    0        4      magic, b'HUFF' or b'HUFW'
    4        4      number of code table entries N (little-endian)
    8        1      number of padding bits in the last byte (0 to 7)
    9        E * N  entries: symbol (1 byte), pattern, code length (1 byte)
    9 + E*N         packed bits

The pattern holds the code left-aligned, i.e. its most significant bits are
the code, and the remaining low bits are zero.  For b'HUFF' the pattern is
a single byte (E = 3), which limits codes to 8 bits.  When longer codes are
needed, b'HUFW' is used, with an 8 byte pattern (E = 10) and codes of up to
64 bits.
"""
import os
import stat
import struct
import tempfile
from io import BytesIO
from collections import namedtuple

from bitarray import bitarray, frozenbitarray
from bitarray.util import ba2int, int2ba

from huffpack.bitio import BitWriter, BitReader
from huffpack.errors import InvalidFormatError, CorruptStreamError
from huffpack.freq import DEFAULT_CHUNK_SIZE, count_frequencies
from huffpack.tree import huffman_tree, code_table


MAGIC = b'HUFF'
WIDE_MAGIC = b'HUFW'
MAX_CODE_LENGTH = 64
PADDING_OFFSET = 8

# magic -> (pattern width in bits, struct format of an entry)
_FORMATS = {
    MAGIC: (8, '<BBB'),
    WIDE_MAGIC: (64, '<BQB'),
}

__all__ = ['MAGIC', 'WIDE_MAGIC', 'MAX_CODE_LENGTH',
           'Header', 'EncodeInfo', 'DecodeInfo',
           'choose_magic', 'write_header', 'patch_padding', 'read_header',
           'decode_table',
           'encode_stream', 'decode_stream', 'encode_bytes', 'decode_bytes',
           'encode_file', 'decode_file']

Header = namedtuple('Header', ['magic', 'padbits', 'code'])

EncodeInfo = namedtuple('EncodeInfo',
                        ['freq', 'code', 'padbits', 'nbits',
                         'insize', 'outsize'])

DecodeInfo = namedtuple('DecodeInfo',
                        ['magic', 'code', 'padbits', 'insize', 'outsize'])


def choose_magic(code):
    """choose_magic(dict) -> bytes

Return the magic of the narrowest container format which can hold the
given code.  Raises `ValueError` when a code is longer than 64 bits.
"""
    maxbits = max((len(v) for v in code.values()), default=0)
    if maxbits <= 8:
        return MAGIC
    if maxbits <= MAX_CODE_LENGTH:
        return WIDE_MAGIC
    raise ValueError("code length %d exceeds maximum of %d bits" %
                     (maxbits, MAX_CODE_LENGTH))


def write_header(fo, code, padbits=0, magic=None):
    """write_header(stream, dict, padbits=0, magic=None) -> int

Write the container header for `code` (dict mapping byte values to
bitarrays) to the binary stream.  Entries are written in ascending order of
their symbols.  When `magic` is None, the format is selected using
`choose_magic()`.  Return the number of bytes written.
"""
    if magic is None:
        magic = choose_magic(code)
    try:
        width, fmt = _FORMATS[magic]
    except KeyError:
        raise ValueError("unknown magic: %r" % magic) from None
    if not 0 <= padbits < 8:
        raise ValueError("padbits must be in range(0, 8), got %d" % padbits)

    res = bytearray(magic)
    res.extend(struct.pack('<IB', len(code), padbits))
    for sym in sorted(code):
        a = code[sym]
        if not 0 < len(a) <= width:
            raise ValueError("code length of symbol %d not in range(1, %d), "
                             "got %d" % (sym, width + 1, len(a)))
        res.extend(struct.pack(fmt, sym, ba2int(a) << width - len(a),
                               len(a)))
    fo.write(res)
    return len(res)


def patch_padding(fo, start, padbits):
    """patch_padding(stream, start, padbits)

Overwrite the padding field of the header which begins at offset `start`
of the seekable stream.  The stream position is restored afterwards.
"""
    end = fo.tell()
    fo.seek(start + PADDING_OFFSET)
    fo.write(struct.pack('<B', padbits))
    fo.seek(end)


def _read_exact(fi, n, what):
    data = fi.read(n)
    if len(data) != n:
        raise InvalidFormatError("truncated header: %d bytes expected "
                                 "for %s, got %d" % (n, what, len(data)))
    return data


def read_header(fi):
    """read_header(stream) -> Header

Read and validate a container header from the binary stream.  Return
a `Header` named tuple, containing the magic, the number of padding bits
and the code (dict mapping byte values to frozenbitarrays).
Raises `InvalidFormatError` on an unknown magic or a truncated or
inconsistent header.
"""
    magic = _read_exact(fi, 4, 'magic')
    if magic not in _FORMATS:
        raise InvalidFormatError("invalid magic: %r" % magic)
    width, fmt = _FORMATS[magic]

    n, padbits = struct.unpack('<IB', _read_exact(fi, 5, 'header'))
    if n > 256:
        raise InvalidFormatError("too many code table entries: %d" % n)
    if padbits > 7:
        raise InvalidFormatError("invalid number of padding bits: %d" %
                                 padbits)

    size = struct.calcsize(fmt)
    code = {}
    for i in range(n):
        sym, pattern, length = struct.unpack(
            fmt, _read_exact(fi, size, 'entry %d' % i))
        if not 0 < length <= width:
            raise InvalidFormatError("invalid code length for symbol %d: %d"
                                     % (sym, length))
        if sym in code:
            raise InvalidFormatError("duplicate symbol: %d" % sym)
        if pattern & ((1 << width - length) - 1):
            raise InvalidFormatError("bits set beyond code length for "
                                     "symbol %d" % sym)
        code[sym] = frozenbitarray(
            int2ba(pattern >> width - length, length, 'big'))

    return Header(magic, padbits, code)


def decode_table(code):
    """decode_table(dict) -> dict

Invert the code: return a dict mapping (integer value of the code,
code length) to the byte value.
"""
    return {(ba2int(a), len(a)): sym for sym, a in code.items()}


def encode_stream(fi, fo, chunk_size=DEFAULT_CHUNK_SIZE):
    """encode_stream(fi, fo, chunk_size=65536) -> EncodeInfo

Encode the binary input stream `fi` (from its current position to EOF) and
write the container to the binary output stream `fo`.  Both streams need
to be seekable: the input is read twice, and the padding field of the
header is written once all bits are known.  An empty input results in
a container without entries and without data.
"""
    instart = fi.tell()
    freq = count_frequencies(fi, chunk_size)
    code = code_table(huffman_tree(freq)) if freq else {}

    start = fo.tell()
    write_header(fo, code)  # padding field is 0 for now

    fi.seek(instart)
    writer = BitWriter(fo)
    while True:
        chunk = fi.read(chunk_size)
        if not chunk:
            break
        a = bitarray(0, 'big')
        try:
            a.encode(code, chunk)
        except ValueError as e:
            # the code was created from the very same input
            raise RuntimeError("input changed while encoding: %s" % e)
        writer.write(a)

    padbits = writer.flush()
    patch_padding(fo, start, padbits)
    fo.flush()
    return EncodeInfo(freq, code, padbits, writer.total_bits,
                      sum(freq.values()), fo.tell() - start)


def decode_stream(fi, fo, chunk_size=DEFAULT_CHUNK_SIZE):
    """decode_stream(fi, fo, chunk_size=65536) -> DecodeInfo

Read a container from the binary input stream `fi`, and write the decoded
bytes to the binary output stream `fo`.  Raises `InvalidFormatError` for
an invalid header, and `CorruptStreamError` when the packed bits do not
decode.
"""
    instart = fi.tell()
    header = read_header(fi)
    table = decode_table(header.code)
    maxbits = max((len(a) for a in header.code.values()), default=0)

    outsize = 0
    out = bytearray()
    value = length = 0
    for bit in BitReader(fi, header.padbits, chunk_size):
        value = value << 1 | bit
        length += 1
        sym = table.get((value, length))
        if sym is not None:
            out.append(sym)
            value = length = 0
            if len(out) >= chunk_size:
                fo.write(out)
                outsize += len(out)
                out = bytearray()
        elif length >= maxbits:
            raise CorruptStreamError("bits do not match any code at byte "
                                     "%d of output" % (outsize + len(out)))
    if length:
        raise CorruptStreamError("stream ends with %d undecoded bits "
                                 "(truncated data?)" % length)
    fo.write(out)
    outsize += len(out)
    return DecodeInfo(header.magic, header.code, header.padbits,
                      fi.tell() - instart, outsize)


def encode_bytes(__data):
    """encode_bytes(bytes, /) -> bytes

Return the container for the given bytes-like object.
"""
    fo = BytesIO()
    encode_stream(BytesIO(__data), fo)
    return fo.getvalue()


def decode_bytes(__data):
    """decode_bytes(bytes, /) -> bytes

Return the bytes decoded from the given container.
"""
    fo = BytesIO()
    decode_stream(BytesIO(__data), fo)
    return fo.getvalue()


def _file_mode(path):
    # keep the mode of an existing file, otherwise use the mode a newly
    # created file gets, i.e. 0666 masked by the umask
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _publish(path, write):
    # Write into a temporary file in the target directory, and only move it
    # to the target path once it is complete.  On failure no output is left.
    dirname = os.path.dirname(os.path.abspath(path))
    fd, tmp = tempfile.mkstemp(dir=dirname, suffix='.tmp',
                               prefix='.%s.' % os.path.basename(path))
    try:
        with os.fdopen(fd, 'w+b') as fo:
            res = write(fo)
            fo.flush()
            os.fsync(fo.fileno())
        os.chmod(tmp, _file_mode(path))
        os.replace(tmp, path)
    except BaseException:
        os.unlink(tmp)
        raise
    return res


def encode_file(in_path, out_path):
    """encode_file(in_path, out_path) -> EncodeInfo

Encode the file `in_path` and write the container to `out_path`.
The output file is replaced only when encoding succeeded.
"""
    with open(in_path, 'rb') as fi:
        return _publish(out_path, lambda fo: encode_stream(fi, fo))


def decode_file(in_path, out_path):
    """decode_file(in_path, out_path) -> DecodeInfo

Decode the container file `in_path` and write the result to `out_path`.
The output file is replaced only when decoding succeeded, i.e. nothing is
written for an invalid or corrupted container.
"""
    with open(in_path, 'rb') as fi:
        return _publish(out_path, lambda fo: decode_stream(fi, fo))
