# Copyright (c) 2025, The huffpack developers; All Rights Reserved
# huffpack is published under the PSF license.
#
# Author: The huffpack developers
"""
Byte frequency analysis.
"""
from collections import Counter


DEFAULT_CHUNK_SIZE = 1 << 16

__all__ = ['DEFAULT_CHUNK_SIZE', 'frequencies', 'count_frequencies']


def _table(cnt):
    # bytes which do not occur are never in a Counter, so we only need to
    # fix the order of the keys
    return {sym: cnt[sym] for sym in sorted(cnt)}


def frequencies(__data):
    """frequencies(bytes, /) -> dict

Return a frequency map, a dict mapping each byte value (0 to 255) which
occurs in the given bytes-like object to the number of its occurrences.
Byte values which do not occur have no entry.  Keys are in ascending order.
"""
    if isinstance(__data, str):
        raise TypeError("bytes-like object expected, got 'str'")
    return _table(Counter(memoryview(__data).cast('B')))


def count_frequencies(stream, chunk_size=DEFAULT_CHUNK_SIZE):
    """count_frequencies(stream, chunk_size=65536) -> dict

Read the binary `stream` from its current position until EOF, and return
its frequency map (see `frequencies()`).  The stream is read in chunks of
`chunk_size` bytes.  The stream position is left at EOF.
"""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0, got %d" % chunk_size)
    cnt = Counter()
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        cnt.update(chunk)
    return _table(cnt)
