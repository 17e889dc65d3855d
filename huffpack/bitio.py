# Copyright (c) 2025, The huffpack developers; All Rights Reserved
# huffpack is published under the PSF license.
#
# Author: The huffpack developers
"""
Bit level writer and reader on top of binary streams.

Bits are packed most significant bit first, that is the bitarrays used here
are big-endian.  The number of padding bits, which fill up the last byte
of a stream, has to be stored elsewhere (huffpack stores it in the
container header).
"""
import os

from bitarray import bitarray

from huffpack.errors import InvalidFormatError, CorruptStreamError
from huffpack.freq import DEFAULT_CHUNK_SIZE


__all__ = ['BitWriter', 'BitReader']


class BitWriter(object):
    """BitWriter(stream)

Accumulate bits and write them, packed into bytes, to the binary `stream`.
Every completed byte is written as soon as its 8 bits have been collected.
Use `flush()` to write the final partial byte.
"""
    def __init__(self, stream):
        self.stream = stream
        self._buf = bitarray(0, 'big')
        self._total = 0
        self._closed = False

    @property
    def bits_filled(self):
        "number of bits (0 to 7) in the current partial byte"
        return len(self._buf)

    @property
    def total_bits(self):
        "number of bits written so far"
        return self._total

    @property
    def closed(self):
        return self._closed

    def _check(self):
        if self._closed:
            raise ValueError("write to flushed BitWriter")

    def _drain(self):
        n = len(self._buf) & ~7  # number of bits in complete bytes
        if n:
            self.stream.write(self._buf[:n].tobytes())
            del self._buf[:n]

    def write_bit(self, bit):
        """write_bit(bit)

Append a single bit (0 or 1, or a bool).
"""
        self._check()
        self._buf.append(bit)
        self._total += 1
        self._drain()

    def write(self, bits):
        """write(bits)

Append a bit pattern, most significant bit first.  `bits` may be a
bitarray, a string of '0' and '1', or an iterable of 0 and 1.
"""
        self._check()
        n = len(self._buf)
        self._buf.extend(bits)
        self._total += len(self._buf) - n
        self._drain()

    def flush(self):
        """flush() -> int

Write the final partial byte (zero padded), flush the underlying stream
and sync it to disk (when it is backed by a file descriptor).  Return the
number of padding bits (0 to 7).  After flushing, no more bits may be
written.
"""
        self._check()
        padbits = (8 - self._total % 8) % 8
        if self._buf:
            self.stream.write(self._buf.tobytes())
            self._buf.clear()
        self.stream.flush()
        try:
            fd = self.stream.fileno()
        except (AttributeError, OSError):
            # in-memory streams have no file descriptor
            pass
        else:
            os.fsync(fd)
        self._closed = True
        return padbits


class BitReader(object):
    """BitReader(stream, padbits, chunk_size=65536)

Iterator over the bits (0 or 1) of the binary `stream`, starting at its
current position.  The last `padbits` bits of the stream (the low order
bits of its final byte) are padding and are not produced.  The stream is
read in chunks, always one chunk ahead, such that the final chunk is known
while it is being consumed.  Iteration stops at the end of the valid bits.
Padding bits which are not zero raise `CorruptStreamError`.
"""
    def __init__(self, stream, padbits, chunk_size=DEFAULT_CHUNK_SIZE):
        if not isinstance(padbits, int):
            raise TypeError("int expected for padbits, got '%s'" %
                            type(padbits).__name__)
        if not 0 <= padbits < 8:
            raise ValueError("padbits must be in range(0, 8), got %d" %
                             padbits)
        if chunk_size <= 0:
            raise ValueError("chunk_size must be > 0, got %d" % chunk_size)
        self.stream = stream
        self.padbits = padbits
        self.chunk_size = chunk_size
        self._bits = self._iterbits()

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._bits)

    def _iterbits(self):
        current = self.stream.read(self.chunk_size)
        if not current and self.padbits:
            raise InvalidFormatError("%d padding bits, but no data" %
                                     self.padbits)
        while current:
            following = self.stream.read(self.chunk_size)
            a = bitarray(0, 'big')
            a.frombytes(current)
            if not following and self.padbits:  # final chunk
                # BitWriter pads with zeros, so set padding bits mean
                # the stream was cut or altered
                if a[-self.padbits:].any():
                    raise CorruptStreamError("padding bits are not zero "
                                             "(truncated data?)")
                del a[-self.padbits:]
            yield from a
            current = following
