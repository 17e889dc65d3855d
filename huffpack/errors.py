# Copyright (c) 2025, The huffpack developers; All Rights Reserved
# huffpack is published under the PSF license.
#
# Author: The huffpack developers
"""
Exceptions raised by huffpack.

All of them derive from `HuffmanError`.  The ones describing bad input
also derive from `ValueError`, such that code catching `ValueError` (which
is what the bitarray decode methods raise) keeps working.
"""

__all__ = ['HuffmanError', 'EmptyInputError', 'InvalidFormatError',
           'CorruptStreamError']


class HuffmanError(Exception):
    "Base class of all huffpack errors."


class EmptyInputError(HuffmanError, ValueError):
    "Cannot create a Huffman tree without any symbols."


class InvalidFormatError(HuffmanError, ValueError):
    "Data is not a valid huffpack container (bad magic, truncated header)."


class CorruptStreamError(InvalidFormatError):
    "The packed bit stream does not decode (corrupted or truncated)."
