# Copyright (c) 2025, The huffpack developers; All Rights Reserved
# huffpack is published under the PSF license.
#
# Author: The huffpack developers
"""
Huffman trees and the code tables derived from them.
"""
import sys
from heapq import heappush, heappop

from bitarray import bitarray, frozenbitarray

from huffpack.errors import EmptyInputError


__all__ = ['Leaf', 'Internal', 'huffman_tree', 'code_table',
           'huffman_code', 'print_code', 'write_dot']


class Node(object):
    """
    There are two types of Node instances (both have 'weight' and 'key'
    attributes):
      * Leaf: has 'symbol' attribute
      * Internal: has 'child' attribute (tuple with both children)

    'key' is the smallest symbol within the subtree of the node.  As the
    subtrees in the heap are disjoint, (weight, key) orders all nodes in
    the heap, and nodes of equal weight are taken lowest byte value first.
    """
    def __lt__(self, other):
        # heapq needs to be able to compare the nodes
        return (self.weight, self.key) < (other.weight, other.key)


class Leaf(Node):

    def __init__(self, symbol, weight):
        self.symbol = self.key = symbol
        self.weight = weight

    def __repr__(self):
        return 'Leaf(%r, %d)' % (self.symbol, self.weight)


class Internal(Node):

    def __init__(self, left, right):
        self.child = left, right
        self.weight = left.weight + right.weight
        self.key = min(left.key, right.key)

    def __repr__(self):
        return 'Internal(%r, %r)' % self.child


def _check_freq_map(freq):
    if not isinstance(freq, dict):
        raise TypeError("dict expected, got '%s'" % type(freq).__name__)
    for sym, f in freq.items():
        if not isinstance(sym, int):
            raise TypeError("int expected for symbol, got '%s'" %
                            type(sym).__name__)
        if not 0 <= sym < 256:
            raise ValueError("byte value must be in range(0, 256), got %d" %
                             sym)
        if not isinstance(f, int):
            raise TypeError("int expected for frequency, got '%s'" %
                            type(f).__name__)
        if f <= 0:
            raise ValueError("frequency of symbol %d must be > 0, got %d" %
                             (sym, f))


def huffman_tree(__freq_map):
    """huffman_tree(dict, /) -> Node

Given a frequency map, a dict mapping byte values to their (positive)
frequency, construct a Huffman tree and return its root node.
When the frequency map contains a single symbol, the root node is a `Leaf`.
Raises `EmptyInputError` when the frequency map is empty.
"""
    _check_freq_map(__freq_map)
    if len(__freq_map) == 0:
        raise EmptyInputError("cannot create Huffman tree with no symbols")

    minheap = []
    # create all leaf nodes and push them onto the queue
    for sym, f in __freq_map.items():
        heappush(minheap, Leaf(sym, f))

    # repeat the process until only one node remains
    while len(minheap) > 1:
        # take the two nodes with lowest weights from the queue
        # to construct a new internal node and push it onto the queue
        left = heappop(minheap)
        right = heappop(minheap)
        heappush(minheap, Internal(left, right))

    # the single remaining node is the root of the Huffman tree
    return minheap[0]


def code_table(__root):
    """code_table(Node, /) -> dict

Given the root node of a Huffman tree, return the Huffman code, i.e. a dict
mapping byte values to (big-endian) frozenbitarrays.  A left edge appends
a 0 bit, a right edge a 1 bit.
"""
    if isinstance(__root, Leaf):
        # Only one symbol: Normally the code could be represented with zero
        # bits.  However, we need at least one bit per symbol for the
        # length of the stream to tell the number of symbols.  So we use
        # a single 0 bit.  This is an incomplete code, a 1 bit has no
        # meaning and will not decode.
        return {__root.symbol: frozenbitarray('0', 'big')}

    result = {}

    def traverse(nd, prefix=bitarray(0, 'big')):
        try:                    # leaf
            result[nd.symbol] = frozenbitarray(prefix)
        except AttributeError:  # internal, so traverse each child
            traverse(nd.child[0], prefix + '0')
            traverse(nd.child[1], prefix + '1')

    traverse(__root)
    return result


def huffman_code(__freq_map):
    """huffman_code(dict, /) -> dict

Given a frequency map of byte values, calculate the Huffman code, i.e. a dict
mapping those byte values to frozenbitarrays.
Same as `code_table(huffman_tree(freq_map))`.
"""
    return code_table(huffman_tree(__freq_map))


def print_code(freq, codedict, stream=None):
    """
    Given a frequency map (dictionary mapping symbols to their frequency)
    and a codedict, print them in a readable form.
    """
    if stream is None:
        stream = sys.stdout

    special_ascii = {0: 'NUL', 9: 'TAB', 10: 'LF', 13: 'CR', 127: 'DEL'}
    def disp_char(i):
        if 32 <= i < 127:
            return repr(chr(i))
        return special_ascii.get(i, '')

    stream.write(' symbol     char    hex   frequency     Huffman code\n')
    stream.write(70 * '-' + '\n')
    for i in sorted(codedict, key=lambda c: (freq.get(c, 0), -c),
                    reverse=True):
        stream.write('%7r     %-4s    0x%02x %10s     %s\n' % (
            i, disp_char(i), i, freq.get(i, '-'), codedict[i].to01()))


def write_dot(tree, stream):
    """
    Given a Huffman tree, write a graphviz '.dot' representation of the
    tree to the text stream.  Render using: dot -Tpng tree.dot -O
    """
    def write_nd(nd):
        if isinstance(nd, Leaf):
            stream.write('  %d  [label="%d: 0x%02x"];\n' %
                         (id(nd), nd.weight, nd.symbol))
            return

        stream.write('  %d  [shape=circle, style=filled, '
                     'fillcolor=grey, label="%d"];\n' % (id(nd), nd.weight))
        for k in range(2):
            stream.write('  %d->%d [label="%d"];\n' %
                         (id(nd), id(nd.child[k]), k))
        for k in range(2):
            write_nd(nd.child[k])

    stream.write('digraph BT {\n')
    stream.write('  node [shape=box, fontsize=20, fontname="Arial"];\n')
    write_nd(tree)
    stream.write('}\n')
