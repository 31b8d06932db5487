import heapq
from collections import Counter
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

LEFT = "0"  #: Marker for a step to the left child
RIGHT = "1"  #: Marker for a step to the right child


class HuffmanError(Exception):
    """Base class for all errors raised by :class:`HuffmanTree`."""


class InvalidInputError(HuffmanError, ValueError):
    """Raised when a tree is built from an empty sequence."""


class NotBuiltError(HuffmanError, RuntimeError):
    """Raised when encoding or decoding before any successful build."""


class UnknownSymbolError(HuffmanError, LookupError):
    """Raised when encoding a symbol that is absent from the code table.

    :ivar symbol: The offending symbol.
    """

    def __init__(self, symbol):
        super().__init__(f"Symbol {symbol!r} not found in Huffman tree")
        self.symbol = symbol


class InvalidEncodingError(HuffmanError, ValueError):
    """Raised when a bit-string holds a foreign marker or falls off the tree.

    :ivar position: Index of the marker that could not be consumed.
    """

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (at position {position})")
        self.position = position


class IncompleteSequenceError(HuffmanError, ValueError):
    """Raised when a bit-string ends in the middle of a code.

    :ivar decoded_count: Number of symbols fully resolved before the end.
    """

    def __init__(self, decoded_count: int):
        super().__init__(
            "Invalid encoded text: incomplete sequence "
            "(does not end at a symbol)"
        )
        self.decoded_count = decoded_count


class HuffmanNode:
    """Node for a standard binary Huffman tree.

    :ivar symbol: The symbol stored at a leaf; ``None`` for internal nodes.
    :type symbol: Hashable | None
    :ivar freq: Frequency (weight) of the subtree rooted at this node.
    :type freq: int
    :ivar left: Left child node.
    :type left: HuffmanNode | None
    :ivar right: Right child node.
    :type right: HuffmanNode | None
    :ivar order: Insertion sequence number, used to break frequency ties.
    :type order: int
    """

    def __init__(self, symbol=None, freq=0, left=None, right=None, order=0):
        self.symbol = symbol
        self.freq = freq
        self.left = left
        self.right = right
        self.order = order

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __lt__(self, other):
        """Order nodes by frequency (for priority queues).

        Equal frequencies are resolved in favour of the node inserted last,
        so a given input always yields the same tree.

        :param other: Another node to compare with.
        :type other: HuffmanNode
        :returns: ``True`` if this node should be extracted before ``other``.
        :rtype: bool
        """
        if self.freq != other.freq:
            return self.freq < other.freq
        return self.order > other.order


class HuffmanTree:
    """Huffman encoder/decoder over in-memory symbol sequences.

    The tree, frequency table and code table are replaced as a whole on
    every :meth:`build_tree` call. An instance is not thread-safe; guard it
    with a lock if it is shared between threads.

    :ivar root: Root of the current tree, ``None`` until built.
    :type root: HuffmanNode | None
    """

    def __init__(self):
        """Initialize an unbuilt tree.

        :returns: None
        :rtype: None
        """
        self.root: Optional[HuffmanNode] = None
        self._frequencies: Dict[Hashable, int] = {}
        self._codes: Dict[Hashable, str] = {}
        self._kind = str

    @property
    def frequencies(self) -> Dict[Hashable, int]:
        """Symbol counts of the most recently built input (a copy)."""
        return dict(self._frequencies)

    @property
    def codes(self) -> Dict[Hashable, str]:
        """Symbol to code mapping of the current tree (a copy)."""
        return dict(self._codes)

    @property
    def is_built(self) -> bool:
        return self.root is not None

    def build_tree(self, sequence: Sequence) -> None:
        """Build the Huffman tree and code table for ``sequence``.

        A sequence with a single distinct symbol yields a root whose only
        child is that symbol's leaf (on the left), so the symbol is coded
        as ``"0"``.

        :param sequence: Non-empty ``str``, ``bytes`` or other sequence of
                         hashable symbols.
        :type sequence: Sequence
        :returns: None
        :rtype: None
        :raises InvalidInputError: If ``sequence`` is empty.
        """
        if len(sequence) == 0:
            raise InvalidInputError("Input text cannot be empty")

        frequencies = self._calculate_frequencies(sequence)

        heap = [
            HuffmanNode(symbol=sym, freq=freq, order=i)
            for i, (sym, freq) in enumerate(frequencies.items())
        ]
        heapq.heapify(heap)
        order = len(heap)

        if len(heap) == 1:
            leaf = heap[0]
            root = HuffmanNode(freq=leaf.freq, left=leaf, order=order)
        else:
            while len(heap) > 1:
                left = heapq.heappop(heap)
                right = heapq.heappop(heap)
                merged = HuffmanNode(
                    freq=left.freq + right.freq,
                    left=left,
                    right=right,
                    order=order,
                )
                order += 1
                heapq.heappush(heap, merged)
            root = heap[0]

        self._codes = self._generate_codes(root)
        self._frequencies = frequencies
        self._kind = _sequence_kind(sequence)
        self.root = root

    @staticmethod
    def _calculate_frequencies(sequence: Sequence) -> Dict[Hashable, int]:
        # Counter keeps first-occurrence order, which fixes leaf order.
        return dict(Counter(sequence))

    @staticmethod
    def _generate_codes(root: HuffmanNode) -> Dict[Hashable, str]:
        """Assign every leaf the path from ``root`` to it.

        The tree is walked depth-first with an explicit stack, so very
        skewed trees do not hit the recursion limit.

        :param root: Root of a built tree.
        :type root: HuffmanNode
        :returns: Mapping from symbol to its code.
        :rtype: Dict[Hashable, str]
        """
        codes: Dict[Hashable, str] = {}
        stack: List[Tuple[HuffmanNode, str]] = [(root, "")]
        while stack:
            node, path = stack.pop()
            if node.is_leaf:
                codes[node.symbol] = path or LEFT
                continue
            if node.right is not None:
                stack.append((node.right, path + RIGHT))
            if node.left is not None:
                stack.append((node.left, path + LEFT))
        return codes

    def encode(self, sequence: Sequence) -> str:
        """Encode ``sequence`` into a string of ``"0"``/``"1"`` markers.

        :param sequence: Symbols to encode; all must be in the code table.
        :type sequence: Sequence
        :returns: Concatenation of the symbols' codes, in input order.
        :rtype: str
        :raises NotBuiltError: If no tree has been built yet.
        :raises UnknownSymbolError: If a symbol has no code.
        """
        if self.root is None:
            raise NotBuiltError("Tree not built. Call build_tree first.")

        parts = []
        for symbol in sequence:
            code = self._codes.get(symbol)
            if code is None:
                raise UnknownSymbolError(symbol)
            parts.append(code)
        return "".join(parts)

    def decode(self, bits: str) -> Sequence:
        """Decode a marker string produced by :meth:`encode`.

        :param bits: String of ``"0"``/``"1"`` markers.
        :type bits: str
        :returns: Decoded symbols, of the same kind as the built input
                  (see :func:`_sequence_kind`).
        :rtype: Sequence
        :raises NotBuiltError: If no tree has been built yet.
        :raises InvalidEncodingError: If a marker is neither ``"0"`` nor
                                      ``"1"``, or leads off the tree.
        :raises IncompleteSequenceError: If ``bits`` ends mid-code.
        """
        root = self.root
        if root is None:
            raise NotBuiltError("Tree not built. Call build_tree first.")

        if root.right is None and root.left is not None and root.left.is_leaf:
            return self._decode_single(bits)

        decoded = []
        current = root
        for pos, bit in enumerate(bits):
            if bit == LEFT:
                current = current.left
            elif bit == RIGHT:
                current = current.right
            else:
                raise InvalidEncodingError(
                    "Invalid encoded text. "
                    "Must contain only '0' and '1' characters",
                    pos,
                )

            if current is None:
                raise InvalidEncodingError(
                    "Invalid encoded text: traversal went beyond tree", pos
                )

            if current.is_leaf:
                decoded.append(current.symbol)
                current = root

        if current is not root:
            raise IncompleteSequenceError(len(decoded))

        return self._join(decoded)

    def _decode_single(self, bits: str) -> Sequence:
        """Decode against a single-symbol tree: one ``"0"`` per symbol."""
        symbol = self.root.left.symbol
        for pos, bit in enumerate(bits):
            if bit != LEFT:
                raise InvalidEncodingError(
                    "Invalid encoded text for single-symbol tree", pos
                )
        return self._join([symbol] * len(bits))

    def _join(self, symbols: List) -> Sequence:
        if self._kind is str:
            return "".join(symbols)
        return self._kind(symbols)


def _sequence_kind(sequence: Sequence) -> type:
    """Return the output type ``decode`` should produce for ``sequence``.

    Built-in sequences keep their own type; anything that cannot be
    rebuilt from a list of its symbols (``range``, custom sequences,
    subclasses) decodes to a ``list``.

    :param sequence: Sequence the tree is being built from.
    :type sequence: Sequence
    :returns: ``str``, ``bytes``, ``bytearray``, ``tuple`` or ``list``.
    :rtype: type
    """
    kind = type(sequence)
    if kind in (str, bytes, bytearray, tuple, list):
        return kind
    return list
