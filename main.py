import argparse
import sys

from typing import Hashable, List, Optional, Sequence
from huffman import HuffmanError, HuffmanTree

MAX_DISPLAY = 100  #: Default truncation length for displayed strings
BITS_PER_SYMBOL = 8  #: Fixed-width size used as the uncompressed baseline

_ESCAPES = {" ": "' '", "\n": "'\\n'", "\t": "'\\t'", "\r": "'\\r'"}


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Huffman coding of a text or file, with code table "
                    "and compression statistics"
    )
    parser.add_argument(
        "text", nargs="?", help="Text to encode (taken literally)"
    )
    parser.add_argument(
        "-f", "--file", help="Read input from file (as raw bytes)"
    )
    parser.add_argument(
        "-w",
        "--max-display",
        type=_non_negative_int,
        default=MAX_DISPLAY,
        help=f"Truncate displayed text/bits to this length "
             f"(default: {MAX_DISPLAY})",
    )
    parser.add_argument(
        "--no-codes",
        action="store_true",
        help="Do not list the code of every symbol",
    )
    return parser


def _non_negative_int(value: str) -> int:
    """Parse a display length, rejecting negative values.

    :param value: Raw command-line value.
    :type value: str
    :returns: The parsed length.
    :rtype: int
    :raises argparse.ArgumentTypeError: If ``value`` is not an integer >= 0.
    """
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid length: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"length must be >= 0, got {n}")
    return n


def _read_input(args) -> Sequence:
    """Return the sequence selected on the command line.

    :param args: Parsed arguments.
    :type args: argparse.Namespace
    :returns: The literal text, or the file contents as bytes.
    :rtype: Sequence
    :raises OSError: If the file cannot be read.
    """
    if args.file is not None:
        with open(args.file, "rb") as f:
            return f.read()
    return args.text


def _fmt_symbol(symbol: Hashable) -> str:
    """Render a symbol for the code listing.

    Whitespace is escaped; bytes are shown as characters when printable
    and as ``0xNN`` otherwise.

    :param symbol: A one-character string or a byte value.
    :type symbol: Hashable
    :returns: Quoted, display-safe representation.
    :rtype: str
    """
    if isinstance(symbol, int):
        if symbol < 128 and chr(symbol) in _ESCAPES:
            return _ESCAPES[chr(symbol)]
        if 32 <= symbol < 127:
            return f"'{chr(symbol)}'"
        return f"0x{symbol:02X}"
    if symbol in _ESCAPES:
        return _ESCAPES[symbol]
    if not symbol.isprintable():
        return repr(symbol)
    return f"'{symbol}'"


def _truncate(
    text: str, limit: int, unit: str, total: Optional[int] = None
) -> str:
    """Shorten ``text`` to ``limit`` characters with a total-length suffix.

    :param text: Text to display.
    :type text: str
    :param limit: Maximum number of characters shown.
    :type limit: int
    :param unit: Unit name for the suffix (e.g. ``"bits"``).
    :type unit: str
    :param total: Count shown in the suffix; defaults to ``len(text)``.
    :type total: Optional[int]
    :returns: ``text`` itself, or its prefix followed by ``... (N unit total)``.
    :rtype: str
    """
    if len(text) <= limit:
        return text
    if total is None:
        total = len(text)
    return f"{text[:limit]}... ({total} {unit} total)"


def _compression_ratio(original_bits: int, encoded_bits: int) -> float:
    """Space saving of the encoding, in percent.

    :param original_bits: Size of the fixed-width input, in bits.
    :type original_bits: int
    :param encoded_bits: Number of markers in the encoding.
    :type encoded_bits: int
    :returns: ``(1 - encoded/original) * 100``, or ``0.0`` for no input.
    :rtype: float
    """
    if original_bits <= 0:
        return 0.0
    return (1.0 - encoded_bits / original_bits) * 100.0


def _as_text(data: Sequence) -> str:
    if isinstance(data, (bytes, bytearray)):
        return data.decode("utf-8", errors="replace")
    return data


def report(data: Sequence, max_display: int, show_codes: bool) -> bool:
    """Build, encode and decode ``data`` and print the statistics.

    :param data: Non-empty input sequence.
    :type data: Sequence
    :param max_display: Truncation length for displayed strings.
    :type max_display: int
    :param show_codes: Whether to list the code of every symbol.
    :type show_codes: bool
    :returns: ``True`` if decoding reproduced ``data``.
    :rtype: bool
    :raises HuffmanError: If any stage of the coding fails.
    """
    tree = HuffmanTree()
    tree.build_tree(data)
    encoded = tree.encode(data)
    decoded = tree.decode(encoded)

    original_bits = len(data) * BITS_PER_SYMBOL
    encoded_bits = len(encoded)

    print("\n=== Huffman Compression ===\n")
    print("Original text:",
          _truncate(_as_text(data), max_display, "symbols", len(data)))
    print(f"Original size: {original_bits} bits ({len(data)} symbols)\n")

    if show_codes:
        print("Huffman Codes:")
        codes = tree.codes
        for symbol in sorted(codes, key=lambda s: (len(codes[s]), codes[s])):
            print(f"  {_fmt_symbol(symbol)} -> {codes[symbol]}")
        print()

    print("Encoded:", _truncate(encoded, max_display, "bits"))
    print(f"Encoded size: {encoded_bits} bits")
    ratio = _compression_ratio(original_bits, encoded_bits)
    print(f"Compression ratio: {ratio:.2f}%\n")

    ok = decoded == data
    print(f"Verification: {'SUCCESS' if ok else 'FAILED'}\n")
    return ok


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI tool.

    :param argv: Argument list; defaults to ``sys.argv[1:]``.
    :type argv: Optional[List[str]]
    :returns: Process exit status.
    :rtype: int
    """
    parser = get_parser()
    args = parser.parse_args(argv)
    if (args.text is None) == (args.file is None):
        parser.error("give exactly one of TEXT or -f FILE")

    try:
        data = _read_input(args)
    except OSError as e:
        print(f"[!] Could not read file {args.file}: {e.strerror}")
        return 1

    if not data:
        print("[!] Input text is empty")
        return 1

    try:
        ok = report(data, args.max_display, not args.no_codes)
    except HuffmanError as e:
        print(f"[!] {e}")
        return 1
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
