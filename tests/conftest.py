import sys
from pathlib import Path
import importlib
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def m():
    """Lazily import the main module for tests to avoid module-level import."""
    return importlib.import_module("main")


@pytest.fixture()
def tree():
    """Provide a fresh, unbuilt Huffman tree."""
    from huffman import HuffmanTree

    return HuffmanTree()


@pytest.fixture()
def text_file(tmp_path: Path):
    """Create a small text file with a skewed symbol distribution."""
    path = tmp_path / "input.txt"
    path.write_bytes(b"aaaaaaaaaaaaaaaaaaaabbbbbccd\n")
    return path


def is_prefix_free(codes):
    """Return ``True`` if no code in ``codes`` is a prefix of another."""
    values = sorted(codes.values())
    return all(
        not b.startswith(a) for a, b in zip(values, values[1:])
    )


@pytest.fixture()
def prefix_free_fn():
    """
    Fixture that provides the is_prefix_free helper without importing conftest.
    """
    return is_prefix_free
