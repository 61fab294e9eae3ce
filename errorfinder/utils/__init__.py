"""
Utility functions for the error finder.
"""


def is_binary_file(file_path: str) -> bool:
    """Check if a file is binary."""
    try:
        with open(file_path, 'rb') as f:
            chunk = f.read(1024)
    except OSError:
        return False

    if b'\x00' in chunk:
        return True
    # Check for high proportion of non-text bytes
    text_chars = bytearray({7, 8, 9, 10, 12, 13, 27} | set(range(0x20, 0x100)) - {0x7f})
    non_text = sum(1 for byte in chunk if byte not in text_chars)
    return non_text / len(chunk) > 0.3 if chunk else False


def truncate_string(s: str, max_length: int = 100, suffix: str = "...") -> str:
    """Truncate a string to a maximum length."""
    if len(s) <= max_length:
        return s
    return s[:max_length - len(suffix)] + suffix


def line_number(text: str, offset: int) -> int:
    """1-based line number of ``offset`` in ``text``."""
    return text.count("\n", 0, offset) + 1


def column_number(text: str, offset: int) -> int:
    """1-based column of ``offset`` within its line."""
    return offset - (text.rfind("\n", 0, offset) + 1) + 1


def printable(text: str) -> str:
    """Replace undecodable bytes kept as surrogates so ``text`` can be printed."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
