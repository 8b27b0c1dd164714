"""
String obfuscation helpers: split a string into blocks, then truncate or mask
the tail of every block.
"""

from typing import List


def divide(text: str, n: int) -> List[str]:
    """
    Cut ``text`` into blocks using a fixed stride of ``len(text) // n``.

    When the length is not a multiple of ``n`` the remainder ends up in an
    extra short block at the end. The stride is never below 1.
    """
    stride = max(1, len(text) // max(1, n))
    return [text[i:i + stride] for i in range(0, len(text), stride)]


def truncate(text: str, max_length: int, n: int, ellipsis: str = "...") -> str:
    """Keep the first ``max_length`` chars of each of ``n`` blocks, each followed by ``ellipsis``."""
    if n * max_length >= len(text):
        return text
    keep = max(0, max_length)
    return "".join(block[:keep] + ellipsis for block in divide(text, n))


def mask(text: str, max_length: int, n: int, mask_char: str = "*") -> str:
    """Like :func:`truncate` but the cut part of every block is replaced by ``mask_char``."""
    if n * max_length >= len(text):
        return text
    keep = max(0, max_length)
    return "".join(
        block[:keep] + mask_char * max(0, len(block) - keep) for block in divide(text, n)
    )


def capitalize_first_letter(text: str = "") -> str:
    # unlike str.capitalize() the rest of the string is left alone
    return text[:1].upper() + text[1:]
