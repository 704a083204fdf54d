"""
text_case.py - Naming Convention Conversion

Converts camelCase / PascalCase names to kebab-case. Shared by the tree
scanner and the import rewriter so both derive identical target names.
"""

from typing import Tuple
import posixpath


# Character classes used for word-boundary detection
_LOWER = "lower"
_UPPER = "upper"
_DIGIT = "digit"
_OTHER = "other"


def _char_class(ch: str) -> str:
    if "a" <= ch <= "z":
        return _LOWER
    if "A" <= ch <= "Z":
        return _UPPER
    if "0" <= ch <= "9":
        return _DIGIT
    return _OTHER


def to_kebab_case(value: str) -> str:
    """
    Convert a camelCase string to kebab-case

    A hyphen goes before an uppercase letter when the previous character is
    a lowercase letter or digit (``user123Id`` -> ``user123-id``), or when
    the previous character is uppercase and the next one is lowercase, which
    splits an acronym from the word after it (``XMLHttpRequest`` ->
    ``xml-http-request``). An acronym run with no lowercase letter after it
    stays joined (``XMLHTTPSConnection`` -> ``xmlhttps-connection``).

    Args:
        value: Name to convert

    Returns:
        Kebab-case name
    """
    if not value:
        return ""

    if len(value) == 1:
        return value.lower()

    # Already kebab-case
    if "-" in value and value == value.lower():
        return value

    chars = []
    last = len(value) - 1
    for i, ch in enumerate(value):
        if i > 0 and _char_class(ch) == _UPPER:
            prev = _char_class(value[i - 1])
            nxt = _char_class(value[i + 1]) if i < last else _OTHER
            if prev in (_LOWER, _DIGIT) or (prev == _UPPER and nxt == _LOWER):
                chars.append("-")
        chars.append(ch)

    return "".join(chars).lower()


def split_extension(name: str) -> Tuple[str, str]:
    """
    Split a file name into name portion and final extension

    The extension runs from the last ``.`` onward; a name whose only dot is
    the leading one has no extension.

    Args:
        name: File name (single path segment)

    Returns:
        (stem, extension), extension is "" when there is none
    """
    return posixpath.splitext(name)


def convert_file_name(name: str) -> str:
    """Convert the name portion of a file name, keeping its extension"""
    stem, ext = split_extension(name)
    return to_kebab_case(stem) + ext


def convert_directory_name(name: str) -> str:
    """Convert a directory name as a whole"""
    return to_kebab_case(name)
