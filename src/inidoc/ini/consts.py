# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/12 21:52:18
# @Author : Kariko Lin

from enum import Enum, IntFlag


class WhitespaceMode(IntFlag):
    """Which parts of a parsed line get stripped. Editing is always as-is."""
    AsIs = 0
    TrimSections = 1
    TrimNames = 2
    TrimValues = 4


class CaseSensitivity(IntFlag):
    """Whether names compare case-insensitively. Stored text is untouched."""
    AsIs = 0
    CaseInsensitiveSection = 1
    CaseInsensitiveSetting = 2


class InvalidLineMode(int, Enum):
    Throw = 0
    Skip = 1
    Convert = 2  # keep the line as a comment


DEFAULT_COMMENT_CHAR = ';'

FORBIDDEN_HEADER_CHARS = frozenset('\r\n')
FORBIDDEN_NAME_CHARS = frozenset('=\r\n')
FORBIDDEN_VALUE_CHARS = frozenset('\r\n')


def names_equal(a: str | None, b: str | None, ignore_case: bool) -> bool:
    """Name equality used everywhere in a document.

    Two `None`s (null sections) are equal, while `None` never equals a string.
    """
    if a is None or b is None:
        return a is b
    if ignore_case:
        return a.casefold() == b.casefold()
    return a == b
