# -*- encoding: utf-8 -*-
# @File   : exceptions.py
# @Time   : 2024/10/12 22:05:41
# @Author : Kariko Lin

from typing import Sequence


class IniError(Exception):
    """Base of everything this package raises on purpose."""
    pass


class MalformedLine(IniError, ValueError):
    """A line that is neither blank, comment, section nor setting."""
    def __init__(self, lineno: int, line: str) -> None:
        super().__init__(
            f'Line {lineno} is neither section, setting, '
            f'comment, or empty: {line}')
        self.lineno = lineno
        self.line = line


class DuplicateSection(IniError, ValueError):
    def __init__(self, name: str | None) -> None:
        super().__init__(f'A section named {name!r} already exists.')
        self.name = name


class MissingSettingName(IniError, ValueError):
    def __init__(self, section: str | None) -> None:
        super().__init__(
            f'Setting name is required to write into section {section!r}.')
        self.section = section


class IniValidationError(IniError):
    pass


class InvalidSectionName(IniValidationError):
    def __init__(self, section: str | None) -> None:
        super().__init__(f'Forbidden character in section name {section!r}')
        self.section = section


class InvalidSetting(IniValidationError):
    def __init__(
        self, message: str, name: str | None, value: str | None
    ) -> None:
        super().__init__(message)
        self.name = name
        self.value = value
        # filled in by the owning section when re-raised.
        self.section: str | None = None

    def __str__(self) -> str:
        return f'{self.args[0]} ({self.name!r}={self.value!r})'


class InvalidName(InvalidSetting):
    pass


class InvalidValue(InvalidSetting):
    pass


class DuplicateNullSection(IniValidationError):
    def __init__(self, indices: Sequence[int]) -> None:
        super().__init__(
            'Only one unnamed section is allowed, '
            f'found at positions {list(indices)}')
        self.indices = list(indices)


class DuplicateSectionName(IniValidationError):
    def __init__(self, name: str, indices: Sequence[int]) -> None:
        super().__init__(
            f'Section name {name!r} is used at positions {list(indices)}')
        self.name = name
        self.indices = list(indices)
