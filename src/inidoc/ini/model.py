# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/12 22:31:57
# @Author : Kariko Lin

"""
Ordered INI structure, which keeps what `configparser` throws away:
comments, duplicated settings, and the original order of everything.

    ```ini
    ; comments above a setting belong to that setting.
    key = val  ; NOT a comment, the value is ` val  ; NOT a comment`.

    ; comments above a header belong to the section.
    [section]
    key233=val666
    key233=val114514  ; duplicated names are fine.
    ```

Settings before any header are kept in the *null section*
(a section whose name is `None`), which is always the first one.
"""

import warnings
from dataclasses import dataclass, field
from io import TextIOBase
from typing import Iterator

from ..abstract import Validatable
from .consts import (
    DEFAULT_COMMENT_CHAR,
    FORBIDDEN_HEADER_CHARS,
    FORBIDDEN_NAME_CHARS,
    FORBIDDEN_VALUE_CHARS,
    CaseSensitivity,
    InvalidLineMode,
    WhitespaceMode,
    names_equal
)
from .exceptions import (
    DuplicateNullSection,
    DuplicateSection,
    DuplicateSectionName,
    InvalidName,
    InvalidSectionName,
    InvalidSetting,
    InvalidValue,
    MissingSettingName
)


def _write_comments(
    fp: TextIOBase, comments: list[str], comment_char: str
) -> None:
    for i in comments:
        fp.write(f'{comment_char}{i}\n')


@dataclass
class IniSetting(Validatable):
    name: str | None = ''
    value: str | None = ''
    comments: list[str] = field(default_factory=list)

    def clone(self) -> 'IniSetting':
        return IniSetting(self.name, self.value, self.comments.copy())

    def validate(self) -> None:
        if self.name is None:
            raise InvalidName(
                "Setting name can't be null.", self.name, self.value)
        if FORBIDDEN_NAME_CHARS.intersection(self.name):
            raise InvalidName(
                'Forbidden character in setting name', self.name, self.value)
        if self.value is None:
            raise InvalidValue(
                "Setting value can't be null.", self.name, self.value)
        if FORBIDDEN_VALUE_CHARS.intersection(self.value):
            raise InvalidValue(
                'Forbidden character in setting value', self.name, self.value)

    def serialize(self, fp: TextIOBase, comment_char: str) -> None:
        # no escaping, `=` in value is legal.
        _write_comments(fp, self.comments, comment_char)
        fp.write(f'{self.name}={self.value}\n')

    def __str__(self) -> str:
        return f'INI Setting: {self.name}={self.value}'


@dataclass
class IniSection(Validatable):
    """INI 小节。按顺序维护键值对，允许重名。

    `case` 仅影响查找时如何比较键名。
    从文档中载入时会复制一次文档的设置，此后二者互不影响。
    """
    name: str | None = None
    comments: list[str] = field(default_factory=list)
    settings: list[IniSetting] = field(default_factory=list)
    case: CaseSensitivity = field(
        default=CaseSensitivity.AsIs, compare=False)

    @property
    def _ignore_case(self) -> bool:
        return bool(self.case & CaseSensitivity.CaseInsensitiveSetting)

    def _match(self, name: str | None) -> Iterator[IniSetting]:
        for i in self.settings:
            if names_equal(i.name, name, self._ignore_case):
                yield i

    def lookup(self, name: str | None) -> IniSetting | None:
        """First setting called `name`, or `None`."""
        return next(self._match(name), None)

    def lookup_all(self, name: str | None) -> list[IniSetting]:
        return list(self._match(name))

    def values_of(self, name: str | None) -> list[str | None]:
        return [i.value for i in self._match(name)]

    def remove_all(self, name: str | None) -> None:
        self.settings = [
            i for i in self.settings
            if not names_equal(i.name, name, self._ignore_case)
        ]

    def add(self, name: str = '', value: str = '') -> IniSetting:
        """Append a new setting, even if the name already exists."""
        ret = IniSetting(name, value)
        self.settings.append(ret)
        return ret

    def sort(self, ascending: bool = True) -> None:
        # list.sort is stable in both directions.
        self.settings.sort(key=lambda x: x.name or '', reverse=not ascending)

    def clone(self) -> 'IniSection':
        return IniSection(
            self.name,
            self.comments.copy(),
            [i.clone() for i in self.settings],
            self.case)

    def validate(self) -> None:
        if (self.name is not None
                and FORBIDDEN_HEADER_CHARS.intersection(self.name)):
            raise InvalidSectionName(self.name)
        for i in self.settings:
            try:
                i.validate()
            except InvalidSetting as e:
                e.section = self.name
                e.add_note(f'in section [{self.name}]')
                raise

    def serialize(self, fp: TextIOBase, comment_char: str) -> None:
        _write_comments(fp, self.comments, comment_char)
        if self.name is not None:
            fp.write(f'[{self.name}]\n')
        for i in self.settings:
            i.serialize(fp, comment_char)

    def __getitem__(self, index: int) -> IniSetting:
        return self.settings[index]

    def __contains__(self, name: object) -> bool:
        return (name is None or isinstance(name, str)) and (
            self.lookup(name) is not None)

    def __iter__(self) -> Iterator[IniSetting]:
        return iter(self.settings)

    def __len__(self) -> int:
        return len(self.settings)

    def __str__(self) -> str:
        return '<null section>' if self.name is None else f'[{self.name}]'


class IniDocument(Validatable):
    """INI 文件表示：有序的小节列表，外加文件末尾的注释。

    `whitespace`、`case`、`invalid_lines` 只在读取时生效，保存时原样写出。
    值可以直接按`doc[section, key]`读写；赋值`None`即删除该键，
    小节因此变空的话也一并删除。
    """
    def __init__(
        self, *,
        comment_char: str = DEFAULT_COMMENT_CHAR,
        whitespace: WhitespaceMode = WhitespaceMode.AsIs,
        case: CaseSensitivity = CaseSensitivity.AsIs,
        invalid_lines: InvalidLineMode = InvalidLineMode.Throw
    ) -> None:
        self._sections: list[IniSection] = []
        self.comment_char = comment_char
        self.end_comments: list[str] | None = None
        self.whitespace = whitespace
        self.case = case
        self.invalid_lines = invalid_lines

    @property
    def comment_char(self) -> str:
        return self._comment_char

    @comment_char.setter
    def comment_char(self, value: str) -> None:
        # the parser only compares the first char of a line.
        if not isinstance(value, str) or len(value) != 1:
            raise ValueError(
                f'Comment char must be a single character, got {value!r}')
        self._comment_char = value

    @property
    def _ignore_case(self) -> bool:
        return bool(self.case & CaseSensitivity.CaseInsensitiveSection)

    @property
    def sections(self) -> tuple[IniSection, ...]:
        """A snapshot. Edit through the document methods instead."""
        return tuple(self._sections)

    @property
    def names(self) -> list[str | None]:
        return [i.name for i in self._sections]

    def _replace(
        self, sections: list[IniSection], end_comments: list[str] | None
    ) -> None:
        """for IniParser, after a successful pass."""
        self._sections = sections
        self.end_comments = end_comments

    def _index(self, name: str | None) -> int | None:
        for idx, i in enumerate(self._sections):
            if names_equal(i.name, name, self._ignore_case):
                return idx
        return None

    def section(self, name: str | None) -> IniSection | None:
        idx = self._index(name)
        return None if idx is None else self._sections[idx]

    def _to_section(self, section: str | IniSection | None) -> IniSection:
        if isinstance(section, IniSection):
            return section
        return IniSection(section, case=self.case)

    def insert_section(
        self, index: int, section: str | IniSection | None
    ) -> IniSection:
        section = self._to_section(section)
        if self._index(section.name) is not None:
            raise DuplicateSection(section.name)
        self._sections.insert(index, section)
        return section

    def add_section(
        self, section: str | IniSection | None = None
    ) -> IniSection:
        """Append a section. The null section is always put first."""
        section = self._to_section(section)
        if section.name is None:
            return self.insert_section(0, section)
        return self.insert_section(len(self._sections), section)

    def remove_section(self, name: str | None) -> None:
        self._sections = [
            i for i in self._sections
            if not names_equal(i.name, name, self._ignore_case)
        ]

    def remove_section_at(self, index: int) -> None:
        del self._sections[index]

    def get_value(self, section: str | None, setting: str) -> str | None:
        if (sect := self.section(section)) is None:
            return None
        if (item := sect.lookup(setting)) is None:
            return None
        return item.value

    def set_value(
        self, section: str | None, setting: str, value: str | None
    ) -> None:
        if value is None:
            return self.delete_value(section, setting)
        if setting is None:
            raise MissingSettingName(section)
        if (sect := self.section(section)) is None:
            sect = self.add_section(section)
        matches = sect.lookup_all(setting)
        if not matches:
            sect.add(setting, value)
            return
        if len(matches) > 1:
            warnings.warn(
                f'{sect} has {len(matches)} settings named "{setting}", '
                'only the first one is updated.')
        matches[0].value = value

    def delete_value(self, section: str | None, setting: str) -> None:
        """Remove the first matching setting, and the section if emptied."""
        if setting is None:
            raise MissingSettingName(section)
        if (sect := self.section(section)) is None:
            return
        if (item := sect.lookup(setting)) is None:
            return
        sect.settings.remove(item)
        if not sect.settings:
            self._sections.remove(sect)

    def __getitem__(
        self, key: str | None | tuple[str | None, str]
    ) -> IniSection | str | None:
        if isinstance(key, tuple):
            return self.get_value(*key)
        if (sect := self.section(key)) is None:
            raise KeyError(key)
        return sect

    def __setitem__(
        self, key: tuple[str | None, str], value: str | None
    ) -> None:
        if not isinstance(key, tuple):
            raise TypeError(
                'Use `doc[section, setting] = value`, '
                'or `add_section()` for whole sections.')
        self.set_value(*key, value)

    def __delitem__(self, key: str | None | tuple[str | None, str]) -> None:
        if isinstance(key, tuple):
            return self.delete_value(*key)
        if self._index(key) is None:
            raise KeyError(key)
        self.remove_section(key)

    def __contains__(self, name: object) -> bool:
        return (name is None or isinstance(name, str)) and (
            self._index(name) is not None)

    def __iter__(self) -> Iterator[IniSection]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniDocument):
            return NotImplemented
        return (
            self.comment_char == other.comment_char
            and self._sections == other._sections
            and (self.end_comments or []) == (other.end_comments or []))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return 'IniDocument { .sections = %d }' % len(self._sections)

    def sort(self, ascending: bool = True, recursive: bool = False) -> None:
        self._sections.sort(
            key=lambda x: x.name or '', reverse=not ascending)
        if recursive:
            for i in self._sections:
                i.sort(ascending)
        if (idx := self._index(None)) is not None:
            self._sections.insert(0, self._sections.pop(idx))

    def validate(self) -> None:
        nulls = [i for i, s in enumerate(self._sections) if s.name is None]
        if len(nulls) > 1:
            raise DuplicateNullSection(nulls)
        for i in self._sections:
            if i.name is None:
                continue
            same = [
                j for j, s in enumerate(self._sections)
                if names_equal(s.name, i.name, self._ignore_case)
            ]
            if len(same) > 1:
                raise DuplicateSectionName(i.name, same)
        for i in self._sections:
            i.validate()

    def serialize(self, fp: TextIOBase) -> None:
        """Validate, then write the whole document as INI text.

        Nothing is written if the document is invalid.
        """
        self.validate()
        if (null_sect := self.section(None)) is not None:
            null_sect.serialize(fp, self.comment_char)
        for i in self._sections:
            if i.name is not None:
                i.serialize(fp, self.comment_char)
        _write_comments(fp, self.end_comments or [], self.comment_char)
