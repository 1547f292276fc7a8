# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/13 00:12:36
# @Author : Kariko Lin

"""Line-oriented INI reader & writer.

Every line is exactly one of:

- blank (whitespace only), skipped;
- comment, the first char is `IniDocument.comment_char`;
- section header, `[name]`, the name runs to the *last* `]`;
- setting, `name=value`, split at the *first* `=`;
- anything else, handled as `IniDocument.invalid_lines` says.

A header that shows up again later is merged into the first one,
i.e. its settings are appended there.
"""

import logging
from io import StringIO, TextIOBase
from re import compile as regex
from typing import TypedDict

import chardet
import yaml

from ..abstract import FileHandler
from .consts import (
    CaseSensitivity,
    InvalidLineMode,
    WhitespaceMode,
    names_equal
)
from .exceptions import MalformedLine
from .model import IniDocument, IniSection, IniSetting


class IniParser(FileHandler[IniDocument]):
    SECTION_LINE = regex(r'^\s*\[(.*)\]\s*$')
    SETTING_LINE = regex(r'^([^=]*)=(.*)$')

    def __init__(self, filename: str, encoding: str | None = None) -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def readstream(
        buf: TextIOBase, ins: IniDocument | None = None
    ) -> IniDocument:
        """读取解码好的字符串流。

        读取规则（空白、大小写、无效行）取自`ins`；不传则按默认规则新建文档。
        `ins`原有的小节会被替换；若中途出错，`ins`保持原样。
        `buf`应是通用换行模式（`newline=None`）的文本流，
        这样单独的`\r`也算换行，与`open()`读文件的结果一致。
        """
        if ins is None:
            ins = IniDocument()
        trim = ins.whitespace
        ignore_case = bool(ins.case & CaseSensitivity.CaseInsensitiveSection)

        closed: list[IniSection] = []
        this_sect: IniSection | None = None
        comments: list[str] = []
        lineno = 0
        while i := buf.readline():
            lineno += 1
            i = i.rstrip('\r\n')
            if not i.strip():
                continue

            if i[0] == ins.comment_char:
                comments.append(i[1:])
            elif m := IniParser.SECTION_LINE.match(i):
                name = m.group(1)
                if trim & WhitespaceMode.TrimSections:
                    name = name.strip()
                if this_sect is not None and not any(
                        j is this_sect for j in closed):
                    closed.append(this_sect)
                this_sect = next(
                    (j for j in closed
                     if names_equal(j.name, name, ignore_case)),
                    None)
                if this_sect is None:
                    this_sect = IniSection(name)
                else:
                    logging.debug(
                        f'Line {lineno}: [{name}] merged into {this_sect}.')
                this_sect.comments.extend(comments)
                comments.clear()
            elif m := IniParser.SETTING_LINE.match(i):
                key, val = m.groups()
                if trim & WhitespaceMode.TrimNames:
                    key = key.strip()
                if trim & WhitespaceMode.TrimValues:
                    val = val.strip()
                if this_sect is None:
                    this_sect = IniSection()
                this_sect.settings.append(IniSetting(key, val, comments[:]))
                comments.clear()
            else:
                match ins.invalid_lines:
                    case InvalidLineMode.Skip:
                        logging.debug(f'Line {lineno} skipped: {i}')
                    case InvalidLineMode.Convert:
                        logging.debug(f'Line {lineno} kept as comment: {i}')
                        comments.append(i)
                    case _:
                        raise MalformedLine(lineno, i)

        if this_sect is not None and not any(j is this_sect for j in closed):
            closed.append(this_sect)
        # one-time copy, later changes on `ins.case` won't follow.
        for j in closed:
            j.case = ins.case
        ins._replace(closed, comments or None)
        logging.debug(f'Read {len(closed)} sections from {lineno} lines.')
        return ins

    @staticmethod
    def writestream(ins: IniDocument, buf: TextIOBase) -> None:
        """Validate `ins` and write it into `buf`."""
        ins.serialize(buf)

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if (codec is None or codec['encoding'] is None
                or codec['confidence'] < 0.8):
            codec = {'encoding': 'utf-8'}

        # fallbacks
        used = codec['encoding']
        try:
            buf = raw.decode(used)
        except (UnicodeDecodeError, LookupError):
            used = 'latin-1'
            buf = raw.decode(used)
        logging.warning(
            f'`{filename}` is not in the given encoding, read as {used}.')
        # same line splitting as `open()`.
        return StringIO(buf, newline=None)

    def read(self, ins: IniDocument | None = None) -> IniDocument:
        """读取`IniParser`实例指定的文件。

        未指定编码时按 UTF-8 读取（允许 BOM），解码失败再交给`chardet`猜测。
        """
        try:
            codec = self._codec or 'utf-8-sig'
            with open(self._fn, 'r', encoding=codec) as fp:
                return self.readstream(fp, ins)
        except UnicodeDecodeError:
            return self.readstream(self._decode_file(self._fn), ins)

    def write(self, instance: IniDocument) -> None:
        """保存到 INI 文件。

        先校验再写入：文档无效时抛出`IniValidationError`，原文件不受影响。
        """
        buf = StringIO()
        self.writestream(instance, buf)
        with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
            fp.write(buf.getvalue())

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def loads(text: str, ins: IniDocument | None = None) -> IniDocument:
    return IniParser.readstream(StringIO(text, newline=None), ins)


def dumps(ins: IniDocument) -> str:
    buf = StringIO()
    IniParser.writestream(ins, buf)
    return buf.getvalue()


class _YamlSettingPack(TypedDict):
    name: str | None
    value: str | None
    comments: list[str]


class _YamlSectionPack(TypedDict):
    name: str | None
    comments: list[str]
    settings: list[_YamlSettingPack]


class _YamlDocPack(TypedDict, total=False):
    comment_char: str
    sections: list[_YamlSectionPack]
    end_comments: list[str] | None


class IniYamlParser(FileHandler[IniDocument]):
    """Dump the whole structure (comments included) as YAML, and back.

    Handy for diffing, or for tools that prefer structured data.
    The snapshot is taken as-is, neither side validates.
    """
    YAML_HEADER = '# inidoc snapshot, `name: null` is the unnamed section.'

    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def _str(val: object) -> str | None:
        # may there be some pure digits considered as int
        return None if val is None else str(val)

    @staticmethod
    def to_pack(ins: IniDocument) -> _YamlDocPack:
        return {
            'comment_char': ins.comment_char,
            'sections': [
                {
                    'name': i.name,
                    'comments': list(i.comments),
                    'settings': [
                        {'name': j.name, 'value': j.value,
                         'comments': list(j.comments)}
                        for j in i.settings
                    ]
                }
                for i in ins.sections
            ],
            'end_comments': ins.end_comments,
        }

    @classmethod
    def from_pack(
        cls, src: _YamlDocPack, ins: IniDocument | None = None
    ) -> IniDocument:
        if ins is None:
            ins = IniDocument()
        ins.comment_char = src.get('comment_char') or ins.comment_char
        sections = []
        for i in src.get('sections') or []:
            sections.append(IniSection(
                cls._str(i.get('name')),
                [str(c) for c in i.get('comments') or []],
                [
                    IniSetting(
                        cls._str(j.get('name')),
                        cls._str(j.get('value')),
                        [str(c) for c in j.get('comments') or []])
                    for j in i.get('settings') or []
                ],
                ins.case))
        end = src.get('end_comments')
        ins._replace(sections, [str(c) for c in end] if end else None)
        return ins

    def read(self, ins: IniDocument | None = None) -> IniDocument:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            src: _YamlDocPack = yaml.safe_load(fp) or {}
        return self.from_pack(src, ins)

    def write(self, instance: IniDocument) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            fp.write(f'{self.YAML_HEADER}\n')
            yaml.safe_dump(
                self.to_pack(instance), fp,
                allow_unicode=True, sort_keys=False)
