# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 21:47:30
# @Author : Kariko Lin

from .consts import CaseSensitivity, InvalidLineMode, WhitespaceMode
from .exceptions import (
    IniError,
    MalformedLine,
    DuplicateSection,
    MissingSettingName,
    IniValidationError,
    InvalidSectionName,
    InvalidSetting,
    InvalidName,
    InvalidValue,
    DuplicateNullSection,
    DuplicateSectionName
)
from .model import IniSetting, IniSection, IniDocument
from .parser import IniParser, IniYamlParser, loads, dumps
