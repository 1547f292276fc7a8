# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 21:45:02
# @Author : Kariko Lin

"""Read, edit and write INI files without losing comments or order."""

import logging

from .ini import (
    CaseSensitivity,
    InvalidLineMode,
    WhitespaceMode,
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
    DuplicateSectionName,
    IniSetting,
    IniSection,
    IniDocument,
    IniParser,
    IniYamlParser,
    loads,
    dumps
)

__all__ = [
    'CaseSensitivity', 'InvalidLineMode', 'WhitespaceMode',
    'IniError', 'MalformedLine', 'DuplicateSection', 'MissingSettingName',
    'IniValidationError', 'InvalidSectionName', 'InvalidSetting',
    'InvalidName', 'InvalidValue',
    'DuplicateNullSection', 'DuplicateSectionName',
    'IniSetting', 'IniSection', 'IniDocument',
    'IniParser', 'IniYamlParser', 'loads', 'dumps'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
