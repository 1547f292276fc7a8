from io import StringIO

import pytest

from inidoc import (
    CaseSensitivity,
    IniSection,
    IniSetting,
    InvalidName,
    InvalidSectionName,
    InvalidValue,
)


def test_setting_defaults():
    s = IniSetting()
    assert s.name == ''
    assert s.value == ''
    assert s.comments == []
    assert str(IniSetting('a', 'b')) == 'INI Setting: a=b'


def test_setting_clone_is_independent():
    s = IniSetting('k', 'v', ['c1'])
    c = s.clone()
    assert c == s
    c.comments.append('c2')
    c.value = 'other'
    assert s.comments == ['c1']
    assert s.value == 'v'


@pytest.mark.parametrize('name', ['', 'key', ' spaced key ', '[x]', 'ключ'])
def test_setting_valid_names(name):
    IniSetting(name, 'a=b=c').validate()


@pytest.mark.parametrize('name', [None, 'a=b', 'a\rb', 'a\nb'])
def test_setting_invalid_name(name):
    with pytest.raises(InvalidName) as exc:
        IniSetting(name, 'v').validate()
    assert exc.value.name == name
    assert exc.value.value == 'v'


@pytest.mark.parametrize('value', [None, 'a\r', '\nb'])
def test_setting_invalid_value(value):
    with pytest.raises(InvalidValue) as exc:
        IniSetting('k', value).validate()
    assert exc.value.value == value


def test_setting_serialize():
    buf = StringIO()
    IniSetting('k', 'a=b', ['one', ' two']).serialize(buf, '#')
    assert buf.getvalue() == '#one\n# two\nk=a=b\n'


def _section(case=CaseSensitivity.AsIs):
    sect = IniSection('S', case=case)
    sect.add('a', '1')
    sect.add('B', '2')
    sect.add('a', '3')
    return sect


def test_section_lookup():
    sect = _section()
    assert sect.lookup('a').value == '1'
    assert sect.lookup('b') is None
    assert [i.value for i in sect.lookup_all('a')] == ['1', '3']
    assert sect.values_of('a') == ['1', '3']
    assert 'B' in sect
    assert 'b' not in sect
    assert len(sect) == 3
    assert sect[1].name == 'B'


def test_section_lookup_case_insensitive():
    sect = _section(CaseSensitivity.CaseInsensitiveSetting)
    assert sect.lookup('b').value == '2'
    assert sect.values_of('A') == ['1', '3']


def test_section_case_flag_of_sections_is_not_enough():
    sect = _section(CaseSensitivity.CaseInsensitiveSection)
    assert sect.lookup('b') is None


def test_section_remove_all():
    sect = _section()
    sect.remove_all('a')
    assert [i.name for i in sect] == ['B']
    sect.remove_all('missing')
    assert len(sect) == 1


def test_section_sort_is_stable():
    sect = _section()
    sect.sort()
    assert [(i.name, i.value) for i in sect] == [
        ('B', '2'), ('a', '1'), ('a', '3')]
    sect.sort(ascending=False)
    assert [(i.name, i.value) for i in sect] == [
        ('a', '1'), ('a', '3'), ('B', '2')]


def test_section_clone_is_deep():
    sect = _section()
    sect.comments.append('head')
    c = sect.clone()
    assert c == sect
    c[0].value = 'changed'
    c.comments.clear()
    assert sect[0].value == '1'
    assert sect.comments == ['head']


def test_section_validate_annotates_section_name():
    sect = _section()
    sect.add('bad=name', 'v')
    with pytest.raises(InvalidName) as exc:
        sect.validate()
    assert exc.value.section == 'S'
    assert exc.value.name == 'bad=name'


def test_section_invalid_name():
    with pytest.raises(InvalidSectionName):
        IniSection('a\nb').validate()
    IniSection(None).validate()
    IniSection('').validate()


def test_section_serialize():
    sect = IniSection('S', ['about S'])
    sect.settings.append(IniSetting('k', 'v', ['about k']))
    buf = StringIO()
    sect.serialize(buf, ';')
    assert buf.getvalue() == ';about S\n[S]\n;about k\nk=v\n'


def test_null_section_serialize_has_no_header():
    sect = IniSection(None, ['file header'])
    sect.add('k', 'v')
    buf = StringIO()
    sect.serialize(buf, ';')
    assert buf.getvalue() == ';file header\nk=v\n'
