import pytest
import yaml

from ezini import (
    Entry,
    EntryList,
    IniFileParser,
    IniIOError,
    IniYamlParser,
    MalformedEntry,
    SectionList,
    SplitMode,
)


def test_ini_parser_read_write(ini_file, tmp_path):
    store = IniFileParser(ini_file('[b]\nk = 2\n[a]\nk = 1\n')).read()
    assert store.sections() == ['a', 'b']

    out = IniFileParser(tmp_path / 'out.ini')
    out.write(store)
    assert out.read() == store
    assert str(out).startswith('INI: ')
    assert out.filename.endswith('out.ini')


def test_ini_parser_split_mode(ini_file):
    parser = IniFileParser(ini_file('[s]\nkey value\n'),
                           split=SplitMode.WHITESPACE)
    assert parser.read()['s', 'key'] == 'value'


def test_ini_parser_readfiles_later_wins(ini_file):
    base = ini_file('[s]\na = 1\nb = 1\n', 'base.ini')
    patch1 = ini_file('[s]\nb = 2\n', 'patch1.ini')
    patch2 = ini_file('[s]\nb = 3\n[t]\nc = 3\n', 'patch2.ini')
    store = IniFileParser(base).readfiles(patch1, patch2)
    assert dict(store) == {('s', 'a'): '1', ('s', 'b'): '3', ('t', 'c'): '3'}


def test_ini_parser_merge_and_delete(ini_file):
    parser = IniFileParser(ini_file('[A]\nx = 1\n'))
    parser.merge([Entry('A', 'y', '2')])
    assert parser.delete('A', 'x') is True
    assert dict(parser.read()) == {('A', 'y'): '2'}


def test_ini_parser_merge_create(tmp_path):
    parser = IniFileParser(tmp_path / 'fresh.ini')
    with pytest.raises(IniIOError):
        parser.read()
    parser.merge([Entry('s', 'k', 'v')], create=True)
    assert dict(parser.read()) == {('s', 'k'): 'v'}


def test_yaml_round_trip(tmp_path):
    store = EntryList([
        Entry('server', 'port', '80'),
        Entry('server', 'flag', 'yes'),
        Entry('paths', 'root', '/srv'),
    ])
    handler = IniYamlParser(tmp_path / 'conf.yaml')
    handler.write(store)

    with open(handler.filename, encoding='utf-8') as fp:
        assert yaml.safe_load(fp) == {
            'paths': {'root': '/srv'},
            'server': {'flag': 'yes', 'port': '80'},
        }
    assert handler.read() == store


def test_yaml_skips_empty_sections(tmp_path):
    sections = SectionList.from_entries([
        Entry('a', 'x', '1'), Entry('b', 'y', '2')])
    del sections['a']['x']
    handler = IniYamlParser(tmp_path / 'conf.yaml')
    handler.write(sections)
    with open(handler.filename, encoding='utf-8') as fp:
        assert yaml.safe_load(fp) == {'b': {'y': '2'}}


def test_yaml_scalars_become_strings(tmp_path):
    path = tmp_path / 'conf.yaml'
    path.write_text('net:\n  port: 80\n  debug: true\n', encoding='utf-8')
    store = IniYamlParser(path).read()
    assert store['net', 'port'] == '80'
    assert store['net', 'debug'] == 'True'


def test_yaml_empty_document(tmp_path):
    path = tmp_path / 'empty.yaml'
    path.write_text('', encoding='utf-8')
    assert len(IniYamlParser(path).read()) == 0


@pytest.mark.parametrize('text', [
    '- just\n- a list\n',
    'net: 80\n',
    'net:\n  port:\n',
    'net: [unclosed\n',
])
def test_yaml_rejects_non_ini_shapes(tmp_path, text):
    path = tmp_path / 'bad.yaml'
    path.write_text(text, encoding='utf-8')
    with pytest.raises(MalformedEntry):
        IniYamlParser(path).read()


def test_yaml_missing_file(tmp_path):
    with pytest.raises(IniIOError):
        IniYamlParser(tmp_path / 'absent.yaml').read()


@pytest.mark.parametrize('text', [
    'net:\n  port: " 80"\n',
    'net:\n  "#port": 80\n',
    '"net]":\n  port: 80\n',
])
def test_yaml_rejects_unwritable_entries(tmp_path, text):
    path = tmp_path / 'bad.yaml'
    path.write_text(text, encoding='utf-8')
    with pytest.raises(MalformedEntry):
        IniYamlParser(path).read()
