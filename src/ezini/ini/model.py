# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/19 11:20:05
# @Author : Kariko Lin

"""
INI entries and the two stores that hold them.

- `EntryList`: flat, always sorted by (section, key). What gets merged
  and written back to disk.
- `SectionList` of `IniSection`: grouped by section, kept in the order
  sections and keys first show up.

Both keep (section, key) unique, and both serialize the same way.
"""

from bisect import bisect_left
from collections.abc import Iterable, MutableMapping
from typing import Iterator, NamedTuple

from ..consts import COMMENT_MARKS, SECTION_CLOSE, SECTION_OPEN, WHITESPACE
from ..errors import InvalidArgument, OutOfMemory


class Entry(NamedTuple):
    section: str
    key: str
    value: str

    @property
    def position(self) -> tuple[str, str]:
        return self.section, self.key


def _check_str(**kwargs: object) -> None:
    for name, val in kwargs.items():
        if not isinstance(val, str):
            raise InvalidArgument(
                f'{name} should be str, got {type(val).__name__}.')


def _is_position(pos: object) -> bool:
    return isinstance(pos, tuple) and len(pos) == 2 \
        and all(isinstance(i, str) for i in pos)


def _check_text(name: str, val: str) -> None:
    if '\n' in val or '\r' in val:
        raise InvalidArgument(f'{name} {val!r} spans several lines.')
    if val != val.strip(WHITESPACE):
        raise InvalidArgument(
            f'{name} {val!r} has leading or trailing whitespace.')


def check_section(section: str) -> None:
    """Only names a `[section]` header can carry back unchanged."""
    _check_str(section=section)
    _check_text('section', section)
    if SECTION_CLOSE in section:
        raise InvalidArgument(
            f'section {section!r} contains "{SECTION_CLOSE}".')


def check_pair(key: str, value: str) -> None:
    """Only what a `key = value` line can carry back unchanged.

    There is no escaping, so anything else is refused up front.
    """
    _check_str(key=key, value=value)
    _check_text('key', key)
    _check_text('value', value)
    if not key:
        raise InvalidArgument('key should not be empty.')
    if key[0] in COMMENT_MARKS or key[0] == SECTION_OPEN:
        raise InvalidArgument(
            f'key {key!r} would be read back as a comment or a section.')
    if '=' in key:
        raise InvalidArgument(f'key {key!r} contains "=".')
    if not value:
        raise InvalidArgument(f'value of key {key!r} should not be empty.')


def check_entry(section: str, key: str, value: str) -> None:
    check_section(section)
    check_pair(key, value)


def as_entry(item: object) -> Entry:
    """Accept an `Entry` or any (section, key, value) triple."""
    if isinstance(item, Entry):
        return item
    if isinstance(item, str) or not isinstance(item, Iterable):
        raise InvalidArgument(
            f'{item!r} is not a (section, key, value) triple.')
    try:
        return Entry(*item)
    except TypeError as e:
        raise InvalidArgument(
            f'{item!r} is not a (section, key, value) triple.') from e


class EntryList(MutableMapping[tuple[str, str], str]):
    """Entry store sorted by section, then by key.

    `str` comparison goes by code point, which orders the same as
    comparing UTF-8 bytes. So a full walk is grouped by section, and
    writing it needs only one pass.

        ```python
        store = EntryList()
        store.insert('net', 'port', '80')
        store['net', 'host'] = 'localhost'
        list(store.entries())
        # [Entry('net', 'host', 'localhost'), Entry('net', 'port', '80')]
        ```
    """

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self.__data: list[Entry] = []
        for i in entries:
            self.insert(*as_entry(i))

    def __locate(self, section: str, key: str) -> int:
        return bisect_left(
            self.__data, (section, key), key=Entry.position.fget)

    def insert(self, section: str, key: str, value: str) -> None:
        """Insert a new entry, or replace the value of an existing one."""
        check_entry(section, key, value)
        try:
            # build before touching the list, so nothing is half inserted.
            entry = Entry(section, key, value)
            idx = self.__locate(section, key)
            if idx < len(self.__data) and \
                    self.__data[idx].position == entry.position:
                self.__data[idx] = entry
            else:
                self.__data.insert(idx, entry)
        except MemoryError as e:
            raise OutOfMemory(
                f'unable to store [{section}] {key}.') from e

    def remove(self, section: str, key: str) -> bool:
        """Drop the entry if present. Returns whether anything was dropped."""
        _check_str(section=section, key=key)
        idx = self.__locate(section, key)
        if idx < len(self.__data) and \
                self.__data[idx].position == (section, key):
            del self.__data[idx]
            return True
        return False

    def get_entry(self, section: str, key: str) -> Entry | None:
        _check_str(section=section, key=key)
        idx = self.__locate(section, key)
        if idx < len(self.__data) and \
                self.__data[idx].position == (section, key):
            return self.__data[idx]
        return None

    def __getitem__(self, pos: tuple[str, str]) -> str:
        if not _is_position(pos) \
                or (entry := self.get_entry(*pos)) is None:
            raise KeyError(pos)
        return entry.value

    def __setitem__(self, pos: tuple[str, str], value: str) -> None:
        if not _is_position(pos):
            raise InvalidArgument(f'{pos!r} is not a (section, key) pair.')
        self.insert(*pos, value)

    def __delitem__(self, pos: tuple[str, str]) -> None:
        if not _is_position(pos) or not self.remove(*pos):
            raise KeyError(pos)

    def __contains__(self, pos: object) -> bool:
        if not _is_position(pos):
            return False
        return self.get_entry(*pos) is not None

    def __len__(self) -> int:
        return len(self.__data)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return (i.position for i in self.__data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EntryList):
            return self.__data == other.__data
        return super().__eq__(other)

    def __repr__(self) -> str:
        return 'EntryList { .cnt = %d }' % len(self.__data)

    def entries(self) -> Iterator[Entry]:
        return iter(self.__data)

    def sections(self) -> list[str]:
        """Section names in order, each once."""
        ret: dict[str, None] = {}
        for i in self.__data:
            ret.setdefault(i.section, None)
        return list(ret)

    def update_entries(self, entries: Iterable[Entry]) -> None:
        """Insert-or-update every entry, later ones winning."""
        for i in entries:
            self.insert(*as_entry(i))

    def clear(self) -> None:
        # no node chain to walk, dropping the list releases all entries.
        self.__data.clear()


class IniSection(MutableMapping[str, str]):
    """Keys of one section, in the order they first appeared."""

    def __init__(
        self, section_name: str, /,
        pairs: Iterable[tuple[str, str]] = ()
    ) -> None:
        check_section(section_name)
        self._name = section_name
        self._data: dict[str, str] = {}
        for k, v in pairs:
            self[k] = v

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        check_pair(key, value)
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __str__(self) -> str:
        return f"[{self._name}]"

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._data))

    def entries(self) -> Iterator[Entry]:
        for k, v in self._data.items():
            yield Entry(self._name, k, v)


class SectionList(MutableMapping[str, IniSection]):
    """Entry store grouped by section.

    Cheaper than `EntryList` for appending key after key into one
    section. A section keeps existing after its last key is deleted,
    but empty sections are skipped on output (see `entries()`).
    """

    def __init__(self) -> None:
        self.__raw: dict[str, IniSection] = {}

    @classmethod
    def from_entries(cls, entries: Iterable[Entry]) -> 'SectionList':
        ret = cls()
        for i in entries:
            ret.insert(*as_entry(i))
        return ret

    def insert(self, section: str, key: str, value: str) -> None:
        check_entry(section, key, value)
        try:
            self.setdefault(section)[key] = value
        except MemoryError as e:
            raise OutOfMemory(
                f'unable to store [{section}] {key}.') from e

    def __getitem__(self, key: str) -> IniSection:
        return self.__raw[key]

    def __setitem__(
        self, key: str, value: IniSection | MutableMapping[str, str]
    ) -> None:
        # shouldn't keep ptr to external dict when assigning a section.
        self.__raw[key] = IniSection(key, value.items())

    def __delitem__(self, key: str) -> None:
        del self.__raw[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__raw

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def setdefault(  # type: ignore[override]
        self, key: str, default: IniSection | None = None
    ) -> IniSection:
        if key not in self.__raw:
            self[key] = default if default is not None else {}
        return self.__raw[key]

    def entries(self) -> Iterator[Entry]:
        """All entries, section by section. Empty sections yield nothing."""
        for sect in self.__raw.values():
            yield from sect.entries()

    def to_entry_list(self) -> EntryList:
        return EntryList(self.entries())

    def clear(self) -> None:
        self.__raw.clear()
