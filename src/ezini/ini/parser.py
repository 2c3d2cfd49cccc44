# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/19 15:26:41
# @Author : Kariko Lin

"""File handlers binding a path to a whole `EntryList`.

`IniFileParser` is the one to use for INI files. `IniYamlParser` dumps
the same entries as a YAML mapping, which is handy to diff, or to feed
other tools:

    ```yaml
    section:
      key: value
    ```
"""

import logging
from os import PathLike

import yaml

from ..abstract import FileHandler
from ..consts import SplitMode
from ..errors import IniIOError, InvalidArgument, MalformedEntry
from .fileops import delete_from_file, merge_into_file, read_file
from .model import EntryList, SectionList
from .writer import Entries, write_file

logger = logging.getLogger(__name__)


class IniFileParser(FileHandler[EntryList]):
    def __init__(
        self, filename: str | PathLike[str],
        encoding: str | None = None, *,
        split: SplitMode = SplitMode.EQUALS
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._split = SplitMode(split)

    def read(self) -> EntryList:
        """Read the INI file this instance points at.

        When `encoding` is wrong (or None and the system default is
        wrong), chardet guesses instead.
        """
        return read_file(self._fn, encoding=self._codec, split=self._split)

    def readfiles(self, *paths: str | PathLike[str]) -> EntryList:
        """Read this file, then every one of `paths` over it, in order.

        Later files win on conflicting keys.
        """
        ret = self.read()
        for i in paths:
            ret.update_entries(
                read_file(i, encoding=self._codec, split=self._split)
                .entries())
        return ret

    def write(self, instance: Entries) -> None:
        """Overwrite the file with `instance`, sorted or not.

        `SectionList` output keeps its own section order. Anything else
        is written as given, see `writer.write_stream`.
        """
        write_file(instance, self._fn, self._codec or 'utf-8')

    def merge(self, entries: Entries, *, create: bool = False) -> None:
        merge_into_file(
            self._fn, entries,
            encoding=self._codec, split=self._split, create=create)

    def delete(self, section: str, key: str) -> bool:
        return delete_from_file(
            self._fn, section, key,
            encoding=self._codec, split=self._split)

    def __str__(self) -> str:
        return "INI: " + super().__str__() + f" ({self._codec})"


class IniYamlParser(FileHandler[EntryList]):
    """Since values are plain strings, YAML here is just a
    two-level mapping. Scalars other than str get stringified on read."""

    def __init__(
        self, filename: str | PathLike[str],
        encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    def read(self) -> EntryList:
        try:
            with open(self._fn, 'r', encoding=self._codec) as fp:
                src = yaml.safe_load(fp)
        except yaml.YAMLError as e:
            raise MalformedEntry(f'{self._fn} is not valid YAML: {e}') from e
        except OSError as e:
            raise IniIOError.wrap(e) from e

        ret = EntryList()
        if src is None:  # empty document
            return ret
        if not isinstance(src, dict):
            raise MalformedEntry(
                f'{self._fn} should map sections to key/value pairs.')
        for sect, pairs in src.items():
            if not isinstance(pairs, dict):
                raise MalformedEntry(f'[{sect}] is not a mapping.')
            for k, v in pairs.items():
                if v is None or v == '':
                    raise MalformedEntry(f'[{sect}] {k} has no value.')
                try:
                    ret.insert(str(sect), str(k), str(v))
                except InvalidArgument as e:
                    raise MalformedEntry(f'[{sect}] {k}: {e}') from e
        return ret

    def write(self, instance: Entries) -> None:
        if isinstance(instance, SectionList):
            sections = instance
        else:
            sections = SectionList.from_entries(
                instance.entries() if isinstance(instance, EntryList)
                else instance)
        data = {k: dict(v) for k, v in sections.items() if len(v) > 0}
        try:
            with open(self._fn, 'w', encoding=self._codec) as fp:
                yaml.safe_dump(
                    data, fp,
                    allow_unicode=True,
                    sort_keys=False,
                    default_flow_style=False)
        except OSError as e:
            raise IniIOError.wrap(e) from e
        logger.debug('YAML written: %s (%d sections)', self._fn, len(data))
