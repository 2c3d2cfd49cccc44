# -*- encoding: utf-8 -*-
# @File   : writer.py
# @Time   : 2026/10/19 13:12:40
# @Author : Kariko Lin

"""Canonical INI output:

    ```ini
    [section]
    key = value
    key2 = value2

    [section-2]
    key = value
    ```
"""

import logging
import os
import stat
import sys
import tempfile
from collections.abc import Iterable
from io import StringIO
from os import PathLike
from typing import TextIO
from warnings import warn

from ..consts import STDOUT, TEMP_SUFFIX
from ..errors import IniIOError, InvalidArgument
from .model import Entry, EntryList, SectionList, as_entry, check_entry

logger = logging.getLogger(__name__)

Entries = EntryList | SectionList | Iterable[Entry]
Destination = str | PathLike[str] | TextIO


def iter_entries(store: Entries) -> Iterable[Entry]:
    if store is None:
        raise InvalidArgument('nothing to serialize.')
    if isinstance(store, (EntryList, SectionList)):
        return store.entries()
    try:
        items = iter(store)
    except TypeError as e:
        raise InvalidArgument(
            f'unable to serialize {type(store).__name__}.') from e
    return _checked(items)


def _checked(items: Iterable[object]) -> Iterable[Entry]:
    # stores check on insert, loose triples get checked here.
    for i in items:
        entry = as_entry(i)
        check_entry(*entry)
        yield entry


def write_stream(store: Entries, fp: TextIO) -> None:
    """Single pass over `store`, never re-sorted.

    A new header starts whenever the section differs from the previous
    entry's. Feeding entries not grouped by section hence repeats
    headers, which gets warned but kept.
    """
    written: set[str] = set()
    section: str | None = None
    try:
        for i in iter_entries(store):
            if section is None or i.section != section:
                if i.section in written:
                    warn(f'[{i.section}] written again, '
                         'entries are not grouped by section.')
                fp.write(f'[{i.section}]\n' if section is None
                         else f'\n[{i.section}]\n')
                section = i.section
                written.add(section)
            fp.write(f'{i.key} = {i.value}\n')
    except UnicodeEncodeError as e:
        raise InvalidArgument(
            f'{e.object[e.start:e.end]!r} has no {e.encoding} form.') from e
    except IniIOError:
        raise
    except OSError as e:
        raise IniIOError.wrap(e) from e


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning('unable to remove leftover %s: %s', path, e)


def write_file(
    store: Entries, path: str | PathLike[str],
    encoding: str = 'utf-8'
) -> None:
    """Write into a fresh, uniquely named sibling first,
    then move it over `path`.

    If anything fails on the way, `path` keeps its previous content and
    no other file is touched. Two writers racing on the same path each
    get their own temporary file, and the last replace wins.
    """
    path = os.fspath(path)
    try:
        fd, tmp = tempfile.mkstemp(
            dir=os.path.dirname(path) or '.',
            prefix=os.path.basename(path) + '.',
            suffix=TEMP_SUFFIX)
    except OSError as e:
        raise IniIOError.wrap(e) from e
    try:
        with os.fdopen(fd, 'w', encoding=encoding, newline='\n') as fp:
            # mkstemp creates 0600, keep what `path` had instead.
            os.chmod(tmp, _file_mode(path))
            write_stream(store, fp)
        os.replace(tmp, path)
    except LookupError as e:
        _discard(tmp)
        raise InvalidArgument(f'unknown encoding {encoding!r}.') from e
    except IniIOError:
        _discard(tmp)
        raise
    except OSError as e:
        _discard(tmp)
        raise IniIOError.wrap(e) from e
    except BaseException:
        _discard(tmp)
        raise
    logger.debug('INI written: %s', path)


def _file_mode(path: str) -> int:
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def serialize(
    store: Entries, destination: Destination,
    encoding: str = 'utf-8'
) -> None:
    """Write `store` to a file path, an open text stream,
    or `STDOUT` (`"-"`)."""
    if destination is None:
        raise InvalidArgument('destination is required.')
    if isinstance(destination, str) and destination == STDOUT:
        write_stream(store, sys.stdout)
    elif isinstance(destination, (str, PathLike)):
        write_file(store, destination, encoding)
    elif callable(getattr(destination, 'write', None)):
        write_stream(store, destination)
    else:
        raise InvalidArgument(
            f'unable to write into {type(destination).__name__}.')


def dumps(store: Entries) -> str:
    buf = StringIO()
    write_stream(store, buf)
    return buf.getvalue()
