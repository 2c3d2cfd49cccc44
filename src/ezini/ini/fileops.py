# -*- encoding: utf-8 -*-
# @File   : fileops.py
# @Time   : 2026/10/19 14:03:26
# @Author : Kariko Lin

"""Read-modify-write of INI files on disk.

Both `merge_into_file` and `delete_from_file` read the whole file into
a private `EntryList`, change it, then write it back through
`writer.write_file`. Failing at any step leaves the file as it was.

Note that nothing here locks the file. Concurrent calls on the same
path race, and the last writer wins.
"""

import errno
import logging
from io import StringIO
from os import PathLike, fspath

import chardet

from ..consts import SplitMode
from ..errors import IniError, IniIOError, InvalidArgument
from .model import EntryList
from .reader import load
from .writer import Entries, iter_entries, write_file

logger = logging.getLogger(__name__)

FilePath = str | PathLike[str]


def _check_path(path: FilePath) -> str:
    if path is None:
        raise InvalidArgument('path is required.')
    if not isinstance(path, (str, PathLike)):
        raise InvalidArgument(
            f'path should be str or PathLike, got {type(path).__name__}.')
    return fspath(path)


def decode_file(path: FilePath) -> tuple[StringIO, str]:
    """Guess the codec of `path` with chardet and decode it into memory.

    Returns the text along with the codec it was decoded with.
    """
    try:
        with open(path, 'rb') as fp:
            raw = fp.read()
    except OSError as e:
        raise IniIOError.wrap(e) from e

    codec = chardet.detect(raw)
    if not codec['encoding'] or codec['confidence'] < 0.8:
        codec = {'encoding': 'utf-8', 'confidence': 0.0}

    # fallbacks
    try:
        buf = raw.decode(codec['encoding'])
    except (UnicodeDecodeError, LookupError):
        logger.warning(
            '%s is neither %s nor anything chardet is sure of, '
            'decoding as latin-1.', path, codec['encoding'])
        return StringIO(raw.decode('latin-1')), 'latin-1'
    return StringIO(buf), codec['encoding']


def _load(
    path: str, encoding: str | None, split: SplitMode
) -> tuple[EntryList, str]:
    try:
        with open(path, 'r', encoding=encoding) as fp:
            return load(fp, split=split), fp.encoding
    except UnicodeDecodeError:
        logger.debug('%s is not %s, guessing codec.', path, encoding)
        buf, codec = decode_file(path)
        return load(buf, split=split), codec
    except LookupError as e:
        raise InvalidArgument(f'unknown encoding {encoding!r}.') from e
    except IniError:
        raise
    except OSError as e:
        raise IniIOError.wrap(e) from e


def read_file(
    path: FilePath, *,
    encoding: str | None = None,
    split: SplitMode = SplitMode.EQUALS
) -> EntryList:
    """Load every entry of the INI file at `path`.

    when `encoding` is None, `open()` falls back to the system default,
    and when that turns out wrong, chardet takes over.
    """
    path = _check_path(path)
    ret, codec = _load(path, encoding, split)
    logger.debug('INI read: %s (%s, %d entries)', path, codec, len(ret))
    return ret


def merge_into_file(
    path: FilePath, entries: Entries, *,
    encoding: str | None = None,
    split: SplitMode = SplitMode.EQUALS,
    create: bool = False
) -> None:
    """Insert-or-update `entries` into the file at `path`.

    New values win over old ones, everything else is kept. The result
    is written back sorted by section, then key, in the codec the file
    was actually read with. So a UTF-16 file chardet had to guess stays
    UTF-16, even if `encoding` named something else.

    With `create=True` a missing file counts as an empty one, and gets
    written in `encoding` (UTF-8 when None).
    """
    path = _check_path(path)
    incoming = iter_entries(entries)
    try:
        merged, codec = _load(path, encoding, split)
    except IniIOError as e:
        if not (create and e.errno == errno.ENOENT):
            raise
        logger.debug('%s not found, creating.', path)
        merged, codec = EntryList(), encoding or 'utf-8'
    cnt = len(merged)
    merged.update_entries(incoming)
    logger.debug(
        'merging into %s (%s): %d entries before, %d after.',
        path, codec, cnt, len(merged))
    write_file(merged, path, codec)


def delete_from_file(
    path: FilePath, section: str, key: str, *,
    encoding: str | None = None,
    split: SplitMode = SplitMode.EQUALS
) -> bool:
    """Drop `[section] key` from the file at `path`.

    Matching is exact on both names. A section losing its last key
    disappears from the file altogether, no bare header is kept.

    Returns whether the entry existed. The file is rewritten either
    way, in canonical form and in the codec it was read with.
    """
    path = _check_path(path)
    if section is None or key is None:
        raise InvalidArgument('both section and key are required.')
    remains, codec = _load(path, encoding, split)
    found = remains.remove(section, key)
    if not found:
        logger.debug('[%s] %s not in %s.', section, key, path)
    logger.debug('rewriting %s as %s.', path, codec)
    write_file(remains, path, codec)
    return found
