# -*- encoding: utf-8 -*-
# @File   : reader.py
# @Time   : 2026/10/19 11:47:51
# @Author : Kariko Lin

"""Line-by-line INI reading.

Each physical line is one of:

    ```ini
    ; comment, # comment, or nothing at all  -> skipped
    [section]  anything after ']' is ignored -> switches current section
    key = value                              -> yields (section, key, value)
    ```

There is no escaping, quoting, inline comment or multi-line value.
"""

import re
from collections.abc import Callable, Iterator
from io import StringIO
from typing import TextIO

from ..consts import (
    COMMENT_MARKS,
    SECTION_CLOSE,
    SECTION_OPEN,
    WHITESPACE,
    SplitMode
)
from ..errors import (
    CallbackAborted,
    IniIOError,
    InvalidArgument,
    MalformedEntry,
    MalformedSection
)
from .model import Entry, EntryList

_WS_SEPARATOR = re.compile(r'[ \t=]+')


def readlines(stream: TextIO) -> Iterator[str]:
    """Yield lines without their trailing newline, however long they are.

    A last line lacking '\\n' is yielded as well.
    """
    while True:
        try:
            line = stream.readline()
        except IniIOError:
            raise
        except OSError as e:
            raise IniIOError.wrap(e) from e
        if not line:
            return
        yield line.removesuffix('\n')


def split_pair(
    text: str, split: SplitMode = SplitMode.EQUALS
) -> tuple[str, str] | None:
    """Cut a key/value line into trimmed key and value.

    Returns `None` if there is no separator at all.
    """
    if split == SplitMode.EQUALS:
        if (idx := text.find('=')) < 0:
            return None
        key, val = text[:idx], text[idx + 1:]
    else:
        if (m := _WS_SEPARATOR.search(text)) is None:
            return None
        key, val = text[:m.start()], text[m.end():]
    return key.strip(WHITESPACE), val.strip(WHITESPACE)


class EntryReader(Iterator[Entry]):
    """Pull entries out of a text stream one at a time.

    Forward only. `next_entry()` gives `None` once the stream is
    exhausted, while iterating simply stops there.

    A malformed line raises `MalformedSection` or `MalformedEntry`
    (with `lineno` set) and nothing more should be read afterwards.
    """

    def __init__(
        self, stream: TextIO, *,
        split: SplitMode = SplitMode.EQUALS
    ) -> None:
        if stream is None:
            raise InvalidArgument('stream is required.')
        self._lines = readlines(stream)
        self._split = SplitMode(split)
        self.section: str | None = None
        self.lineno = 0

    def parse_line(self, line: str) -> Entry | None:
        """Apply one line to the reader state.

        Returns the entry it declares, or `None` for comments, blanks
        and section headers.
        """
        text = line.lstrip(WHITESPACE)
        if not text or text[0] in COMMENT_MARKS:
            return None

        if text[0] == SECTION_OPEN:
            if (end := text.find(SECTION_CLOSE)) < 0:
                raise MalformedSection(
                    f'no closing "{SECTION_CLOSE}" in section header.',
                    self.lineno, line)
            self.section = text[1:end].strip(WHITESPACE)
            return None

        if self.section is None:
            raise MalformedEntry(
                'key/value pair found before any section.',
                self.lineno, line)
        if (pair := split_pair(text, self._split)) is None:
            raise MalformedEntry(
                f'no separator in "{text}".', self.lineno, line)
        key, val = pair
        if not key:
            raise MalformedEntry('empty key.', self.lineno, line)
        if not val:
            raise MalformedEntry(
                f'empty value for key "{key}".', self.lineno, line)
        return Entry(self.section, key, val)

    def next_entry(self) -> Entry | None:
        for line in self._lines:
            self.lineno += 1
            if (entry := self.parse_line(line)) is not None:
                return entry
        return None

    def __next__(self) -> Entry:
        if (entry := self.next_entry()) is None:
            raise StopIteration
        return entry

    def __iter__(self) -> 'EntryReader':
        return self


def parse_stream(
    stream: TextIO, *,
    split: SplitMode = SplitMode.EQUALS
) -> EntryReader:
    """Lazily parse `stream`. Errors surface while iterating."""
    return EntryReader(stream, split=split)


def parse_stream_with_callback(
    stream: TextIO,
    consumer: Callable[[Entry], bool | None], *,
    split: SplitMode = SplitMode.EQUALS
) -> None:
    """Hand every entry of `stream` to `consumer`, in file order.

    `consumer` returning `False` stops parsing with `CallbackAborted`.
    Anything it raises propagates as is. Entries delivered before the
    stop are, of course, not taken back.
    """
    if consumer is None or not callable(consumer):
        raise InvalidArgument('consumer should be callable.')
    for entry in parse_stream(stream, split=split):
        if consumer(entry) is False:
            raise CallbackAborted(entry)


def load(
    stream: TextIO, *,
    split: SplitMode = SplitMode.EQUALS
) -> EntryList:
    """Parse the whole stream into a sorted `EntryList`.

    All or nothing: a malformed line raises and no store is returned.
    """
    return EntryList(parse_stream(stream, split=split))


def loads(text: str, *, split: SplitMode = SplitMode.EQUALS) -> EntryList:
    if not isinstance(text, str):
        raise InvalidArgument('text should be str.')
    return load(StringIO(text), split=split)
