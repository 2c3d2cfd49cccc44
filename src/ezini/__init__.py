# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 10:50:11
# @Author : Kariko Lin

"""Read, write, merge and edit plain INI files.

Nothing here configures logging or prints. Attach handlers to the
`ezini` logger to see what gets read and written.
"""

import logging

from .consts import STDOUT, ErrorKind, SplitMode
from .errors import (
    CallbackAborted,
    IniError,
    IniIOError,
    IniSyntaxError,
    InvalidArgument,
    MalformedEntry,
    MalformedSection,
    OutOfMemory
)
from .ini import (
    Entry,
    EntryList,
    EntryReader,
    IniFileParser,
    IniSection,
    IniYamlParser,
    SectionList,
    delete_from_file,
    dumps,
    load,
    loads,
    merge_into_file,
    parse_stream,
    parse_stream_with_callback,
    read_file,
    serialize
)

__all__ = [
    'STDOUT', 'ErrorKind', 'SplitMode',
    'IniError', 'IniIOError', 'IniSyntaxError', 'InvalidArgument',
    'MalformedEntry', 'MalformedSection', 'OutOfMemory', 'CallbackAborted',
    'Entry', 'EntryList', 'IniSection', 'SectionList',
    'EntryReader', 'parse_stream', 'parse_stream_with_callback',
    'load', 'loads', 'dumps', 'serialize', 'read_file',
    'merge_into_file', 'delete_from_file',
    'IniFileParser', 'IniYamlParser'
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
