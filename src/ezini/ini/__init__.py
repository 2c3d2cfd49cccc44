# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 15:40:02
# @Author : Kariko Lin

from .model import Entry, EntryList, IniSection, SectionList
from .reader import (
    EntryReader,
    load,
    loads,
    parse_stream,
    parse_stream_with_callback,
    readlines
)
from .writer import dumps, serialize
from .fileops import delete_from_file, merge_into_file, read_file
from .parser import IniFileParser, IniYamlParser
