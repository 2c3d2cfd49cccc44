# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/19 10:58:12
# @Author : Kariko Lin

from enum import Enum


# C-locale isspace(), never locale dependent.
WHITESPACE = ' \t\r\n\v\f'
COMMENT_MARKS = (';', '#')
SECTION_OPEN = '['
SECTION_CLOSE = ']'

# pass as `destination` to write onto sys.stdout instead of a file.
STDOUT = '-'

TEMP_SUFFIX = '.tmp'


class SplitMode(str, Enum):
    """How a key/value line gets cut into key and value."""
    EQUALS = '='  # first '=' only, `k==v` -> ('k', '=v')
    WHITESPACE = ' \t='  # first run of space/tab/'=', `k==v` -> ('k', 'v')


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = 'invalid-argument'
    IO_ERROR = 'io-error'
    MALFORMED_SECTION = 'malformed-section'
    MALFORMED_ENTRY = 'malformed-entry'
    OUT_OF_MEMORY = 'out-of-memory'
    ABORTED = 'aborted'
