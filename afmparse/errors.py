# MIT License
#
# Copyright (c) 2023 GUST (Piotr Strzelczyk)
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
"""
Exceptions raised while reading AFM data.
"""

import re
import typing

LEXICAL = "lexical"
CONVERSION = "conversion"
STRUCTURAL = "structural"
END_OF_INPUT = "end-of-input"

_LINE_BREAK = re.compile(r"\r\n?|\n")


class AFMError(Exception):
    pass


class AFMFormatError(AFMError):
    """ Data parsed correctly but is not an AFM file. """


class AFMParseError(AFMError):
    """
    The input does not match the grammar. Carries the offset of the failure
    (bytes and characters coincide, input is decoded one byte per character),
    its 1-based line and column, what was expected and what was found there.
    """

    def __init__(self, kind: str, offset: int, line: int, column: int, expected: str, found: str):
        self.kind = kind
        self.offset = offset
        self.line = line
        self.column = column
        self.expected = expected
        self.found = found
        super().__init__(
            f"{kind} error at line {line}, column {column} (offset {offset}): expected {expected}, found {found}")


class AFMConversionError(AFMParseError):
    def __init__(self, offset: int, line: int, column: int, expected: str, found: str):
        super().__init__(CONVERSION, offset, line, column, expected, found)


class AFMSubfieldError(AFMParseError):
    """ A `C` line holds a sub-field the character metrics grammar does not know. """

    def __init__(self, key: str, text: str, offset: int, line: int, column: int):
        self.key = key
        self.text = text
        super().__init__(STRUCTURAL, offset, line, column, "one of WX, WX0, WX1, N, B, L", repr(key))


def position(text: str, offset: int) -> typing.Tuple[int, int]:
    """ Line and column (both 1-based) of `offset` in `text`. """
    line, line_start = 1, 0
    for match in _LINE_BREAK.finditer(text, 0, offset):
        line, line_start = line + 1, match.end()
    return line, offset - line_start + 1


def found_at(text: str, offset: int, width: int = 20) -> str:
    if offset >= len(text):
        return "end of input"
    snippet = text[offset:offset + width]
    if snippet[0] in "\r\n":
        return repr(snippet[0])
    return repr(snippet.splitlines()[0])
