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
AFM grammar: turns the raw bytes of an AFM file into a list of typed lines,
one per input line. `C` lines become CharMetrics, every other keyword line
is kept as Unknown with its key and values.

Alternatives are ordered and the first match wins. Values are tried as
boolean, integer, number, name, array and finally free text, so that the
permissive kinds never capture input a more specific kind accepts. Inside
a `C` line the sub-fields are tried as WX1, WX/WX0, N, B, L and then any
other key with its raw text.
"""

import re
import typing

from parsimonious.exceptions import ParseError
from parsimonious.grammar import Grammar
from parsimonious.nodes import NodeVisitor

from .errors import (AFMConversionError, AFMError, AFMParseError, AFMSubfieldError, END_OF_INPUT, LEXICAL,
                     STRUCTURAL, found_at, position)
from .records import Array, Boolean, CharMetrics, Integer, Line, Name, Number, String, Unknown, Value

STRING_ENCODING = "latin-1"  # one character per byte, offsets in text and data are equal
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

AFM_RULES = r"""
file          = lines end_of_input
lines         = line+
line          = record hspace eol
record        = char_metrics / unknown_line

char_metrics  = "C" hspace integer hspace semi subfields
subfields     = subfield*
subfield      = hspace cm_key hspace semi
cm_key        = wx1_field / wx_field / n_field / b_field / l_field / other_field
wx1_field     = "WX1" hspace1 number
wx_field      = ("WX0" / "WX") hspace1 number
n_field       = "N" hspace1 glyph
b_field       = "B" hspace1 number hspace number hspace number hspace number
l_field       = "L" hspace1 glyph hspace1 glyph
other_field   = subfield_key hspace subfield_text

unknown_line  = key line_values
line_values   = line_value*
line_value    = hspace value
value         = value_kind hspace
value_kind    = boolean / integer / number / name / array / text
array         = "[" space array_items "]"
array_items   = array_item*
array_item    = item_kind hspace
item_kind     = boolean / integer / number / name / array / array_text
boolean       = ("true" / "false") !name_char

# integer is a custom rule, see _match_integer
number        = ~r"[+-]?(?:[0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)"
name          = ~r"[A-Za-z*'\"]+"
name_char     = ~r"[A-Za-z*'\"]"
glyph         = ~r"[^ \t\r\n;]+"
key           = ~r"[^ \t\r\n]+"
subfield_key  = ~r"[^ \t\r\n;]+"
subfield_text = ~r"[^\r\n;]*"
text          = ~r"[^\r\n]+"
array_text    = ~r"[^\]\r\n]+"

space         = ~r"[ \t\r\n\x00\x0c]*"
hspace        = ~r"[ \t]*"
hspace1       = ~r"[ \t]+"
semi          = ";"
eol           = "\r\n" / "\n" / "\r"
end_of_input  = !~r"[\s\S]"
"""

# digits directly followed by a dot belong to a decimal number
_INTEGER = re.compile(r"[+-]?[0-9]+(?![0-9.])")

LEXICAL_RULES = {"integer", "number", "name", "glyph", "key", "subfield_key", "text", "array_text"}


def _fits_int64(digits: str) -> bool:
    return INT64_MIN <= int(digits) <= INT64_MAX


def _match_integer(text, pos):
    match = _INTEGER.match(text, pos)
    if match is None or not _fits_int64(match.group()):
        return None
    return match.end()


AFM_GRAMMAR = Grammar(AFM_RULES, integer=_match_integer)


class _CharMetricsKey(typing.NamedTuple):
    """ Result of one `C` line sub-field, `field` is None for unknown keys. """
    field: typing.Optional[str]
    value: typing.Any
    offset: int


class AfmVisitor(NodeVisitor):
    """
    Builds records out of the parse tree. With `strict` set an unknown
    sub-field in a `C` line raises AFMSubfieldError, otherwise it is kept
    in CharMetrics.extra.
    """

    unwrapped_exceptions = (AFMError,)

    def __init__(self, strict: bool = True):
        self.strict = strict

    def generic_visit(self, node, visited_children):
        return visited_children or node

    def visit_file(self, node, visited_children):
        return visited_children[0]

    def visit_lines(self, node, lines):
        return lines

    def visit_line(self, node, visited_children):
        return visited_children[0]

    def visit_record(self, node, visited_children):
        return visited_children[0]

    def visit_char_metrics(self, node, visited_children):
        code = visited_children[2].value
        fields: typing.Dict[str, typing.Any] = {}
        ligatures = []
        extra = []
        for key in visited_children[5]:
            if key.field is None:
                if self.strict:
                    name, text = key.value
                    line, column = position(node.full_text, key.offset)
                    raise AFMSubfieldError(name, text, key.offset, line, column)
                extra.append(key.value)
            elif key.field == "ligature_sequence":
                ligatures.append(key.value)
                fields[key.field] = key.value
            else:
                fields[key.field] = key.value
        return CharMetrics(value=code, ligatures=tuple(ligatures), extra=tuple(extra), **fields)

    def visit_subfields(self, node, keys):
        return keys

    def visit_subfield(self, node, visited_children):
        return visited_children[1]

    def visit_cm_key(self, node, visited_children):
        return visited_children[0]

    def visit_wx1_field(self, node, visited_children):
        return _CharMetricsKey("width1x", self._decimal(node.children[2]), node.start)

    def visit_wx_field(self, node, visited_children):
        return _CharMetricsKey("width0x", self._decimal(node.children[2]), node.start)

    def visit_n_field(self, node, visited_children):
        return _CharMetricsKey("name", visited_children[2], node.start)

    def visit_b_field(self, node, visited_children):
        bbox = tuple(self._decimal(node.children[i]) for i in (2, 4, 6, 8))
        return _CharMetricsKey("bbox", bbox, node.start)

    def visit_l_field(self, node, visited_children):
        return _CharMetricsKey("ligature_sequence", (visited_children[2], visited_children[4]), node.start)

    def visit_other_field(self, node, visited_children):
        return _CharMetricsKey(None, (visited_children[0], visited_children[2]), node.start)

    def visit_unknown_line(self, node, visited_children):
        key, values = visited_children
        return Unknown(key, tuple(values), node.children[1].text.strip())

    def visit_line_values(self, node, values):
        return values

    def visit_line_value(self, node, visited_children):
        return visited_children[1]

    def visit_value(self, node, visited_children):
        return visited_children[0]

    def visit_value_kind(self, node, visited_children):
        return visited_children[0]

    def visit_array(self, node, visited_children):
        return Array(tuple(visited_children[2]))

    def visit_array_items(self, node, items):
        return items

    def visit_array_item(self, node, visited_children):
        return visited_children[0]

    def visit_item_kind(self, node, visited_children):
        return visited_children[0]

    def visit_boolean(self, node, visited_children):
        return Boolean(node.text == "true")

    def visit_integer(self, node, visited_children):
        return Integer(int(node.text))

    def visit_number(self, node, visited_children):
        return Number(node.text)

    def visit_name(self, node, visited_children):
        return Name(node.text)

    def visit_text(self, node, visited_children):
        return String(node.text)

    visit_array_text = visit_text

    def visit_glyph(self, node, visited_children):
        return node.text

    visit_key = visit_glyph
    visit_subfield_key = visit_glyph

    def visit_subfield_text(self, node, visited_children):
        return node.text.strip()

    @staticmethod
    def _decimal(node) -> float:
        return _to_float(node.full_text, node.start, node.text)


def _decode(data) -> str:
    if isinstance(data, str):
        return data
    return bytes(data).decode(STRING_ENCODING)


def _to_float(text: str, offset: int, literal: str) -> float:
    try:
        return float(literal)
    except ValueError:
        line, column = position(text, offset)
        raise AFMConversionError(offset, line, column, "decimal number", repr(literal)) from None


def _parse_error(exc: ParseError) -> AFMParseError:
    text = exc.text
    offset = max(exc.pos, 0)
    expr = exc.expr
    if expr is None:
        expected = "input"
    else:
        expected = expr.name or expr.as_rule()
    if offset >= len(text):
        kind = END_OF_INPUT
    elif expected in LEXICAL_RULES:
        kind = LEXICAL
    else:
        kind = STRUCTURAL
    line, column = position(text, offset)
    return AFMParseError(kind, offset, line, column, expected, found_at(text, offset))


def _visit(rule: str, text: str, strict: bool = True):
    try:
        tree = AFM_GRAMMAR[rule].parse(text)
    except ParseError as exc:
        raise _parse_error(exc) from exc
    return AfmVisitor(strict).visit(tree)


def parse(data: bytes, strict: bool = True) -> typing.List[Line]:
    """
    Parses a complete AFM buffer. Every line, the last one included, has to
    end with CR, LF or CRLF. Raises AFMParseError at the first failure.
    """
    return _visit("file", _decode(data), strict)


def parse_value(data: bytes) -> Value:
    return _visit("value", _decode(data))


def parse_integer(data: bytes) -> int:
    """ Signed integer, AFMConversionError if it does not fit in 64 bits. """
    text = _decode(data)
    if _INTEGER.fullmatch(text) and not _fits_int64(text):
        raise AFMConversionError(0, 1, 1, "signed 64-bit integer", repr(text))
    return _visit("integer", text).value


def parse_number(data: bytes) -> Number:
    return _visit("number", _decode(data))


def parse_decimal(data: bytes) -> float:
    text = _decode(data)
    return _to_float(text, 0, parse_number(text).text)
