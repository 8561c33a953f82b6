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
Typed records produced by the AFM grammar: values found on keyword lines
and the character metrics of `C` lines.
"""

import dataclasses
import typing


@dataclasses.dataclass(frozen=True)
class String:
    """ Free text running up to the end of the line. """
    text: str


@dataclasses.dataclass(frozen=True)
class Name:
    text: str


@dataclasses.dataclass(frozen=True)
class Number:
    """ Decimal number kept as its source text. """
    text: str

    def to_float(self) -> float:
        return float(self.text)


@dataclasses.dataclass(frozen=True)
class Integer:
    value: int


@dataclasses.dataclass(frozen=True)
class Array:
    items: typing.Tuple["Value", ...] = ()


@dataclasses.dataclass(frozen=True)
class Boolean:
    value: bool


Value = typing.Union[String, Name, Number, Integer, Array, Boolean]

BBox = typing.Tuple[float, float, float, float]
Ligature = typing.Tuple[str, str]


@dataclasses.dataclass(frozen=True)
class CharMetrics:
    """
    Metrics of a single glyph, read from one `C` line.

    `width0y`, `width1y` and `vvector` are part of the AFM format but no
    sub-field of the grammar fills them yet, they are always None.
    `extra` holds unrecognized sub-fields as (key, text) pairs when parsing
    in lenient mode.
    """
    value: int = 0
    width0x: typing.Optional[float] = None
    width1x: typing.Optional[float] = None
    width0y: typing.Optional[float] = None
    width1y: typing.Optional[float] = None
    vvector: typing.Optional[typing.Tuple[float, float]] = None
    name: typing.Optional[str] = None
    bbox: typing.Optional[BBox] = None
    ligature_sequence: typing.Optional[Ligature] = None
    ligatures: typing.Tuple[Ligature, ...] = ()
    extra: typing.Tuple[typing.Tuple[str, str], ...] = ()


@dataclasses.dataclass(frozen=True)
class Unknown:
    """
    Any keyword line other than character metrics: a key and its values.
    `text` is the source text following the key, it takes no part in equality.
    """
    key: str
    values: typing.Tuple[Value, ...] = ()
    text: str = dataclasses.field(default="", compare=False)


Line = typing.Union[CharMetrics, Unknown]
