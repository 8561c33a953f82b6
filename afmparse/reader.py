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
AFM reader: parses an AFM file and gathers its lines into font metrics,
header values, character metrics indexed by code and name, and kerning pairs.
"""

import typing

from .errors import AFMFormatError
from .grammar import parse
from .records import Array, Boolean, CharMetrics, Integer, Line, Name, Number, String, Unknown, Value

KernPair = typing.Tuple[str, str, float]


def plain(value: Value):
    """ Python value of a parsed AFM value (numbers become floats). """
    if isinstance(value, (String, Name)):
        return value.text
    if isinstance(value, Number):
        return value.to_float()
    if isinstance(value, (Integer, Boolean)):
        return value.value
    if isinstance(value, Array):
        return [plain(item) for item in value.items]
    raise TypeError(f"Not an AFM value: {value!r}")


class FontMetrics:
    """
    Font information collected from the lines of one AFM file. Header keys
    are the keyword lines found before StartCharMetrics.
    """

    def __init__(self):
        self.header: typing.Dict[str, Unknown] = {}
        self.comments: typing.List[str] = []
        self.chars: typing.List[CharMetrics] = []
        self.kerns: typing.List[KernPair] = []

    def get(self, key: str, default=None):
        """
        Header value: a single value as a Python value, several values (as in
        `FullName Times Bold` or `FontName Times-Roman`) as the source text.
        """
        line = self.header.get(key)
        if line is None or not line.values:
            return default
        if len(line.values) == 1:
            return plain(line.values[0])
        return line.text

    def get_all(self, key: str) -> list:
        if key not in self.header:
            return []
        return [plain(value) for value in self.header[key].values]

    def get_text(self, key: str, default: str = "") -> str:
        if key not in self.header:
            return default
        return self.header[key].text

    @property
    def font_bbox(self) -> typing.Optional[typing.Tuple[float, float, float, float]]:
        bbox = self.get_all("FontBBox")
        if len(bbox) != 4:
            return None
        llx, lly, urx, ury = (float(v) for v in bbox)
        return llx, lly, urx, ury

    def by_code(self) -> typing.Dict[int, CharMetrics]:
        return {char.value: char for char in self.chars if char.value >= 0}

    def by_name(self) -> typing.Dict[str, CharMetrics]:
        return {char.name: char for char in self.chars if char.name is not None}

    def widths(self, size: int = 256) -> typing.List[typing.Optional[float]]:
        """ Advance widths indexed by character code, None for missing codes. """
        afm_widths: typing.List[typing.Optional[float]] = [None] * size
        for char in self.chars:
            if 0 <= char.value < size and char.width0x is not None:
                afm_widths[char.value] = char.width0x
        return afm_widths

    def kern_codes(self) -> typing.List[typing.Tuple[int, int, float]]:
        """ Kerning pairs between encoded characters, as character codes. """
        codes = {name: char.value for name, char in self.by_name().items() if char.value >= 0}
        return [(codes[a], codes[b], kern) for a, b, kern in self.kerns if a in codes and b in codes]


class AfmReader:
    """
    Reads an AFM file into FontMetrics. In strict mode unknown character
    metrics sub-fields and malformed kerning pairs are errors, otherwise they
    are skipped (and reported when verbose).
    """

    def __init__(self, strict: bool = True, verbose: bool = False):
        self.strict = strict
        self.verbose = verbose

    def read_afm(self, afm_filename: str) -> FontMetrics:
        with open(afm_filename, "rb") as afm_file:
            return self.read_bytes(afm_file.read())

    def read_bytes(self, data: bytes) -> FontMetrics:
        return self.collect(parse(data, strict=self.strict))

    def collect(self, lines: typing.List[Line]) -> FontMetrics:
        if not lines or not isinstance(lines[0], Unknown) or lines[0].key != "StartFontMetrics":
            raise AFMFormatError("Not an AFM file (improper header).")

        metrics = FontMetrics()
        in_header = True
        for line in lines[1:]:
            if isinstance(line, CharMetrics):
                for key, text in line.extra:
                    self.report(f"AFM: character {line.value}: sub-field {key} {text} ignored.")
                metrics.chars.append(line)
            elif line.key == "Comment":
                metrics.comments.append(line.text)
            elif line.key == "StartCharMetrics":
                in_header = False
            elif line.key == "KPX":
                self.add_kern(metrics, line)
            elif in_header:
                metrics.header[line.key] = line

        self.report(
            f"AFM: {metrics.get('FontName', '?')}: {len(metrics.chars)} characters, {len(metrics.kerns)} kern pairs.")
        return metrics

    def add_kern(self, metrics: FontMetrics, line: Unknown):
        # glyph names are whitespace separated runs, not grammar names
        fields = line.text.split()
        try:
            char_a, char_b, kern = fields
            metrics.kerns.append((char_a, char_b, float(kern)))
        except ValueError:
            if self.strict:
                raise AFMFormatError(f"Malformed AFM kern pair: {line!r}") from None
            self.report(f"AFM: malformed kern pair skipped: {line!r}")

    def report(self, message: str):
        if self.verbose:
            print(message)
