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
afmparse: grammar based reader for Adobe Font Metrics (AFM) files.
"""

VERSION = "0.1.0"

from .errors import AFMConversionError, AFMError, AFMFormatError, AFMParseError, AFMSubfieldError  # noqa: E402
from .grammar import parse, parse_decimal, parse_integer, parse_number, parse_value  # noqa: E402
from .reader import AfmReader, FontMetrics  # noqa: E402
from .records import (Array, Boolean, CharMetrics, Integer, Line, Name, Number, String, Unknown,  # noqa: E402
                      Value)
