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
afmdump: reads an AFM file and prints what the grammar makes of it,
either line by line or as a short summary of the font metrics.
"""

import argparse
import sys

from . import VERSION
from .errors import AFMError
from .grammar import parse
from .reader import AfmReader


def dump_lines(data: bytes, strict: bool):
    for line in parse(data, strict=strict):
        print(line)


def dump_summary(data: bytes, strict: bool, verbose: bool):
    afm_reader = AfmReader(strict=strict, verbose=verbose)
    metrics = afm_reader.read_bytes(data)
    print(f"{'FontName':20s} {metrics.get('FontName', '')}")
    print(f"{'FullName':20s} {metrics.get_text('FullName')}")
    print(f"{'FontBBox':20s} {metrics.font_bbox}")
    print(f"{'Characters':20s} {len(metrics.chars)}")
    print(f"{'Encoded':20s} {len(metrics.by_code())}")
    print(f"{'KernPairs':20s} {len(metrics.kerns)}")
    if verbose:
        for char in metrics.chars:
            print(f"{char.value:5d} {char.name or '':20s} {char.width0x} {char.bbox}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="This is afmdump, prints the contents of a given AFM file.")
    parser.add_argument("input", help="Input AFM file")
    parser.add_argument("--lenient", help="Skip unknown character metrics sub-fields", action="store_true")
    parser.add_argument("--summary", help="Print font metrics summary instead of parsed lines", action="store_true")
    parser.add_argument("-v", "--verbose", help="Print more details", action="store_true")
    args = parser.parse_args(argv)
    if args.verbose:
        print(f"This is afmdump, ver. {VERSION}.")

    with open(args.input, "rb") as afm_file:
        data = afm_file.read()

    try:
        if args.summary:
            dump_summary(data, not args.lenient, args.verbose)
        else:
            dump_lines(data, not args.lenient)
    except AFMError as exc:
        print(f"AFM: {args.input}: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
