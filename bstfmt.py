#!/usr/bin/env python3
# -*- mode: python; tab-width: 4; indent-tabs-mode: nil; -*-
# -------------------------------------------------------------------------------------------------
# Copyright (c) 2020 Marcus Geelnard
#
# This software is provided 'as-is', without any express or implied warranty. In no event will the
# authors be held liable for any damages arising from the use of this software.
#
# Permission is granted to anyone to use this software for any purpose, including commercial
# applications, and to alter it and redistribute it freely, subject to the following restrictions:
#
#  1. The origin of this software must not be misrepresented; you must not claim that you wrote
#     the original software. If you use this software in a product, an acknowledgment in the
#     product documentation would be appreciated but is not required.
#
#  2. Altered source versions must be plainly marked as such, and must not be misrepresented as
#     being the original software.
#
#  3. This notice may not be removed or altered from any source distribution.
# -------------------------------------------------------------------------------------------------

import sys

# Character classes.
HEX_DIGIT = 1
EOF = 2  # 0xff, which equals EOF when read as a signed char
NEWLINE = 3
NUL = 4
OTHER = 5

# Length of the bad character hex digit sequence (01..ff).
BADCHAR_HEX_SEQLEN = 510


def classify(c):
    """Return a (kind, value) tuple for the input byte c.

    For hex digits the value is the digit's numeric value, otherwise it is None.
    """
    if 0x30 <= c <= 0x39:
        return HEX_DIGIT, c - 0x30
    if 0x41 <= c <= 0x46:
        return HEX_DIGIT, c - 0x41 + 10
    if 0x61 <= c <= 0x66:
        return HEX_DIGIT, c - 0x61 + 10
    if c == 0xFF:
        return EOF, None
    if c == 0x0A:
        return NEWLINE, None
    if c == 0x00:
        return NUL, None
    return OTHER, None


class PlainSyntax:
    name = "plain"

    def preamble(self):
        return ""

    def open_segment(self, first):
        return "" if first else "\n"

    def close_segment(self):
        return ""


class CSyntax:
    name = "c"

    def preamble(self):
        return "unsigned char buffer[] =\n"

    def open_segment(self, first):
        return '"' if first else '"\n"'

    def close_segment(self):
        return '"'


class PythonSyntax:
    name = "python"

    def preamble(self):
        return 'buffer = ""\n'

    def open_segment(self, first):
        return 'buffer += "' if first else '"\nbuffer += "'

    def close_segment(self):
        return '"'


PLAIN = PlainSyntax()
C_LITERAL = CSyntax()
PYTHON_LITERAL = PythonSyntax()

SYNTAXES = {s.name: s for s in [PLAIN, C_LITERAL, PYTHON_LITERAL]}


def get_syntax(name):
    # Unknown names keep the default plain output.
    return SYNTAXES.get(name, PLAIN)


def escape(data, syntax, width, config, out=None):
    """Write data (hex digit characters) as an escaped binary string literal.

    Every pair of hex digits becomes one \\xHL escape. With a non-zero width, a new segment (line)
    is started every width bytes. Non hex digit characters are left out of the output, and all of
    them except newline, NUL and 0xff are counted as invalid.

    Returns the number of invalid characters.
    """
    if out is None:
        out = sys.stdout

    if config.interactive:
        out.write("\n")
    if config.verbose:
        out.write(syntax.preamble())

    ai = 0
    invalid_chars = 0
    parts = []
    for c in data:
        kind, _ = classify(c)
        if kind == HEX_DIGIT:
            if ai % 2 == 0:
                # Start of a new byte. Wrap before it if the current segment is full.
                if ai == 0:
                    parts.append(syntax.open_segment(True))
                elif width > 0 and ai % (width * 2) == 0:
                    parts.append(syntax.open_segment(False))
                parts.append("\\x")
            parts.append(chr(c))
            ai += 1
        elif kind == OTHER:
            invalid_chars += 1

    # Empty input still gives a complete (empty) literal.
    if ai == 0:
        parts.append(syntax.open_segment(True))
    parts.append(syntax.close_segment())
    parts.append("\n")
    out.write("".join(parts))

    if config.verbose and invalid_chars > 0:
        out.write(
            "[-] Warning: {} non-hexadecimal character(s) detected in input.\n".format(
                invalid_chars
            )
        )

    return invalid_chars


def gen_badchar_sequence():
    result = "".join(format(i, "02x") for i in range(1, 256)).encode("ascii")
    return result
