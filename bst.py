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

import argparse
import bstfmt
import bstio
import collections
import sys

__version__ = "0.1.0"

Config = collections.namedtuple("Config", ["verbose", "interactive"])

_USAGE = """Usage: {prog} [OPTION]...
 Convert input to specified binary string format.

 At least one of the below options must be given:
    -D, --dump-file=FILE    Dump content of file FILE in hexadecimal format
    -x, --hex-escape        Escape input hexadecimal string
    -b, --gen-badchar       Generate a bad character sequence string

 The below switches are optional:
    -f, --file=FILE         Read input from file FILE instead of stdin
    -w, --width=bytes       Break binary strings to specified length in bytes
    -s, --syntax=LANG       Syntax of the binary string output (plain, c or python)
    -h, --help              Display this help
       --interactive        Enter interactive mode
       --verbose            Enable verbose output
       --quiet              Disable verbose output
       --version            Print version information
"""

_VERSION = """Binary String Toolkit ({version})
This program is free software: you can redistribute it and/or modify it
under the terms of the zlib license.
Copyright (c) 2020 Marcus Geelnard
This program has absolutely no warranty.
Source code and documentation are distributed with the package (see README.md).
For help enter "{prog} --help"
"""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        if "expected one argument" in message:
            raise bstio.MissingArgument(message)
        raise bstio.InvalidOption(message)


def _width(value):
    try:
        width = int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError("invalid width: {}".format(value))
    if width < 0:
        raise argparse.ArgumentTypeError("width must not be negative: {}".format(value))
    return width


def make_parser(prog="bst"):
    parser = _ArgumentParser(prog=prog, add_help=False, allow_abbrev=False)

    # Actions.
    parser.add_argument("-D", "--dump-file", metavar="FILE")
    parser.add_argument("-x", "--hex-escape", action="store_true")
    parser.add_argument("-b", "--gen-badchar", action="store_true")

    # Options.
    parser.add_argument("-f", "--file", metavar="FILE")
    parser.add_argument("-w", "--width", type=_width)
    parser.add_argument("-s", "--syntax", metavar="LANG", default="plain")
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("--interactive", action="store_true")
    parser.add_argument("--verbose", dest="verbose", action="store_true", default=False)
    parser.add_argument("--quiet", dest="verbose", action="store_false")
    parser.add_argument("--version", action="store_true")

    # Anything else makes us print the usage text.
    parser.add_argument("extra", nargs="*", help=argparse.SUPPRESS)
    return parser


def print_usage(stream, prog):
    stream.write(_USAGE.format(prog=prog))


def print_version(stream, prog):
    stream.write(_VERSION.format(version=__version__, prog=prog))


def print_width_info(args):
    if args.width is not None:
        print("[+] Binary string width is limited to {} bytes.".format(args.width))


def run(args, config):
    syntax = bstfmt.get_syntax(args.syntax)
    width = args.width or 0

    if args.hex_escape:
        # Select the input source.
        if args.dump_file is not None:
            data = bstio.read_file(args.dump_file, hex_expand=True)
        elif args.file is not None:
            data = bstio.read_file(args.file)
        else:
            data = bstio.read_stdin(config)

        if config.verbose:
            print("[*] Convert hexadecimal input to an escaped binary string.")
            print_width_info(args)
        bstfmt.escape(data, syntax, width, config)

    elif args.dump_file is not None:
        bstio.dump_file(args.dump_file)

    elif args.gen_badchar:
        if config.verbose:
            print("[*] Generating bad character binary string.")
            print_width_info(args)
        data = bstfmt.gen_badchar_sequence()
        bstfmt.escape(data, syntax, width, config)


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    prog = "bst"

    parser = make_parser(prog)
    try:
        args = parser.parse_args(argv)
    except bstio.BstError as e:
        print(f"{prog}: error: {e.msg}", file=sys.stderr)
        print_usage(sys.stderr, prog)
        sys.exit(1)

    if args.help:
        print_usage(sys.stderr, prog)
        sys.exit(0)
    if args.version:
        print_version(sys.stderr, prog)
        sys.exit(0)

    # Without an action (or with stray arguments) we just tell how to use the tool.
    has_action = args.hex_escape or args.gen_badchar or args.dump_file is not None
    if args.extra or not has_action:
        print_usage(sys.stdout, prog)
        sys.exit(0)

    config = Config(verbose=args.verbose, interactive=args.interactive)
    try:
        run(args, config)
    except bstio.BstError as e:
        print(f"{prog}: error: {e.msg}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
