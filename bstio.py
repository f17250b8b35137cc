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

# Number of bytes to read per chunk.
_READ_CHUNK_SIZE = 4096

_BIN2HEX = "0123456789abcdef"


class BstError(Exception):
    def __init__(self, msg):
        super().__init__(msg)
        self.msg = msg


class MissingArgument(BstError):
    pass


class InvalidOption(BstError):
    pass


class InputUnavailable(BstError):
    def __init__(self, file_name):
        super().__init__('input file "{}" cannot be read'.format(file_name))
        self.file_name = file_name


class AllocationFailure(BstError):
    pass


def tohex(bin_data):
    result = bytearray()
    for b in bin_data:
        result.append(ord(_BIN2HEX[b >> 4]))
        result.append(ord(_BIN2HEX[b & 15]))
    return result


def _open_input(file_name):
    try:
        return open(file_name, "rb")
    except OSError:
        raise InputUnavailable(file_name)


def read_stdin(config, stream=None):
    if stream is None:
        stream = sys.stdin.buffer

    if config.interactive:
        print("[+] Hit CTRL-D twice to terminate input.")
        sys.stdout.flush()

    data = bytearray()
    try:
        while True:
            chunk = stream.read(_READ_CHUNK_SIZE)
            if not chunk:
                break
            data += chunk
    except MemoryError:
        raise AllocationFailure("{} byte(s) memory allocation error".format(len(data)))
    return data


def read_file(file_name, hex_expand=False):
    """Read a whole file into a bytearray.

    With hex_expand, every byte is stored as its two lowercase hex digit characters, which is the
    form the literal formatter consumes.
    """
    with _open_input(file_name) as f:
        try:
            data = bytearray(f.read())
            if hex_expand:
                data = tohex(data)
        except MemoryError:
            raise AllocationFailure("memory allocation error while reading {}".format(file_name))
        except OSError:
            raise InputUnavailable(file_name)
    return data


def dump_file(file_name, out=None):
    if out is None:
        out = sys.stdout

    with _open_input(file_name) as f:
        try:
            while True:
                chunk = f.read(_READ_CHUNK_SIZE)
                if not chunk:
                    break
                out.write(chunk.hex())
        except OSError:
            raise InputUnavailable(file_name)
