#!/usr/bin/env python3
#
# Copyright 2015 Google Inc. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or
# implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Configuration for the compiler launcher.

The launcher is configured by files that sit in the same directory as
the launcher executable, each holding a single line:

    clang-for-clapack.path          the real compiler (mandatory)
    clang-for-clapack.sysroot       value for --sysroot (optional)
    clang-for-clapack.resource-dir  value for -resource-dir (optional)

The CLAPACK_CLANG environment variable, if set and non-empty, overrides
the contents of clang-for-clapack.path.
"""

import collections
import os


ENV_COMPILER = "CLAPACK_CLANG"

PATH_SUFFIX = "clang-for-clapack.path"
SYSROOT_SUFFIX = "clang-for-clapack.sysroot"
RESOURCE_DIR_SUFFIX = "clang-for-clapack.resource-dir"

PATH_MAX = 4096


class MissingCompilerConfig(Exception):
    """Neither CLAPACK_CLANG nor a usable clang-for-clapack.path."""

    def __init__(self):
        super().__init__("set %s or create %s next to this binary"
                         % (ENV_COMPILER, PATH_SUFFIX))


ResolvedConfig = collections.namedtuple("ResolvedConfig",
                                        ["compiler", "sysroot",
                                         "resource_dir"])


def sibling_path(executable, suffix):
    """Return the path of the file called suffix next to executable.

    Everything in executable up to and including the last slash is
    kept; if there is no slash, the file is looked up relative to the
    current working directory.
    """
    slash = executable.rfind("/")
    return executable[:slash + 1] + suffix


def read_line_file(executable, suffix):
    """Return the first line of the sibling file, or None.

    At most PATH_MAX - 1 bytes are read, and the value ends at the
    first NUL byte, as a C string would. Exactly one trailing newline
    is removed; no other whitespace is touched. None is returned if the
    file cannot be read or if the line is empty.
    """
    if not executable:
        return None

    path = sibling_path(executable, suffix)
    if len(os.fsencode(path)) >= PATH_MAX:
        return None

    try:
        with open(path, "rb") as f:
            line = f.readline(PATH_MAX - 1)
    except OSError:
        return None

    line = line.split(b"\0", 1)[0]
    if line.endswith(b"\n"):
        line = line[:-1]
    if not line:
        return None
    return os.fsdecode(line)


def resolve(executable, environ):
    """Work out which compiler to run and with what extra flags.

    Arguments:
        executable: path to the running launcher, normally argv[0]. May
                    be None if the launcher was started without one.
        environ:    a mapping of environment variables. Only
                    CLAPACK_CLANG is consulted.

    Returns:
        a ResolvedConfig. sysroot and resource_dir are None when not
        configured.

    Raises:
        MissingCompilerConfig if no compiler could be determined.
    """
    compiler = environ.get(ENV_COMPILER)
    if not compiler:
        compiler = read_line_file(executable, PATH_SUFFIX)
    if not compiler:
        raise MissingCompilerConfig()

    return ResolvedConfig(
            compiler=compiler,
            sysroot=read_line_file(executable, SYSROOT_SUFFIX),
            resource_dir=read_line_file(executable, RESOURCE_DIR_SUFFIX))
