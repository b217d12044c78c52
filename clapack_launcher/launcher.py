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
"""Replace the current process with the real cross compiler.

The launcher is invoked exactly as a compiler would be. It prepends
the target triple (and sysroot/resource-dir flags, if configured) to
its own arguments and execs the compiler named in its configuration.
"""

from clapack_launcher.config import resolve, MissingCompilerConfig

import collections
import logging
import os
import stat
import sys


TARGET_TRIPLE = "aarch64-linux-android21"

# Distinct from anything a compiler normally exits with.
EXIT_LAUNCHER_FAILURE = 127

ENV_VERBOSE = "CLAPACK_LAUNCHER_VERBOSE"

log = logging.getLogger(__name__)


class LaunchFailed(Exception):

    def __init__(self, path, error):
        self.path = path
        self.error = error
        super().__init__("execv failed for path='%s': %s"
                         % (path, getattr(error, "strerror", None)
                                  or str(error)))


class Preflight(collections.namedtuple("Preflight",
                ["path", "exists", "regular", "executable"])):

    @property
    def ok(self):
        return self.exists and self.regular and self.executable

    def __str__(self):
        return ("path='%s' exists=%d regular=%d executable=%d" %
                (self.path, self.exists, self.regular, self.executable))


def build_argv(config, argv):
    """Return the argument vector to exec the compiler with.

    The order is fixed: compiler, target flag, then --sysroot and
    -resource-dir pairs if configured, then argv[1:] unchanged.
    """
    new_argv = [config.compiler, "-target", TARGET_TRIPLE]
    if config.sysroot:
        new_argv += ["--sysroot", config.sysroot]
    if config.resource_dir:
        new_argv += ["-resource-dir", config.resource_dir]
    new_argv += argv[1:]
    return new_argv


def preflight(path):
    """Check that path looks like something execv can run.

    Returns:
        a Preflight. A path that cannot be stat-ed, including one the
        OS rejects outright, fails every check.
    """
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return Preflight(path, False, False, False)
    return Preflight(path, True, stat.S_ISREG(st.st_mode),
                     bool(st.st_mode & 0o111))


def launch(config, argv):
    """Exec the compiler. Only returns by raising LaunchFailed.

    The pre-flight check is informational; whatever it finds, the exec
    is still attempted and its result is what counts.
    """
    new_argv = build_argv(config, argv)

    check = preflight(config.compiler)
    if not check.ok:
        log.warning(str(check))

    log.info("exec %s", " ".join(new_argv))
    try:
        os.execv(config.compiler, new_argv)
    except (OSError, ValueError) as e:
        raise LaunchFailed(config.compiler, e) from e


def setup_logging(environ):
    """Send diagnostics to stderr, prefixed with the launcher name.

    Only warnings and errors are shown unless CLAPACK_LAUNCHER_VERBOSE
    is set in environ, in which case the command line is logged too.
    """
    if environ.get(ENV_VERBOSE):
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(format="clang-for-clapack: %(message)s",
                        stream=sys.stderr, level=level)


def main(argv=None, environ=None):
    if argv is None:
        argv = sys.argv
    if environ is None:
        environ = os.environ

    setup_logging(environ)

    executable = argv[0] if argv else None
    try:
        config = resolve(executable, environ)
    except MissingCompilerConfig as e:
        log.error(str(e))
        return EXIT_LAUNCHER_FAILURE

    log.info("compiler='%s' sysroot='%s' resource_dir='%s'",
             config.compiler, config.sysroot or "",
             config.resource_dir or "")

    try:
        launch(config, argv)
    except LaunchFailed as e:
        log.error(str(e))
    return EXIT_LAUNCHER_FAILURE


if __name__ == "__main__":
    sys.exit(main())
