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


from clapack_launcher.config import (resolve, sibling_path,
        MissingCompilerConfig, ENV_COMPILER, PATH_SUFFIX,
        SYSROOT_SUFFIX, RESOURCE_DIR_SUFFIX)
from clapack_launcher.launcher import (build_argv, preflight,
                                       EXIT_LAUNCHER_FAILURE)

import logging
import os
import shlex
import sys


log = logging.getLogger(__name__)


def explain(launcher, args, environ, out=None):
    """Print what launcher would exec if run with args.

    Nothing is executed. Returns the exit status for the command.
    """
    if out is None:
        out = sys.stdout
    try:
        config = resolve(launcher, environ)
    except MissingCompilerConfig as e:
        log.error(str(e))
        return EXIT_LAUNCHER_FAILURE

    if environ.get(ENV_COMPILER):
        log.info("compiler='%s' from $%s", config.compiler, ENV_COMPILER)
    else:
        log.info("compiler='%s' from %s", config.compiler,
                 sibling_path(launcher, PATH_SUFFIX))
    log.info("sysroot='%s' from %s", config.sysroot or "",
             sibling_path(launcher, SYSROOT_SUFFIX))
    log.info("resource_dir='%s' from %s", config.resource_dir or "",
             sibling_path(launcher, RESOURCE_DIR_SUFFIX))

    new_argv = build_argv(config, [launcher] + list(args))
    print(" ".join(shlex.quote(a) for a in new_argv), file=out)

    check = preflight(config.compiler)
    if check.ok:
        print("# compiler is an executable regular file", file=out)
    else:
        print("# %s" % str(check), file=out)
    return 0


def do_explain(args):
    sys.exit(explain(args.launcher, args.compiler_args, os.environ))
