#!/usr/bin/env python3
#
# Copyright 2016 Kareem Khazem. All Rights Reserved.
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
#
# Generation of a compiler launcher and its configuration files from a
# toolchain description.


from clapack_launcher.config import (PATH_SUFFIX, SYSROOT_SUFFIX,
                                     RESOURCE_DIR_SUFFIX)
from clapack_launcher.schemata import toolchain_schema, AUTO

import jinja2
import logging
import os
import os.path
import subprocess
import sys
import voluptuous
import yaml


log = logging.getLogger(__name__)


class ToolchainError(Exception):
    pass


def load_toolchain(path):
    """Read and validate the YAML toolchain description at path.

    Returns:
        the validated dictionary, with defaults filled in.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ToolchainError("could not read toolchain description "
                             "'%s': %s" % (path, e.strerror)) from e
    except yaml.YAMLError as e:
        raise ToolchainError("'%s' is not valid YAML: %s" %
                             (path, str(e))) from e

    try:
        return toolchain_schema(data)
    except voluptuous.MultipleInvalid as e:
        raise ToolchainError("'%s' is malformatted: %s" %
                             (path, str(e))) from e


def query_resource_dir(compiler):
    """Ask compiler where its resource directory (stddef.h etc.) is."""
    cmd = [compiler, "--print-resource-dir"]
    try:
        cp = subprocess.run(cmd, stdout=subprocess.PIPE,
                stderr=subprocess.PIPE, universal_newlines=True)
    except OSError as e:
        raise ToolchainError("could not run '%s': %s" %
                             (" ".join(cmd), e.strerror)) from e

    resource_dir = cp.stdout.strip()
    if cp.returncode or not resource_dir:
        raise ToolchainError("'%s' failed (%d):\n%s" %
                             (" ".join(cmd), cp.returncode, cp.stderr))
    log.info("Resource directory of %s is %s", compiler, resource_dir)
    return resource_dir


def write_config_file(out_dir, suffix, value):
    """Write value as the single line of a sibling file.

    If value is None, any existing file is removed so that a launcher
    does not pick up a setting from an earlier generation.
    """
    path = os.path.join(out_dir, suffix)
    if value is None:
        if os.path.lexists(path):
            log.info("Removing stale %s", path)
            os.remove(path)
        return
    if "\n" in value:
        raise ToolchainError("value for %s contains a newline: %r" %
                             (suffix, value))
    with open(path, "w") as f:
        print(value, file=f)
    log.info("Wrote %s", path)


# The kernel truncates longer #! lines.
SHEBANG_MAX = 127


def shebang_interpreter():
    """Return the interpreter to name in the launcher's #! line.

    The launcher only needs the standard library, so any python3 will
    do when this interpreter's path cannot be used in a #! line.
    """
    python = sys.executable
    if (not python or len(python) + 2 > SHEBANG_MAX
            or any(c.isspace() for c in python)):
        return "/usr/bin/env python3"
    return python


def render_launcher(toolchain_file):
    here = os.path.dirname(os.path.abspath(__file__))
    jinja = jinja2.Environment(loader=jinja2.FileSystemLoader([here]),
                               keep_trailing_newline=True)
    template = jinja.get_template("launcher_template.py")
    return template.render(python=shebang_interpreter(),
                           package_root=repr(os.path.dirname(here)),
                           toolchain_file=toolchain_file)


def generate(toolchain, out_dir, toolchain_file="toolchain.yaml"):
    """Create a launcher and its configuration files in out_dir.

    Arguments:
        toolchain: a dictionary validated by toolchain_schema.
        out_dir: directory to write into; created if missing.
        toolchain_file: name of the description, recorded in the
                        generated launcher.

    Returns:
        the path of the generated launcher.
    """
    resource_dir = toolchain.get("resource_dir")
    if resource_dir == AUTO:
        resource_dir = query_resource_dir(toolchain["compiler"])

    os.makedirs(out_dir, exist_ok=True)

    write_config_file(out_dir, PATH_SUFFIX, toolchain["compiler"])
    write_config_file(out_dir, SYSROOT_SUFFIX, toolchain.get("sysroot"))
    write_config_file(out_dir, RESOURCE_DIR_SUFFIX, resource_dir)

    launcher = os.path.join(out_dir, toolchain["launcher"])
    with open(launcher, "w") as f:
        f.write(render_launcher(toolchain_file))
    os.chmod(launcher, 0o755)
    log.info("Wrote launcher %s", launcher)

    return launcher


def do_generate(args):
    try:
        toolchain = load_toolchain(args.toolchain_file)
        launcher = generate(toolchain, args.output_directory,
                            os.path.basename(args.toolchain_file))
    except (ToolchainError, OSError) as e:
        logging.error(str(e))
        sys.exit(1)
    print(launcher)
