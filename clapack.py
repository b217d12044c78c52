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

from clapack_launcher.wrapper_gen import do_generate
from clapack_launcher.explain import do_explain

from argparse import ArgumentParser, REMAINDER
import logging


def get_argparser():
    parser = ArgumentParser(description=
               "Set up and inspect cross-compiling clang launchers.")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    # ./clapack.py generate
    gen_parser = subparsers.add_parser("generate",
            help="Write a launcher and its configuration files.")
    gen_parser.set_defaults(func=do_generate)

    gen_parser.add_argument("toolchain_file", metavar="TOOLCHAIN_YAML",
            help="description of the compiler, sysroot and resource"
                 " directory to use.")

    gen_parser.add_argument("output_directory", metavar="OUTPUT_DIR",
            help="directory to write the launcher into.")

    gen_parser.add_argument("-v", "--verbose", action="store_true",
            help="report each file that is written")

    # ./clapack.py explain
    explain_parser = subparsers.add_parser("explain",
            help="Print the command line a launcher would run.")
    explain_parser.set_defaults(func=do_explain)

    explain_parser.add_argument("launcher",
            help="path to a generated launcher.")

    explain_parser.add_argument("compiler_args", nargs=REMAINDER,
            metavar="ARGS",
            help="arguments the launcher would be invoked with.")

    explain_parser.add_argument("-v", "--verbose", action="store_true",
            help="show where each setting came from; must come"
                 " before LAUNCHER")

    return parser


def main(argv=None):
    parser = get_argparser()
    args = parser.parse_args(argv)

    if args.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(format="%(asctime)s %(message)s", level=level)

    args.func(args)


if __name__ == "__main__":
    main()
