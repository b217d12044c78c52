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
#
# Schema for toolchain description files.


from voluptuous import All, Invalid, Length, Optional, Required, Schema


DEFAULT_LAUNCHER = "clang-for-clapack-launcher"

# Value of resource_dir that asks the compiler where its resources are.
AUTO = "auto"


def file_name(value):
    if "/" in value:
        raise Invalid("must be a file name, not a path: '%s'" % value)
    return value


non_empty = All(str, Length(min=1))


toolchain_schema = Schema({
    Required("compiler"): non_empty,
    Optional("sysroot"): non_empty,
    Optional("resource_dir"): non_empty,
    Optional("launcher", default=DEFAULT_LAUNCHER): All(non_empty,
                                                        file_name),
})
