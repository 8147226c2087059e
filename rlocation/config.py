# Copyright 2021-2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Snapshot of the process state that determines where runfiles live."""

from collections.abc import Mapping
import os
import sys
from typing import NamedTuple, Optional

class Environment(NamedTuple):
    """The inputs of runfiles discovery.

    Empty strings mean that the corresponding value isn’t set."""

    argv0: str = ''
    manifest_file: str = ''
    runfiles_dir: str = ''
    test_srcdir: str = ''

    @classmethod
    def from_mapping(cls, env: Optional[Mapping[str, str]] = None,
                     argv0: Optional[str] = None) -> 'Environment':
        """Takes a snapshot of the given environment variables.

        If env is None, use the environment of the current process.  If argv0
        is None, use the name of the running program."""
        if env is None:
            env = os.environ
        if argv0 is None:
            argv0 = sys.argv[0] if sys.argv else ''
        return cls(argv0=argv0,
                   manifest_file=env.get('RUNFILES_MANIFEST_FILE') or '',
                   runfiles_dir=env.get('RUNFILES_DIR') or '',
                   test_srcdir=env.get('TEST_SRCDIR') or '')
