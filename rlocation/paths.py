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

"""Syntactic checks for runfiles paths."""

import os
import re

def is_normalized(path: str) -> bool:
    """Returns whether a runfiles path may be looked up at all.

    Paths with “.” or “..” segments, empty segments, or a leading backslash
    are never valid runfiles paths."""
    if not path:
        return False
    if path in ('.', '..'):
        return False
    if path.startswith(('../', './', '\\')):
        return False
    if '/../' in path or '/./' in path or '//' in path:
        return False
    return not path.endswith(('/..', '/.'))


def is_absolute(path: str) -> bool:
    """Returns whether path is already an absolute filename."""
    if path.startswith('/'):
        return True
    return _WINDOWS and bool(_DRIVE.match(path))


_WINDOWS = os.name == 'nt'
_DRIVE = re.compile(r'[A-Za-z]:[/\\]', re.ASCII)
