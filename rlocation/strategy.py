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

"""Lookup strategies for directory-based and manifest-based runfiles.

Both strategies receive runfiles paths that have already been validated and
repository-mapped, and both expose the same two methods: resolve and
environment."""

import logging
import os
from typing import Optional, Union

from rlocation import manifest

class DirectoryBased:
    """Runfiles that are materialized in a directory tree."""

    def __init__(self, root: str) -> None:
        self._root = root

    @property
    def root(self) -> str:
        """The runfiles root directory."""
        return self._root

    def resolve(self, path: str) -> Optional[str]:
        """Returns the location of the runfile below the root directory.

        This doesn’t normalize the result or check whether the file exists."""
        return self._root + '/' + path

    def environment(self) -> dict[str, str]:
        """Returns the environment variables for a child process."""
        return {'RUNFILES_DIR': self._root}

    def __repr__(self) -> str:
        return f'DirectoryBased({self._root!r})'


class ManifestBased:
    """Runfiles that are listed in a manifest file.

    Raises:
      MissingManifestError if the manifest can’t be opened
    """

    def __init__(self, path: str) -> None:
        self._path = path
        self._table = manifest.load(path)
        _logger.debug('loaded %d entries from runfiles manifest %s',
                      len(self._table), path)

    @property
    def path(self) -> str:
        """The manifest filename."""
        return self._path

    def resolve(self, path: str) -> Optional[str]:
        """Looks up a runfile in the manifest.

        An exact entry wins over any directory entry.  Otherwise the longest
        directory entry that is a prefix of path wins."""
        exact = self._table.get(path)
        if exact is not None:
            return exact
        end = len(path)
        while True:
            end = path.rfind('/', 0, end)
            if end <= 0:
                return None
            prefix = self._table.get(path[:end])
            if prefix is not None:
                return prefix + '/' + path[end + 1:]

    def environment(self) -> dict[str, str]:
        """Returns the environment variables for a child process.

        Includes RUNFILES_DIR if the manifest filename implies a runfiles
        directory."""
        env = {'RUNFILES_MANIFEST_FILE': self._path}
        directory = _runfiles_dir(self._path)
        if directory:
            env['RUNFILES_DIR'] = directory
        return env

    def __repr__(self) -> str:
        return f'ManifestBased({self._path!r})'


def _runfiles_dir(manifest_file: str) -> Optional[str]:
    if manifest_file.endswith(('/MANIFEST', '\\MANIFEST')):
        return manifest_file[:-len('/MANIFEST')]
    if manifest_file == 'MANIFEST':
        return os.curdir
    if manifest_file.endswith('.runfiles_manifest'):
        return manifest_file[:-len('_manifest')]
    return None


Strategy = Union[DirectoryBased, ManifestBased]

_logger = logging.getLogger('rlocation.strategy')
