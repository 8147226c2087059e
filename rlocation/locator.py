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

"""Finds the runfiles manifest or directory of the running program.

The filesystem is only accessed through the predicates passed to the
functions in this module, so that tests can simulate arbitrary layouts."""

from collections.abc import Callable
import logging
import os
import os.path
from typing import NamedTuple, Optional, Union

from rlocation import errors

class ManifestFile(NamedTuple):
    """Location of a runfiles manifest file."""
    path: str


class Directory(NamedTuple):
    """Location of a runfiles directory."""
    path: str


Location = Union[ManifestFile, Directory]
Predicate = Callable[[str], bool]
ReadLink = Callable[[str], Optional[str]]


def locate(argv0: str, manifest_file: str = '', runfiles_dir: str = '', *,
           is_manifest: Predicate = os.path.isfile,
           is_directory: Predicate = os.path.isdir) -> Location:
    """Returns the runfiles location for the given inputs.

    Explicitly given locations take precedence; a manifest wins over a
    directory.  Otherwise look for runfiles next to argv0.

    Raises:
      InvalidRunfilesLocationsError if both a manifest and a directory are
        given, but neither exists
      MissingRunfilesLocationsError if no runfiles were found
    """
    if manifest_file or runfiles_dir:
        if manifest_file and is_manifest(manifest_file):
            return ManifestFile(manifest_file)
        if runfiles_dir and is_directory(runfiles_dir):
            return Directory(runfiles_dir)
        if manifest_file and runfiles_dir:
            raise errors.InvalidRunfilesLocationsError(
                f'neither runfiles manifest “{manifest_file}” '
                f'nor runfiles directory “{runfiles_dir}” is valid')
        # Let the caller report the concrete problem with the single location.
        _logger.debug('using unverified runfiles location %s',
                      manifest_file or runfiles_dir)
        return (ManifestFile(manifest_file) if manifest_file
                else Directory(runfiles_dir))
    if argv0:
        for candidate in (argv0 + '.runfiles/MANIFEST',
                          argv0 + '.runfiles_manifest'):
            if is_manifest(candidate):
                return ManifestFile(candidate)
        candidate = argv0 + '.runfiles'
        if is_directory(candidate):
            return Directory(candidate)
    raise errors.MissingRunfilesLocationsError(
        f'no runfiles found for program “{argv0}”')


def locate_directory(argv0: str, runfiles_dir: str = '',
                     test_srcdir: str = '', *,
                     is_directory: Predicate = os.path.isdir,
                     read_link: Optional[ReadLink] = None) -> Directory:
    """Returns the runfiles directory, searching more places than locate.

    Looks at RUNFILES_DIR and TEST_SRCDIR first, then for a runfiles
    directory next to argv0 or above it, then does the same for the target of
    argv0 if argv0 is a symbolic link.

    Raises:
      MissingRunfilesLocationsError if no runfiles directory was found
    """
    for candidate in (runfiles_dir, test_srcdir):
        if candidate and is_directory(candidate):
            return Directory(candidate)
    if argv0:
        found = _search(argv0, is_directory)
        if found:
            return found
        target = (read_link or _read_link)(argv0)
        if target:
            target = os.path.join(os.path.dirname(argv0), target)
            _logger.debug('following symbolic link %s → %s', argv0, target)
            found = _search(target, is_directory)
            if found:
                return found
    raise errors.MissingRunfilesLocationsError(
        f'no runfiles directory found for program “{argv0}”')


def _search(program: str, is_directory: Predicate) -> Optional[Directory]:
    neighbor = program + '.runfiles'
    if is_directory(neighbor):
        return Directory(neighbor)
    directory = os.path.dirname(program)
    while directory:
        if directory.endswith('.runfiles') and is_directory(directory):
            return Directory(directory)
        parent = os.path.dirname(directory)
        if parent == directory:
            break
        directory = parent
    return None


def _read_link(path: str) -> Optional[str]:
    try:
        return os.readlink(path)
    except OSError:
        # Not a symbolic link.
        return None


_logger = logging.getLogger('rlocation.locator')
