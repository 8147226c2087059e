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

"""Contains a class to access Bazel runfiles.

Typical use:

    run_files = runfiles.create()
    data = run_files.rlocation('my_module/pkg/data.txt')

The factory functions raise subclasses of errors.RunfilesError if the runfiles
can’t be set up.  Lookups never raise; they return None for runfiles that
can’t be found."""

from collections.abc import Mapping
import inspect
import logging
import os
import pathlib
import re
from typing import Optional

from rlocation import config
from rlocation import locator
from rlocation import paths
from rlocation import repo_mapping
from rlocation import strategy

class Runfiles:
    """Represents a set of Bazel runfiles.

    Instances are immutable and can be shared between threads."""

    def __init__(self, impl: strategy.Strategy,
                 mapping: repo_mapping.RepositoryMapping,
                 source_repository: str = '') -> None:
        self._impl = impl
        self._mapping = mapping
        self._source_repository = source_repository

    @property
    def source_repository(self) -> str:
        """Canonical name of the repository whose mapping applies by default.

        The empty string stands for the main repository."""
        return self._source_repository

    def rlocation(self, path: str,
                  source_repository: Optional[str] = None) -> Optional[str]:
        """Returns the runtime location of a runfile.

        The result may not exist; callers should check that themselves.

        Args:
          path: runfiles-root-relative path of the runfile; the first segment
            is an apparent or canonical repository name
          source_repository: canonical name of the repository whose mapping
            translates the first segment of path; defaults to the repository
            bound to this object

        Returns:
          the location, or None if path is invalid or not found
        """
        if not paths.is_normalized(path):
            return None
        if paths.is_absolute(path):
            return path
        if source_repository is None:
            source_repository = self._source_repository
        target, sep, remainder = path.partition('/')
        if not sep:
            # Single segments name root symlinks, which are never mapped.
            return self._impl.resolve(path)
        canonical = self._mapping.lookup(source_repository, target)
        if canonical is None:
            return self._impl.resolve(path)
        return self._impl.resolve(canonical + '/' + remainder)

    def resolve(self, name: pathlib.PurePosixPath) -> pathlib.Path:
        """Resolves a runfile name to an absolute filename.

        Raises:
          FileNotFoundError if the runfile wasn’t found in the manifest
        """
        if str(name) in ('', '.'):
            raise ValueError('Missing runfile name')
        if name.is_absolute():
            raise ValueError(f'Runfile name “{name}” is absolute')
        result = self.rlocation(str(name))
        if not result:
            raise FileNotFoundError(f'Runfile “{name}” not found')
        return pathlib.Path(os.path.abspath(result))

    def env_vars(self) -> dict[str, str]:
        """Returns environment variables for subprocesses.

        Pass these to Bazel-built programs so that they find their runfiles
        as well."""
        return self._impl.environment()

    def with_source_repository(self, source_repository: str) -> 'Runfiles':
        """Returns a view that uses the given repository’s mapping."""
        return Runfiles(self._impl, self._mapping, source_repository)

    def __repr__(self) -> str:
        return (f'Runfiles({self._impl!r}, '
                f'source_repository={self._source_repository!r})')


def create(source_repository: Optional[str] = None,
           env: Optional[Mapping[str, str]] = None, *,
           argv0: Optional[str] = None,
           caller_file: Optional[str] = None) -> Runfiles:
    """Returns a new Runfiles object for the current program.

    Args:
      source_repository: canonical name of the calling repository; derived
        from caller_file if not given
      env: environment variables; defaults to the process environment
      argv0: program name; defaults to sys.argv[0]
      caller_file: source file of the caller; defaults to the file
        containing the function calling create

    Raises:
      MissingManifestError, InvalidRepoMappingEntryError,
      InvalidRunfilesLocationsError, MissingRunfilesLocationsError
    """
    snapshot = config.Environment.from_mapping(env, argv0)
    location = locator.locate(snapshot.argv0, snapshot.manifest_file,
                              snapshot.runfiles_dir)
    if isinstance(location, locator.ManifestFile):
        impl: strategy.Strategy = strategy.ManifestBased(location.path)
    else:
        impl = strategy.DirectoryBased(location.path)
    if source_repository is None:
        source_repository = repository_from_path(
            caller_file if caller_file is not None else _caller_file())
    return _assemble(impl, source_repository)


def create_for_test(source_repository: Optional[str] = None,
                    env: Optional[Mapping[str, str]] = None, *,
                    argv0: Optional[str] = None,
                    caller_file: Optional[str] = None) -> Runfiles:
    """Returns a directory-based Runfiles object for a test.

    Unlike create, this ignores RUNFILES_MANIFEST_FILE and also looks at
    TEST_SRCDIR and at the directories above the program.

    Raises:
      InvalidRepoMappingEntryError, MissingRunfilesLocationsError
    """
    snapshot = config.Environment.from_mapping(env, argv0)
    location = locator.locate_directory(snapshot.argv0, snapshot.runfiles_dir,
                                        snapshot.test_srcdir)
    if source_repository is None:
        source_repository = repository_from_path(
            caller_file if caller_file is not None else _caller_file())
    return _assemble(strategy.DirectoryBased(location.path), source_repository)


def create_manifest_based(manifest_file: str,
                          source_repository: str = '') -> Runfiles:
    """Returns a Runfiles object for the given manifest file.

    Raises:
      MissingManifestError, InvalidRepoMappingEntryError
    """
    return _assemble(strategy.ManifestBased(manifest_file), source_repository)


def create_directory_based(runfiles_dir: str,
                           source_repository: str = '') -> Runfiles:
    """Returns a Runfiles object for the given runfiles directory.

    Raises:
      InvalidRepoMappingEntryError
    """
    return _assemble(strategy.DirectoryBased(runfiles_dir), source_repository)


def repository_from_path(path: str) -> str:
    """Returns the canonical name of the repository containing path.

    Returns the empty string for files in the main repository."""
    path = path.replace('\\', '/')
    for pattern in (_EXTERNAL_GENERATED_FILE, _EXTERNAL_FILE):
        match = pattern.search(path)
        if match:
            return match.group(1)
    return ''


def _assemble(impl: strategy.Strategy, source_repository: str) -> Runfiles:
    mapping = repo_mapping.load(impl)
    _logger.debug('using %r with %d repository mapping entries',
                  impl, len(mapping))
    return Runfiles(impl, mapping, source_repository)


def _caller_file() -> str:
    # Skip this function and the factory function.
    frame = inspect.currentframe()
    try:
        for _ in range(2):
            if frame is None:
                return ''
            frame = frame.f_back
        return frame.f_code.co_filename if frame else ''
    finally:
        del frame


# Python file names are usually absolute, so the execroot-relative part can
# start after any directory.
_EXTERNAL_GENERATED_FILE = re.compile(
    r'(?:^|/)bazel-out/[^/]+/bin/external/([^/]+)/')
_EXTERNAL_FILE = re.compile(r'(?:^|/)external/([^/]+)/')
_logger = logging.getLogger('rlocation.runfiles')
