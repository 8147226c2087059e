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

"""Repository mappings from apparent to canonical repository names.

Bazel writes the repository mapping into the runfiles as “_repo_mapping”.
Each line has three comma-separated fields: the canonical name of the source
repository, the apparent name of a target repository as seen from the source
repository, and the canonical name of the target repository.  The main
repository has the empty canonical name.

A source repository name ending in “*” is a prefix entry that applies to all
source repositories starting with the text before the asterisk."""

from collections.abc import Iterable, Mapping
import logging
import os
import types
from typing import NamedTuple, Optional

from rlocation import errors
from rlocation import strategy

class Key(NamedTuple):
    """Lookup key of a repository mapping entry."""
    source: str
    apparent: str


class RepositoryMapping:
    """Immutable repository mapping."""

    def __init__(self, exact: Optional[Mapping[Key, str]] = None,
                 prefixed: Optional[Mapping[Key, str]] = None) -> None:
        self._exact = types.MappingProxyType(dict(exact or {}))
        # Dictionaries keep insertion order, so the first matching prefix
        # entry in the file wins.
        self._prefixed = types.MappingProxyType(dict(prefixed or {}))

    def lookup(self, source: str, apparent: str) -> Optional[str]:
        """Returns the canonical name of the apparent repository.

        Returns None if there’s no mapping entry for the pair."""
        canonical = self._exact.get(Key(source, apparent))
        if canonical is not None:
            return canonical
        for key, canonical in self._prefixed.items():
            if key.apparent == apparent and source.startswith(key.source):
                return canonical
        return None

    def __bool__(self) -> bool:
        return bool(self._exact or self._prefixed)

    def __len__(self) -> int:
        return len(self._exact) + len(self._prefixed)

    def __repr__(self) -> str:
        return (f'RepositoryMapping(exact={dict(self._exact)!r}, '
                f'prefixed={dict(self._prefixed)!r})')


def parse(lines: Iterable[str]) -> RepositoryMapping:
    """Parses the lines of a repository mapping file.

    Raises:
      InvalidRepoMappingEntryError if a line doesn’t have three fields
    """
    exact: dict[Key, str] = {}
    prefixed: dict[Key, str] = {}
    for line in lines:
        line = line.rstrip('\r\n')
        if not line:
            continue
        fields = line.split(',')
        if len(fields) != 3:
            raise errors.InvalidRepoMappingEntryError(line)
        source, apparent, canonical = fields
        if source.endswith('*'):
            prefixed.setdefault(Key(source[:-1], apparent), canonical)
        else:
            exact[Key(source, apparent)] = canonical
    return RepositoryMapping(exact, prefixed)


def load(impl: strategy.Strategy) -> RepositoryMapping:
    """Loads the repository mapping from the runfiles.

    Returns an empty mapping if the runfiles don’t contain a repository
    mapping, for example if Bzlmod is disabled.

    Raises:
      InvalidRepoMappingEntryError if the file is malformed
      UnreadableRepoMappingError if the file exists, but can’t be read
    """
    file = impl.resolve(_REPO_MAPPING)
    if not file or not os.path.isfile(file):
        _logger.debug('no repository mapping in %r', impl)
        return RepositoryMapping()
    try:
        with open(file, 'rt', encoding='utf-8', newline='\n') as stream:
            mapping = parse(stream)
    except OSError as ex:
        raise errors.UnreadableRepoMappingError(
            f'can’t read repository mapping “{file}”: {ex.strerror}') from ex
    except UnicodeDecodeError as ex:
        raise errors.UnreadableRepoMappingError(
            f'repository mapping “{file}” isn’t valid UTF-8: {ex.reason}'
        ) from ex
    _logger.debug('loaded %d repository mapping entries from %s',
                  len(mapping), file)
    return mapping


_REPO_MAPPING = '_repo_mapping'
_logger = logging.getLogger('rlocation.repo_mapping')
