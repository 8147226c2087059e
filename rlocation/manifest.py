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

"""Functions to read and write runfiles manifests.

A runfiles manifest has one entry per line.  Each line contains a runfiles
path, a single space, and the location of the file.  A line without a space
maps the path onto itself.  Lines starting with a space are escaped: in the
path, “\\s”, “\\n”, and “\\b” stand for a space, a newline, and a backslash;
in the location, only “\\n” and “\\b” are escaped."""

from collections.abc import Generator, Iterable, Mapping
import contextlib
import os
import pathlib
import re
import tempfile
import types
from typing import IO, Union

from rlocation import errors

def parse(lines: Iterable[str]) -> Mapping[str, str]:
    """Parses the lines of a manifest into an immutable mapping."""
    table: dict[str, str] = {}
    for line in lines:
        line = line.rstrip('\n')
        if line.endswith('\r'):
            line = line[:-1]
        if not line:
            continue
        if line.startswith(' '):
            key, _, value = line[1:].partition(' ')
            key = _KEY_PATTERN.sub(_unescape, key)
            value = _VALUE_PATTERN.sub(_unescape, value)
        else:
            key, _, value = line.partition(' ')
        # Root symlinks and empty files map onto themselves.
        table[key] = value or key
    return types.MappingProxyType(table)


def load(file: Union[str, os.PathLike[str]]) -> Mapping[str, str]:
    """Reads and parses the manifest file.

    Raises:
      MissingManifestError if the file can’t be opened
    """
    try:
        with open(file, 'rt', encoding='utf-8', newline='\n') as stream:
            return parse(stream)
    except OSError as ex:
        raise errors.MissingManifestError(
            f'can’t open runfiles manifest “{os.fspath(file)}”: '
            f'{ex.strerror}') from ex


def write(entries: Iterable[tuple[str, str]], file: IO[str]) -> None:
    """Writes manifest entries to the given file object."""
    for key, value in entries:
        if _needs_escaping(key) or '\n' in value or '\\' in value:
            file.write(' ' + escape(key) + ' ' + _escape_value(value) + '\n')
        else:
            file.write(key + ' ' + value + '\n')
    file.flush()


@contextlib.contextmanager
def temporary(entries: Iterable[tuple[str, str]], *,
              name: str = 'MANIFEST') -> Generator[pathlib.Path, None, None]:
    """Creates a manifest file in a new temporary directory.

    The directory is deleted when the context exits."""
    with tempfile.TemporaryDirectory(
            prefix='manifest-', dir=os.getenv('TEST_TMPDIR') or None) as temp:
        path = pathlib.Path(temp) / name
        with path.open(mode='xt', encoding='utf-8', newline='\n') as file:
            write(entries, file)
        yield path


def escape(path: str) -> str:
    """Escapes a runfiles path for an escaped manifest line."""
    return (path.replace('\\', r'\b')
            .replace(' ', r'\s')
            .replace('\n', r'\n'))


def _escape_value(value: str) -> str:
    return value.replace('\\', r'\b').replace('\n', r'\n')


def _needs_escaping(path: str) -> bool:
    return any(char in path for char in ' \n\\')


def _unescape(match: re.Match[str]) -> str:
    return _UNESCAPE[match.group(1)]


_UNESCAPE = types.MappingProxyType({'s': ' ', 'n': '\n', 'b': '\\'})
_KEY_PATTERN = re.compile(r'\\([snb])')
_VALUE_PATTERN = re.compile(r'\\([nb])')
