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

"""Exceptions raised while setting up runfiles.

Lookups of individual runfiles never raise these; only the factory functions
in rlocation.runfiles do."""


class RunfilesError(Exception):
    """Base class for runfiles setup errors."""


class MissingManifestError(RunfilesError, FileNotFoundError):
    """The runfiles manifest file can’t be opened."""


class InvalidRepoMappingEntryError(RunfilesError, ValueError):
    """A line in the repository mapping file doesn’t have three fields."""

    def __init__(self, line: str) -> None:
        super().__init__(f'invalid repository mapping entry “{line}”')
        self.line = line


class UnreadableRepoMappingError(RunfilesError, OSError):
    """The repository mapping file exists, but can’t be read."""


class InvalidRunfilesLocationsError(RunfilesError, FileNotFoundError):
    """Neither the given manifest file nor the given directory is usable."""


class MissingRunfilesLocationsError(RunfilesError, FileNotFoundError):
    """No runfiles manifest or directory could be found."""
