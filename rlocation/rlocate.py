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

"""Prints the locations of runfiles.

Usage: python -m rlocation.rlocate [--source-repository=NAME] PATH...

With --env, prints the environment variables that a child process needs to
find the same runfiles instead."""

import argparse
from collections.abc import Sequence
import io
import logging
import os
import sys
from typing import Optional

from rlocation import errors
from rlocation import runfiles

def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main function."""
    if isinstance(sys.stdout, io.TextIOWrapper):  # typical case
        sys.stdout.reconfigure(encoding='utf-8', errors='backslashreplace')
    parser = argparse.ArgumentParser(allow_abbrev=False)
    parser.add_argument('--source-repository', default='')
    parser.add_argument('--manifest-file')
    parser.add_argument('--runfiles-dir')
    parser.add_argument('--argv0')
    parser.add_argument('--env', action='store_true', default=False)
    parser.add_argument('--verbose', action='store_true', default=False)
    parser.add_argument('path', nargs='*')
    opts = parser.parse_args(argv)
    if not opts.env and not opts.path:
        parser.error('no runfiles paths given')
    logging.basicConfig(level=logging.INFO if opts.verbose else logging.WARNING,
                        format='%(asctime)s %(levelname)s %(name)s %(message)s')
    env: dict[str, str] = dict(os.environ)
    if opts.manifest_file is not None or opts.runfiles_dir is not None:
        # Explicit locations replace the inherited ones.
        env.pop('RUNFILES_MANIFEST_FILE', None)
        env.pop('RUNFILES_DIR', None)
    if opts.manifest_file is not None:
        env['RUNFILES_MANIFEST_FILE'] = opts.manifest_file
    if opts.runfiles_dir is not None:
        env['RUNFILES_DIR'] = opts.runfiles_dir
    try:
        run_files = runfiles.create(opts.source_repository, env,
                                    argv0=opts.argv0)
    except errors.RunfilesError as ex:
        _logger.error('%s', ex)
        sys.exit(1)
    _logger.info('using %r', run_files)
    if opts.env:
        for key, value in sorted(run_files.env_vars().items()):
            print(f'{key}={value}')
        return
    missing = False
    for path in opts.path:
        location = run_files.rlocation(path)
        if location is None:
            _logger.warning('runfile %s not found', path)
            missing = True
        else:
            print(location)
    if missing:
        sys.exit(1)


_logger = logging.getLogger('rlocation.rlocate')


if __name__ == '__main__':
    main()
