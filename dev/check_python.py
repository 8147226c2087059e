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

"""Runs Pylint over the Python files of this project."""

import argparse
import os
import pathlib
import sys
import subprocess


def main() -> None:
    """Main function."""
    parser = argparse.ArgumentParser(allow_abbrev=False)
    parser.add_argument('--root', type=pathlib.Path,
                        default=pathlib.Path(__file__).resolve().parent.parent)
    parser.add_argument('--rcfile', type=pathlib.Path)
    args = parser.parse_args()
    root = args.root.resolve()
    srcs = sorted(file for directory in _DIRECTORIES
                  for file in (root / directory).glob('*.py'))
    if not srcs:
        raise FileNotFoundError(f'no source files found in {root}')
    rcfile = args.rcfile or root / 'pyproject.toml'
    # Let Pylint find the rlocation package without installing it.
    env = dict(os.environ,
               PYTHONPATH=os.pathsep.join([str(root)] + sys.path))
    result = subprocess.run(
        [sys.executable, '-m', 'pylint',
         '--persistent=no', '--rcfile=' + str(rcfile.resolve()), '--']
        + [str(file.relative_to(root)) for file in srcs],
        check=False, cwd=root, env=env,
        stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
        encoding='utf-8', errors='backslashreplace')
    if result.returncode:
        print(result.stdout)
        sys.exit(result.returncode)


_DIRECTORIES = ('rlocation', 'examples', 'dev')


if __name__ == '__main__':
    main()
