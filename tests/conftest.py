# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURE_FILES = {
    "a.txt": "This is file a.\n",
    "b.txt": "This is file b.\n",
    "c.txt": "This is file c.\n",
}


@pytest.fixture
def fixtures(tmp_path: Path) -> Path:
    """Return a directory of three text files and two empty subdirectories."""
    root = tmp_path / "fixtures"
    root.mkdir()
    for name, text in FIXTURE_FILES.items():
        _ = (root / name).write_text(text, encoding="utf-8")
    (root / "sub").mkdir()
    (root / "sub2").mkdir()
    return root
