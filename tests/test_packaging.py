"""パッケージメタデータのテスト"""

import re
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def test_requires_python_supports_dataclass_slots():
    """Recordは@dataclass(slots=True)を使うため3.10以上が必要"""
    match = re.search(r'^requires-python = ">=(\d+)\.(\d+)"', PYPROJECT.read_text(), re.M)
    assert match is not None
    assert (int(match.group(1)), int(match.group(2))) >= (3, 10)
