from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
MODULES = sorted((ROOT / "pul_arena").rglob("*.py"))


@pytest.mark.parametrize("path", MODULES, ids=lambda p: p.name)
def test_modules_open_with_their_path(path):
    first_line = path.read_text(encoding="utf-8").splitlines()[0]
    assert first_line == f"# {path.relative_to(ROOT).as_posix()}"
