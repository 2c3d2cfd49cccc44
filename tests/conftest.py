from pathlib import Path

import pytest


@pytest.fixture
def ini_file(tmp_path: Path):
    """Write `text` into a fresh INI file and hand back its path."""
    def _make(text: str, name: str = 'test.ini') -> Path:
        path = tmp_path / name
        path.write_text(text, encoding='utf-8')
        return path
    return _make
