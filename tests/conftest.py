from pathlib import Path

import pytest

DATA = Path(__file__).parent / "data"


@pytest.fixture
def data_dir():
    return DATA


@pytest.fixture
def load_fixture():
    def _load(name: str) -> str:
        return (DATA / name).read_text(encoding="utf-8")

    return _load
