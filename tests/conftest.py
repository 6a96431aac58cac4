from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).resolve().parent.parent / "fixtures"


@pytest.fixture
def sample_meminfo_path() -> Path:
    return FIXTURES_DIR / "meminfo_sample.txt"


@pytest.fixture
def sample_meminfo(sample_meminfo_path: Path) -> str:
    return sample_meminfo_path.read_text(encoding="utf-8")
