import pytest

from yeardots.progress import YearProgress


@pytest.fixture
def march_first() -> YearProgress:
    return YearProgress(year=2023, total=365, filled=60, percent="16.4")


@pytest.fixture
def leap_year_end() -> YearProgress:
    return YearProgress(year=2024, total=366, filled=366, percent="100.0")
