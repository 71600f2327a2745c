"""Shared fixtures for FBAR Facts tests."""

from pathlib import Path

import pytest

from fbar.models.facts import AnnualFact, ExchangeRate, Facts


DEMO_DATA_PATH = Path(__file__).resolve().parent.parent / "demo_data"


@pytest.fixture
def demo_data_path() -> Path:
    return DEMO_DATA_PATH


@pytest.fixture
def write_data(tmp_path):
    """Write a data.yml into a temp directory and return the directory."""
    def _write(content: str, filename: str = "data.yml") -> Path:
        (tmp_path / filename).write_text(content, encoding="utf-8")
        return tmp_path
    return _write


@pytest.fixture
def reference_facts() -> Facts:
    return Facts(
        years=(
            AnnualFact(
                year=2023,
                exchange_rates=(
                    ExchangeRate(currency_code="EUR", rate=0.85),
                    ExchangeRate(currency_code="CHF", rate=0.90),
                ),
            ),
        )
    )


@pytest.fixture
def user_facts() -> Facts:
    # CHF deliberately missing so lookups fall through to the reference
    return Facts(
        years=(
            AnnualFact(
                year=2023,
                exchange_rates=(ExchangeRate(currency_code="EUR", rate=0.80),),
            ),
        )
    )
