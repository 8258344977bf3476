"""Tests for ticker normalization."""

import pytest

from ohlc_loader.data.ticker_utils import canonical_ticker


@pytest.mark.parametrize("raw", ["spy", "SPY", "Spy", " spy "])
def test_canonical_ticker_upper_cases(raw):
    assert canonical_ticker(raw) == "SPY"


def test_canonical_ticker_keeps_suffix():
    assert canonical_ticker("brk.b") == "BRK.B"


@pytest.mark.parametrize("raw", ["", "   ", None, 42])
def test_canonical_ticker_rejects_invalid(raw):
    with pytest.raises(ValueError):
        canonical_ticker(raw)
