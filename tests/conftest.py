import pytest

from fvg_engine.models import Candle

# Six daily bars, oldest first.
#   2024-01-01..03: bullish gap around 01-02 (01-01 high 101 < 01-03 low 103),
#                   filled on 01-06 (low 100.5 <= 101).
#   2024-01-04..06: bearish gap around 01-05 (01-04 low 104 > 01-06 high 103.5),
#                   never filled.
_BARS = [
    ("2024-01-01", 100.0, 101.0, 99.0, 100.5),
    ("2024-01-02", 100.5, 106.0, 100.2, 105.5),
    ("2024-01-03", 105.5, 108.0, 103.0, 107.0),
    ("2024-01-04", 107.0, 109.0, 104.0, 108.0),
    ("2024-01-05", 108.0, 108.5, 102.0, 103.0),
    ("2024-01-06", 103.0, 103.5, 100.5, 101.0),
]


@pytest.fixture
def ascending_candles():
    return [Candle(d, o, h, l, c, volume=1_000.0) for d, o, h, l, c in _BARS]


@pytest.fixture
def descending_candles(ascending_candles):
    return list(reversed(ascending_candles))


@pytest.fixture
def events():
    """Collects ``(event, fields)`` pairs from an injected hook."""
    collected = []

    def hook(event, **fields):
        collected.append((event, fields))

    hook.collected = collected
    return hook


# Eleven daily bars, oldest first, with gaps of different sizes:
#   bullish around bars 2, 3, 4 and 10, bearish around bars 6, 7 and 8 (1-based).
_SWING_BARS = [
    ("2024-02-01", 100.0, 101.0, 99.0, 100.5),
    ("2024-02-02", 100.5, 106.0, 100.0, 105.5),
    ("2024-02-03", 105.5, 108.0, 103.0, 107.0),
    ("2024-02-04", 107.0, 115.0, 106.5, 114.5),
    ("2024-02-05", 114.5, 117.0, 112.0, 116.0),
    ("2024-02-06", 116.0, 116.5, 105.0, 106.0),
    ("2024-02-07", 106.0, 107.0, 100.0, 101.0),
    ("2024-02-08", 101.0, 101.5, 92.0, 93.0),
    ("2024-02-09", 93.0, 94.0, 90.0, 91.0),
    ("2024-02-10", 91.0, 99.0, 91.0, 98.5),
    ("2024-02-11", 98.5, 103.0, 98.0, 102.5),
]


@pytest.fixture
def swing_candles():
    """Newest first, like the candle sources return them."""
    return [Candle(d, o, h, l, c) for d, o, h, l, c in reversed(_SWING_BARS)]
