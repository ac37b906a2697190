import math

from conftest import ist, make_quote
from dip_detector import pct_change, is_dip, format_dip_alert, build_dip_record


def test_pct_change_basic():
    assert pct_change(95, 100) == -5.0
    assert pct_change(110, 100) == 10.0


def test_threshold_boundary_is_a_dip():
    change = pct_change(99.5, 100)
    assert change == -0.5
    assert is_dip(change) is True


def test_just_above_threshold_is_not_a_dip():
    assert is_dip(pct_change(99.6, 100)) is False
    assert is_dip(0.0) is False


def test_pct_change_unusable_inputs():
    assert pct_change(100, 0) is None
    assert pct_change(math.nan, 100) is None
    assert pct_change(100, math.inf) is None
    assert pct_change(None, 100) is None


def test_custom_threshold():
    assert is_dip(-1.5, threshold=-2.0) is False
    assert is_dip(-2.0, threshold=-2.0) is True


def test_format_dip_alert():
    message = format_dip_alert('Nifty Bank (BANKBEES)', 'BANKBEES', -1.2345,
                               49.5, 50.123, ist(2025, 1, 6, 10, 5))

    assert 'Dip Alert' in message
    assert 'Nifty Bank (BANKBEES) (BANKBEES) is -1.23% vs prev close.' in message
    assert 'Price: ₹49.50 | Prev: ₹50.12' in message
    assert '(06 Jan 2025 10:05 IST)' in message


def test_build_dip_record_rounds_change_for_display():
    now = ist(2025, 1, 6, 10, 5)
    record = build_dip_record({'name': 'X ETF', 'symbol': 'X'}, make_quote('X', 95.0, 100.0),
                              -5.004, now)

    assert record == {
        'name': 'X ETF',
        'symbol': 'X',
        'price': 95.0,
        'prevClose': 100.0,
        'change': -5.0,
        'time': now.isoformat(),
        'telegram': None,
    }
