import pytest

from hungerzhub.config import set_config_for_test
from hungerzhub.data.models import Coupon
from hungerzhub.ordering.coupons import apply_discount, resolve_coupon


@pytest.mark.parametrize("code", ["PRINCE10", "prince10", "  Prince10 "])
def test_lookup_ignores_case_and_spaces(code):
    result = resolve_coupon(code)
    assert result.ok
    assert result.coupon == Coupon(code="PRINCE10", discount=10)
    assert "10% off" in result.message


def test_unknown_and_empty_codes():
    assert resolve_coupon("SAVE50").message == "Invalid coupon code: SAVE50"
    assert not resolve_coupon("").ok
    assert not resolve_coupon(None).ok


def test_explicit_table_overrides_config():
    assert resolve_coupon("WELCOME", {"welcome": 25}).coupon.discount == 25
    assert not resolve_coupon("PRINCE10", {}).ok


def test_configured_coupons():
    set_config_for_test(coupons={"HUNGERZ15": 15})
    assert resolve_coupon("hungerz15").ok
    assert not resolve_coupon("PRINCE10").ok


def test_apply_discount_rounds_to_cents():
    assert apply_discount(200, Coupon(code="PRINCE10", discount=10)) == 180
    assert apply_discount(99.99, Coupon(code="X", discount=15)) == 84.99
    assert apply_discount(120, None) == 120
