"""Line item identity keys and customisation handling."""

from checkout_cart.core.domain.model.cart import Customisation, compute_key, display_title
from checkout_cart.core.domain.model.money import Money


def _custom(title: str, value: str, price: str = "0") -> Customisation:
    return Customisation(title, value, Money.of(price))


class TestComputeKey:
    def test_no_customisations_is_object_id(self):
        assert compute_key("42", ()) == "42"
        assert compute_key(42, []) == "42"

    def test_same_input_same_key(self):
        a = compute_key("42", [_custom("colour", "red", "1.50")])
        b = compute_key("42", (_custom("colour", "red", "1.5"),))
        assert a == b
        assert a.startswith("42:")

    def test_order_matters(self):
        first = compute_key("42", [_custom("colour", "red"), _custom("size", "L")])
        second = compute_key("42", [_custom("size", "L"), _custom("colour", "red")])
        assert first != second

    def test_value_and_price_are_part_of_identity(self):
        base = compute_key("42", [_custom("colour", "red", "1.00")])
        assert compute_key("42", [_custom("colour", "blue", "1.00")]) != base
        assert compute_key("42", [_custom("colour", "red", "2.00")]) != base

    def test_key_is_path_safe(self):
        key = compute_key("42", [_custom("engraving", "To A/B?", "5")])
        assert "/" not in key
        assert "?" not in key


class TestDisplayTitle:
    def test_normalises_separators_and_case(self):
        assert display_title("gift-wrap_style") == "Gift Wrap Style"
        assert display_title("Colour") == "Colour"
