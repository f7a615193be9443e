"""Cost derivation: subtotal -> discount -> postage -> tax -> total."""

from decimal import Decimal

import pytest
from returns.result import Success

from checkout_cart.core.domain.model.cart import Discount, DiscountType, LineItem, Product
from checkout_cart.core.domain.model.errors import ResolverUnavailable
from checkout_cart.core.domain.model.money import Money
from checkout_cart.core.domain.service import pricing
from checkout_cart.core.domain.service.cart_service import ShoppingCart
from checkout_cart.core.ports.inbound.cart import CustomisationLine


def fixed(amount: str) -> Discount:
    return Discount("F", DiscountType.FIXED, Decimal(amount))


def percentage(amount: str) -> Discount:
    return Discount("P", DiscountType.PERCENTAGE, Decimal(amount))


class TestPureStages:
    def test_aggregates_skip_missing_price_and_weight(self):
        items = (
            LineItem("1", Product("1", "Pen", Money.of("10.00"), Decimal("0.5")), 3),
            LineItem("3", Product("3", "Voucher"), 2),
        )
        assert pricing.total_weight(items) == Decimal("1.5")
        assert pricing.total_items(items) == 5
        assert pricing.sub_total(items) == Money.of("30.00")

    def test_fixed_discount_is_clamped_to_subtotal(self):
        assert pricing.discount_amount(fixed("15.00"), Money.of("10.00")) == Money.of("10.00")
        assert pricing.discount_amount(fixed("4.00"), Money.of("10.00")) == Money.of("4.00")

    def test_percentage_discount(self):
        assert pricing.discount_amount(percentage("10"), Money.of("200.00")) == Money.of("20.00")

    @pytest.mark.parametrize(
        "discount, subtotal",
        [(None, "50.00"), (percentage("0"), "50.00"), (percentage("10"), "0"), (fixed("5"), "0")],
    )
    def test_zero_discount_cases(self, discount, subtotal):
        assert pricing.discount_amount(discount, Money.of(subtotal)).is_zero()

    def test_tax_is_charged_on_discounted_base_including_postage(self):
        sub, post, disc = Money.of("100.00"), Money.of("10.00"), Money.of("20.00")
        tax = pricing.tax_cost(sub, post, disc, Decimal("10"))

        assert tax == Money.of("9.00")
        assert pricing.total_cost(sub, disc, post, tax) == Money.of("99.00")

    def test_no_tax_without_positive_rate_or_base(self):
        sub = Money.of("100.00")
        zero = Money.zero()
        assert pricing.tax_cost(sub, zero, zero, Decimal("0")).is_zero()
        assert pricing.tax_cost(sub, zero, sub, Decimal("20")).is_zero()


class TestCartPipeline:
    def test_empty_cart(self, cart):
        b = cart.breakdown().unwrap()
        assert b.total_items == 0
        assert b.total_weight == 0
        assert b.total_cost.is_zero()

    def test_discount_free_total(self, make_deps):
        cart = ShoppingCart.open(make_deps(tax_rate="20")).unwrap()
        cart.add("Product", "1", 2)
        cart.search_postage("GB", "SW1A 1AA")
        cart.select_postage("std")

        assert cart.discount_amount().is_zero()
        expected = cart.sub_total() + cart.postage_cost().unwrap() + cart.tax_cost().unwrap()
        assert cart.total_cost() == Success(expected)
        assert expected == Money.of("36.00")

    def test_fixed_discount_never_goes_negative(self, cart):
        cart.add("Product", "1")
        cart.set_discount(fixed("15.00"))

        assert cart.sub_total() == Money.of("10.00")
        assert cart.discount_amount() == Money.of("10.00")
        assert cart.total_cost().unwrap().is_zero()

    def test_percentage_discount(self, cart):
        cart.add("Product", "4")
        cart.set_discount(percentage("10"))
        assert cart.discount_amount() == Money.of("20.00")

    def test_tax_ordering_end_to_end(self, make_deps):
        cart = ShoppingCart.open(make_deps(tax_rate="10")).unwrap()
        cart.add("Product", "2")
        cart.set_discount(fixed("20.00"))
        cart.search_postage("GB", "SW1A 1AA")
        cart.select_postage("std")

        b = cart.breakdown().unwrap()
        assert b.sub_total == Money.of("100.00")
        assert b.postage_cost == Money.of("10.00")
        assert b.discount_amount == Money.of("20.00")
        assert b.tax_cost == Money.of("9.00")
        assert b.total_cost == Money.of("99.00")

    def test_customisation_prices_are_not_in_subtotal(self, cart):
        cart.add("Product", "1", 2, [CustomisationLine("engraving", "AB", Decimal("5"))])
        assert cart.sub_total() == Money.of("20.00")

    def test_weight_and_count(self, cart):
        cart.add("Product", "1", 2)
        cart.add("Product", "2", 1)
        cart.add("Product", "3", 4)
        assert cart.total_weight() == Decimal("2.2")
        assert cart.total_items() == 7

    def test_reads_reflect_latest_state(self, cart):
        cart.add("Product", "1")
        assert cart.sub_total() == Money.of("10.00")
        cart.update("1", 3)
        assert cart.sub_total() == Money.of("30.00")
        cart.remove("1")
        assert cart.sub_total().is_zero()

    def test_postage_resolves_at_read_time(self, cart, postage):
        cart.add("Product", "1")
        cart.search_postage("GB", "SW1A 1AA")
        cart.select_postage("std")
        assert cart.postage_cost() == Success(Money.of("10.00"))

        postage.areas = [a for a in postage.areas if a.id != "std"]
        assert cart.postage_cost() == Success(Money.zero())

    def test_postage_outage_surfaces_on_reads(self, cart, postage):
        cart.search_postage("GB", "SW1A 1AA")
        cart.select_postage("std")
        postage.unavailable = True

        assert isinstance(cart.postage_cost().failure(), ResolverUnavailable)
        assert isinstance(cart.total_cost().failure(), ResolverUnavailable)
        # stages that need no resolver still answer
        assert cart.sub_total().is_zero()

    def test_reads_do_not_write(self, cart, store):
        cart.add("Product", "1")
        saves = store.saves
        for _ in range(3):
            cart.breakdown()
            cart.tax_cost()
            cart.total_weight()
        assert store.saves == saves
