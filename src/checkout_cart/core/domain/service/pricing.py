"""Pure cost derivation for a cart snapshot.

Stages, in dependency order::

    weight, item count, subtotal -> discount -> postage -> tax -> total

Each function recomputes from its inputs; nothing here caches or mutates.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from checkout_cart.core.domain.model.cart import Discount, DiscountType, LineItem
from checkout_cart.core.domain.model.money import DEFAULT_CURRENCY, Money, fold_money


@dataclass(frozen=True)
class PriceBreakdown:
    total_weight: Decimal
    total_items: int
    sub_total: Money
    discount_amount: Money
    postage_cost: Money
    tax_cost: Money
    total_cost: Money


def total_weight(items: Iterable[LineItem]) -> Decimal:
    total = Decimal("0")
    for item in items:
        weight = item.object.weight
        if weight:
            total += Decimal(str(weight)) * item.quantity
    return total


def total_items(items: Iterable[LineItem]) -> int:
    return sum(item.quantity for item in items)


def sub_total(items: Iterable[LineItem], currency: str = DEFAULT_CURRENCY) -> Money:
    # customisation price modifiers are deliberately left out of the subtotal
    return fold_money(
        (
            item.object.price * item.quantity
            for item in items
            if item.object.price is not None
        ),
        currency=currency,
    )


def discount_amount(discount: Discount | None, subtotal: Money) -> Money:
    if discount is None or subtotal.is_zero():
        return Money.zero(subtotal.currency)

    if discount.type is DiscountType.FIXED:
        return min(Money.of(discount.amount, subtotal.currency), subtotal)

    if discount.type is DiscountType.PERCENTAGE and discount.amount:
        return subtotal.percent(discount.amount)

    return Money.zero(subtotal.currency)


def tax_cost(
    subtotal: Money, postage: Money, discount: Money, tax_rate: Decimal
) -> Money:
    if tax_rate <= 0:
        return Money.zero(subtotal.currency)

    base = (subtotal + postage) - discount
    if not base.is_positive():
        return Money.zero(subtotal.currency)
    return base.percent(tax_rate)


def total_cost(subtotal: Money, discount: Money, postage: Money, tax: Money) -> Money:
    return (subtotal - discount) + postage + tax


def price_breakdown(
    items: tuple[LineItem, ...],
    discount: Discount | None,
    postage: Money,
    tax_rate: Decimal,
) -> PriceBreakdown:
    sub = sub_total(items, currency=postage.currency)
    disc = discount_amount(discount, sub)
    tax = tax_cost(sub, postage, disc, tax_rate)
    return PriceBreakdown(
        total_weight=total_weight(items),
        total_items=total_items(items),
        sub_total=sub,
        discount_amount=disc,
        postage_cost=postage,
        tax_cost=tax,
        total_cost=total_cost(sub, disc, postage, tax),
    )
