from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Sequence

import structlog
from returns.result import Failure, Result, Success

from checkout_cart.core.domain.model.cart import (
    CartState,
    Customisation,
    Discount,
    LineItem,
    Priceable,
    compute_key,
    display_title,
    postage_status,
)
from checkout_cart.core.domain.model.errors import (
    CartError,
    InvalidInput,
    InvalidQuantity,
    ItemNotFound,
    ObjectNotFound,
)
from checkout_cart.core.domain.model.money import DEFAULT_CURRENCY, Money
from checkout_cart.core.domain.model.postage import (
    PostageOption,
    PostageSearch,
    PostageStatus,
)
from checkout_cart.core.domain.service import pricing
from checkout_cart.core.domain.service.pricing import PriceBreakdown
from checkout_cart.core.ports.inbound.cart import (
    CartView,
    CustomisationLine,
    LineItemView,
    ShoppingCartUseCase,
)
from checkout_cart.core.ports.outbound.cart_store import CartStore
from checkout_cart.core.ports.outbound.catalog import Catalog
from checkout_cart.core.ports.outbound.discounts import DiscountResolver
from checkout_cart.core.ports.outbound.events import (
    CartCleared,
    CartEmptied,
    CartEvent,
    CartEventPublisher,
    DiscountApplied,
    ItemAdded,
    ItemRemoved,
    ItemUpdated,
    PostageConfirmed,
    PostageSearched,
)
from checkout_cart.core.ports.outbound.postage import PostageResolver
from checkout_cart.core.ports.outbound.tax import TaxConfig

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CartDeps:
    store: CartStore
    catalog: Catalog
    discounts: DiscountResolver
    postage: PostageResolver
    tax: TaxConfig
    events: Sequence[CartEventPublisher] = ()
    currency: str = DEFAULT_CURRENCY


class ShoppingCart(ShoppingCartUseCase):
    """
    One shopper's cart.

    The cart keeps the last persisted CartState in memory. Mutators build a
    new state, hand it to the store and only adopt it once the save has
    succeeded, so a failed save never leaves a half-applied change behind.
    Totals are recomputed from that state on every call.
    """

    def __init__(self, deps: CartDeps, state: CartState | None = None) -> None:
        self.deps = deps
        self._state = state if state is not None else CartState.empty()

    @classmethod
    def open(cls, deps: CartDeps) -> Result["ShoppingCart", CartError]:
        return deps.store.load().map(lambda state: cls(deps, state))

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def items(self) -> tuple[LineItem, ...]:
        return self._state.items

    @property
    def discount(self) -> Discount | None:
        return self._state.discount

    @property
    def postage_status(self) -> PostageStatus:
        return postage_status(self._state)

    # ---- mutators ----------------------------------------------------------

    def add(
        self,
        object_type: str,
        object_id: str,
        quantity: int = 1,
        customisations: Sequence[CustomisationLine] = (),
    ) -> Result[LineItem, CartError]:
        if quantity <= 0:
            return Failure(
                InvalidQuantity(message="quantity must be > 0", quantity=quantity)
            )

        found = self.deps.catalog.find(object_type, object_id)
        if isinstance(found, Failure):
            logger.warning(
                "catalog_lookup_failed",
                object_type=object_type,
                object_id=object_id,
                error=str(found.failure()),
            )
            return found

        obj = found.unwrap()
        if obj is None:
            return Failure(
                ObjectNotFound(
                    message="object not found",
                    object_type=object_type,
                    object_id=str(object_id),
                )
            )

        return self._add_resolved(obj, quantity, customisations)

    def update(self, key: str, quantity: int) -> Result[LineItem, CartError]:
        if quantity <= 0:
            return Failure(
                InvalidQuantity(
                    message="quantity must be > 0; use remove() to drop an item",
                    quantity=quantity,
                )
            )

        current = self._state.find(key)
        if current is None:
            logger.debug("cart_item_missing", key=key)
            return Failure(ItemNotFound(message="no item with that key", key=key))

        updated = current.with_quantity(quantity)
        items = tuple(updated if it.key == key else it for it in self._state.items)
        return self._commit(
            replace(self._state, items=items),
            ItemUpdated(item=updated, previous_quantity=current.quantity),
        ).map(lambda _: updated)

    def remove(self, key: str) -> Result[bool, CartError]:
        current = self._state.find(key)
        if current is None:
            return Success(False)

        items = tuple(it for it in self._state.items if it.key != key)
        return self._commit(
            replace(self._state, items=items), ItemRemoved(item=current)
        ).map(lambda _: True)

    def remove_all(self) -> Result[None, CartError]:
        """Empty the cart but keep its discount and postage choice."""
        removed = len(self._state.items)
        return self._commit(
            replace(self._state, items=()), CartEmptied(removed=removed)
        ).map(lambda _: None)

    def clear(self) -> Result[None, CartError]:
        """Full reset: items, discount and postage all go."""
        return self._commit(CartState.empty(), CartCleared()).map(lambda _: None)

    def set_discount(self, discount: Discount) -> Result[Discount, CartError]:
        return self._commit(
            replace(self._state, discount=discount), DiscountApplied(discount=discount)
        ).map(lambda _: discount)

    def use_discount_code(
        self, code: str, today: date
    ) -> Result[Discount | None, CartError]:
        code = code.strip()
        if not code:
            return Failure(InvalidInput(message="discount code is required"))

        current = self._state.discount
        if current is not None and current.code == code:
            return Success(current)

        found = self.deps.discounts.find(code, today)
        if isinstance(found, Failure):
            logger.warning("discount_lookup_failed", code=code, error=str(found.failure()))
            return found

        discount = found.unwrap()
        if discount is None:
            logger.debug("discount_code_unknown", code=code)
            return Success(None)

        return self.set_discount(discount)

    def search_postage(
        self, country: str, postal_code: str
    ) -> Result[tuple[PostageOption, ...], CartError]:
        country, postal_code = country.strip(), postal_code.strip()
        if not country or not postal_code:
            return Failure(
                InvalidInput(message="country and postal code are both required")
            )

        found = self.deps.postage.search(country, postal_code)
        if isinstance(found, Failure):
            logger.warning(
                "postage_search_failed",
                country=country,
                postal_code=postal_code,
                error=str(found.failure()),
            )
            return found

        options = tuple(found.unwrap())
        search = PostageSearch(country=country, postal_code=postal_code, options=options)
        return self._commit(
            replace(self._state, postage_search=search, postage_id=None),
            PostageSearched(country=country, postal_code=postal_code, options=len(options)),
        ).map(lambda _: options)

    def select_postage(self, postage_id: str) -> Result[PostageOption | None, CartError]:
        search = self._state.postage_search
        option = search.find(postage_id) if search is not None else None
        if option is None:
            logger.debug("postage_option_unknown", postage_id=postage_id)
            return Success(None)

        return self._commit(
            replace(self._state, postage_id=option.id), PostageConfirmed(option=option)
        ).map(lambda _: option)

    # ---- pricing -----------------------------------------------------------

    def total_weight(self) -> Decimal:
        return pricing.total_weight(self._state.items)

    def total_items(self) -> int:
        return pricing.total_items(self._state.items)

    def sub_total(self) -> Money:
        return pricing.sub_total(self._state.items, currency=self.deps.currency)

    def discount_amount(self) -> Money:
        return pricing.discount_amount(self._state.discount, self.sub_total())

    def postage_cost(self) -> Result[Money, CartError]:
        zero = Money.zero(self.deps.currency)
        postage_id = self._state.postage_id
        if postage_id is None:
            return Success(zero)

        found = self.deps.postage.get(postage_id)
        if isinstance(found, Failure):
            logger.warning(
                "postage_lookup_failed", postage_id=postage_id, error=str(found.failure())
            )
            return found

        option = found.unwrap()
        return Success(option.cost if option is not None else zero)

    def tax_cost(self) -> Result[Money, CartError]:
        subtotal = self.sub_total()
        discount = self.discount_amount()
        rate = self.deps.tax.tax_rate()
        return self.postage_cost().map(
            lambda postage: pricing.tax_cost(subtotal, postage, discount, rate)
        )

    def total_cost(self) -> Result[Money, CartError]:
        return self.breakdown().map(lambda b: b.total_cost)

    def breakdown(self) -> Result[PriceBreakdown, CartError]:
        state = self._state
        rate = self.deps.tax.tax_rate()
        return self.postage_cost().map(
            lambda postage: pricing.price_breakdown(
                state.items, state.discount, postage, rate
            )
        )

    # ---- internals ---------------------------------------------------------

    def _add_resolved(
        self, obj: Priceable, quantity: int, lines: Sequence[CustomisationLine]
    ) -> Result[LineItem, CartError]:
        selected = tuple(
            Customisation(
                title=ln.title,
                value=ln.value,
                modify_price=Money.of(ln.modify_price, self.deps.currency),
            )
            for ln in lines
        )
        key = compute_key(obj.id, selected)

        existing = self._state.find(key)
        if existing is not None:
            return self.update(key, existing.quantity + quantity)

        item = LineItem(
            key=key,
            object=obj,
            quantity=quantity,
            customisations=tuple(
                replace(c, title=display_title(c.title)) for c in selected
            ),
        )
        return self._commit(
            replace(self._state, items=self._state.items + (item,)), ItemAdded(item=item)
        ).map(lambda _: item)

    def _commit(
        self, new_state: CartState, event: CartEvent
    ) -> Result[CartState, CartError]:
        if new_state == self._state:
            return Success(self._state)

        saved = self.deps.store.save(new_state)
        if isinstance(saved, Failure):
            logger.warning(
                "cart_save_failed",
                event_type=type(event).__name__,
                error=str(saved.failure()),
            )
            return saved

        self._state = new_state
        logger.debug(
            "cart_saved", event_type=type(event).__name__, items=len(new_state.items)
        )
        self._publish(event)
        return Success(new_state)

    def _publish(self, event: CartEvent) -> None:
        for publisher in self.deps.events:
            result = publisher.publish(event)
            if isinstance(result, Failure):
                logger.warning(
                    "cart_event_publish_failed",
                    event_type=type(event).__name__,
                    error=str(result.failure()),
                )


# ---- read model ------------------------------------------------------------


def to_cart_view(cart: ShoppingCartUseCase) -> Result[CartView, CartError]:
    state = cart.state
    search = state.postage_search
    return cart.breakdown().map(
        lambda totals: CartView(
            items=tuple(_to_line_view(it) for it in state.items),
            discount_code=state.discount.code if state.discount is not None else None,
            postage_status=postage_status(state),
            postage_id=state.postage_id,
            postage_options=search.options if search is not None else (),
            totals=totals,
        )
    )


def _to_line_view(item: LineItem) -> LineItemView:
    return LineItemView(
        key=item.key,
        object_id=str(item.object.id),
        title=item.object.title,
        unit_price=item.object.price,
        quantity=item.quantity,
        customisations=tuple(
            (c.title, c.value, c.modify_price) for c in item.customisations
        ),
    )
