from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Callable, TypeVar

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from returns.result import Result, Success

from checkout_cart.core.domain.model.errors import (
    CartError,
    InvalidInput,
    NotFound,
    PersistenceError,
    ResolverUnavailable,
)
from checkout_cart.core.domain.model.money import Money
from checkout_cart.core.domain.service.cart_service import to_cart_view
from checkout_cart.core.ports.inbound.cart import (
    CartView,
    CustomisationLine,
    ShoppingCartUseCase,
)

T = TypeVar("T")

OpenCart = Callable[[str], Result[ShoppingCartUseCase, CartError]]

# ---- HTTP DTOs (adapter layer) ---------------------------------------------


class CustomisationIn(BaseModel):
    title: str = Field(min_length=1, examples=["colour"])
    value: str = Field(examples=["Red"])
    modify_price: Decimal = Field(default=Decimal("0"), examples=["2.50"])


class AddItemRequest(BaseModel):
    object_type: str = Field(default="Product", min_length=1)
    object_id: str = Field(min_length=1, examples=["42"])
    quantity: int = Field(default=1, gt=0, examples=[2])
    customisations: list[CustomisationIn] = Field(default_factory=list)


class UpdateItemRequest(BaseModel):
    quantity: int = Field(examples=[3])


class DiscountRequest(BaseModel):
    code: str = Field(min_length=1, examples=["SUMMER10"])


class PostageSearchRequest(BaseModel):
    country: str = Field(min_length=2, max_length=2, examples=["GB"])
    postal_code: str = Field(min_length=1, examples=["SW1A 1AA"])


class PostageSelectRequest(BaseModel):
    postage_id: str = Field(min_length=1, examples=["1"])


class CustomisationOut(BaseModel):
    title: str
    value: str
    modify_price: str


class LineItemOut(BaseModel):
    key: str
    object_id: str
    title: str
    unit_price: str | None
    quantity: int
    customisations: list[CustomisationOut]


class PostageOptionOut(BaseModel):
    id: str
    title: str
    cost: str


class TotalsOut(BaseModel):
    total_weight: str
    total_items: int
    sub_total: str
    discount_amount: str
    postage_cost: str
    tax_cost: str
    total_cost: str
    currency: str


class CartResponse(BaseModel):
    items: list[LineItemOut]
    discount_code: str | None
    postage_status: str
    postage_id: str | None
    postage_options: list[PostageOptionOut]
    show_discount_form: bool
    totals: TotalsOut


class ErrorResponse(BaseModel):
    type: str
    message: str
    details: list[dict[str, Any]] | None = None


# ---- mapping helpers -------------------------------------------------------


def _money(m: Money) -> str:
    return str(m.amount)


def _to_response(view: CartView, show_discount_form: bool) -> CartResponse:
    t = view.totals
    return CartResponse(
        items=[
            LineItemOut(
                key=it.key,
                object_id=it.object_id,
                title=it.title,
                unit_price=_money(it.unit_price) if it.unit_price is not None else None,
                quantity=it.quantity,
                customisations=[
                    CustomisationOut(title=title, value=value, modify_price=_money(price))
                    for title, value, price in it.customisations
                ],
            )
            for it in view.items
        ],
        discount_code=view.discount_code,
        postage_status=view.postage_status.value,
        postage_id=view.postage_id,
        postage_options=[
            PostageOptionOut(id=o.id, title=o.title, cost=_money(o.cost))
            for o in view.postage_options
        ],
        show_discount_form=show_discount_form,
        totals=TotalsOut(
            total_weight=str(t.total_weight),
            total_items=t.total_items,
            sub_total=_money(t.sub_total),
            discount_amount=_money(t.discount_amount),
            postage_cost=_money(t.postage_cost),
            tax_cost=_money(t.tax_cost),
            total_cost=_money(t.total_cost),
            currency=t.total_cost.currency,
        ),
    )


def _map_error_to_http(err: CartError) -> tuple[int, ErrorResponse]:
    if isinstance(err, InvalidInput):
        return 400, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, NotFound):
        return 404, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, ResolverUnavailable):
        return 503, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, PersistenceError):
        return 500, ErrorResponse(type=type(err).__name__, message=str(err))

    return 500, ErrorResponse(type=type(err).__name__, message=str(err))


def _unwrap(result: Result[T, CartError]) -> T:
    if isinstance(result, Success):
        return result.unwrap()
    raise result.failure()


def create_app(
    open_cart: OpenCart,
    show_discount_form: bool = False,
    today: Callable[[], date] = date.today,
) -> FastAPI:
    app = FastAPI(title="checkout_cart")

    def render(cart: ShoppingCartUseCase) -> CartResponse:
        return _to_response(_unwrap(to_cart_view(cart)), show_discount_form)

    # --- exception handlers --------------------------------------------------

    @app.exception_handler(CartError)
    async def handle_domain_error(_: Request, exc: CartError) -> JSONResponse:
        status, body = _map_error_to_http(exc)
        return JSONResponse(status_code=status, content=body.model_dump())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = ErrorResponse(
            type="RequestValidationError",
            message="invalid request",
            details=[{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()],
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        body = ErrorResponse(type=type(exc).__name__, message="internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    # --- routes --------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/carts/{session_id}", response_model=CartResponse)
    def view_cart(session_id: str) -> Any:
        return render(_unwrap(open_cart(session_id)))

    @app.post(
        "/carts/{session_id}/items",
        response_model=CartResponse,
        status_code=201,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            503: {"model": ErrorResponse},
        },
    )
    def add_item(session_id: str, req: AddItemRequest) -> Any:
        cart = _unwrap(open_cart(session_id))
        _unwrap(
            cart.add(
                req.object_type,
                req.object_id,
                req.quantity,
                tuple(
                    CustomisationLine(
                        title=c.title, value=c.value, modify_price=c.modify_price
                    )
                    for c in req.customisations
                ),
            )
        )
        return render(cart)

    @app.patch(
        "/carts/{session_id}/items/{key}",
        response_model=CartResponse,
        responses={404: {"model": ErrorResponse}},
    )
    def update_item(session_id: str, key: str, req: UpdateItemRequest) -> Any:
        cart = _unwrap(open_cart(session_id))
        # a quantity of zero or less means "take it out of the cart"
        if req.quantity > 0:
            _unwrap(cart.update(key, req.quantity))
        else:
            _unwrap(cart.remove(key))
        return render(cart)

    @app.delete("/carts/{session_id}/items/{key}", response_model=CartResponse)
    def remove_item(session_id: str, key: str) -> Any:
        cart = _unwrap(open_cart(session_id))
        _unwrap(cart.remove(key))
        return render(cart)

    @app.post("/carts/{session_id}/empty", response_model=CartResponse)
    def empty_cart(session_id: str) -> Any:
        cart = _unwrap(open_cart(session_id))
        _unwrap(cart.remove_all())
        return render(cart)

    @app.delete("/carts/{session_id}", response_model=CartResponse)
    def clear_cart(session_id: str) -> Any:
        cart = _unwrap(open_cart(session_id))
        _unwrap(cart.clear())
        return render(cart)

    @app.post(
        "/carts/{session_id}/discount",
        response_model=CartResponse,
        responses={503: {"model": ErrorResponse}},
    )
    def use_discount(session_id: str, req: DiscountRequest) -> Any:
        cart = _unwrap(open_cart(session_id))
        _unwrap(cart.use_discount_code(req.code, today()))
        return render(cart)

    @app.post(
        "/carts/{session_id}/postage/search",
        response_model=CartResponse,
        responses={503: {"model": ErrorResponse}},
    )
    def search_postage(session_id: str, req: PostageSearchRequest) -> Any:
        cart = _unwrap(open_cart(session_id))
        _unwrap(cart.search_postage(req.country, req.postal_code))
        return render(cart)

    @app.post("/carts/{session_id}/postage/select", response_model=CartResponse)
    def select_postage(session_id: str, req: PostageSelectRequest) -> Any:
        cart = _unwrap(open_cart(session_id))
        _unwrap(cart.select_postage(req.postage_id))
        return render(cart)

    return app
