from __future__ import annotations

import uvicorn

from checkout_cart.settings import CheckoutSettings


def main() -> None:
    settings = CheckoutSettings.from_env()
    uvicorn.run(
        "checkout_cart.bootstrap:create_asgi_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
