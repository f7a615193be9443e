from __future__ import annotations

from checkout_cart.bootstrap import build_app

app = build_app()
