"""HTTP layer: FastAPI application factory for the patisserie domain."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from protean.domain import Domain
from protean.integrations.fastapi import DomainContextMiddleware


def create_app(domain: Domain, allowed_origins: list[str] | None = None) -> FastAPI:
    """Build the API app for an initialized ``domain``.

    Every request runs inside the domain context, so routes can use
    ``current_domain`` directly.
    """
    from patisserie.api.errors import register_exception_handlers
    from patisserie.api.middleware import RequestContextMiddleware
    from patisserie.api.routes import ROUTERS

    app = FastAPI(
        title="La Patisserie API",
        description="Catalogue, cart, checkout and order tracking for La Patisserie",
    )

    # Starlette runs the last added middleware first
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(DomainContextMiddleware, route_domain_map={"/": domain})
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "domain": domain.name}

    return app


__all__ = ["create_app"]
