# order_service/main.py
from contextlib import asynccontextmanager

import requests
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from order_service.api.routers import health, orders
from order_service.data.database import Base, build_engine, build_session_factory
from order_service.data import models  # noqa: F401  rejestracja modeli w Base.metadata
from order_service.services.alert_service import AlertService
from order_service.services.product_client import ProductClient
from order_service.services.user_client import UserClient
from order_service.utils.logging import get_logger
from order_service.utils.retry import db_retry
from order_service.utils.settings import (
    DATABASE_URL,
    HTTP_TIMEOUT_SECONDS,
    PORT,
    PRODUCT_SERVICE_URL,
    USER_SERVICE_URL,
)

logger = get_logger(__name__)


@db_retry()
def init_db(engine) -> None:
    logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)


def create_app(
    database_url: str | None = None,
    user_client: UserClient | None = None,
    product_client: ProductClient | None = None,
    alerts: AlertService | None = None,
) -> FastAPI:
    """
    Composition root: baza, sesja HTTP i klienci powstają przy starcie
    aplikacji i są zamykani przy jej zatrzymaniu.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = build_engine(database_url or DATABASE_URL)
        init_db(engine)

        http = requests.Session()
        app.state.session_factory = build_session_factory(engine)
        app.state.user_client = user_client or UserClient(USER_SERVICE_URL, http, HTTP_TIMEOUT_SECONDS)
        app.state.product_client = product_client or ProductClient(PRODUCT_SERVICE_URL, http, HTTP_TIMEOUT_SECONDS)
        app.state.alerts = alerts or AlertService()

        logger.info(f"Order Service using User Service at {USER_SERVICE_URL}")
        logger.info(f"Order Service using Product Service at {PRODUCT_SERVICE_URL}")
        try:
            yield
        finally:
            http.close()
            engine.dispose()

    app = FastAPI(
        title="Order Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        # błędny body to InvalidInput (400), nie 422
        return JSONResponse(status_code=400, content={"detail": "Invalid request body", "errors": jsonable_errors(exc)})

    app.include_router(health.router)
    app.include_router(orders.router)

    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()]


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
