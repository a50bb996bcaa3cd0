# bookkeeping/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookkeeping.api.v1 import auth, bank_accounts, categories, health, transactions, users
from bookkeeping.core.config import settings
from bookkeeping.db.session import Database
from bookkeeping.services.errors import ServiceError

logger = logging.getLogger(__name__)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed - %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app(database: Optional[Database] = None, delete_policy: Optional[str] = None) -> FastAPI:
    """
    Build the API. The database is created here (or passed in by tests),
    connected when the app starts and disposed when it stops.
    """
    settings.validate()
    logging.basicConfig(level=settings.LOG_LEVEL)
    database = database or Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.connect()
        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(title="Bookkeeping API", version="0.1.0", lifespan=lifespan)
    app.state.database = database
    app.state.delete_policy = delete_policy or settings.DELETE_POLICY

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ServiceError, service_error_handler)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
    app.include_router(users.router, prefix="/api/v1/users", tags=["users"])
    app.include_router(categories.router, prefix="/api/v1/categories", tags=["categories"])
    app.include_router(bank_accounts.router, prefix="/api/v1/bank-accounts", tags=["bank-accounts"])
    app.include_router(transactions.router, prefix="/api/v1/transactions", tags=["transactions"])

    @app.get("/")
    def root():
        return {"message": "Bookkeeping API - visit /api/v1/health"}

    return app


app = create_app()
