"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from psx_portfolio.api.routers import portfolio_router, reports_router, transactions_router
from psx_portfolio.config.logging_config import setup_logging
from psx_portfolio.config.settings import get_settings
from psx_portfolio.core.exceptions import AppError
from psx_portfolio.repositories.sqlalchemy.database import init_db

ERROR_STATUS = {
    "VALIDATION_ERROR": 400,
    "NOT_FOUND": 404,
    "INSUFFICIENT_QUANTITY": 409,
    "CONSISTENCY_ERROR": 409,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()
    init_db()
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Pakistan Stock Exchange portfolio ledger with realized P/L tracking",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(transactions_router)
app.include_router(portfolio_router)
app.include_router(reports_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.code, 400),
        content={"error": exc.code, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests in the same shape as service validation errors."""
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={"error": "VALIDATION_ERROR", "message": f"{field}: {message}" if field else message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
