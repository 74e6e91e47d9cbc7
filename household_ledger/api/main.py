"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from household_ledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from household_ledger.api.v1 import budgets, categories, dashboard, data, expenses, history, incomes, reports
from household_ledger.infrastructure.database.session import init_db
from household_ledger.infrastructure.observability.logging import setup_logging
from household_ledger.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Household Ledger",
        description="Expense, income and budget tracking with recurring budget windows",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(expenses.router, prefix="/v1", tags=["expenses"])
    app.include_router(incomes.router, prefix="/v1", tags=["incomes"])
    app.include_router(budgets.router, prefix="/v1", tags=["budgets"])
    app.include_router(reports.router, prefix="/v1", tags=["reports"])
    app.include_router(history.router, prefix="/v1", tags=["history"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(categories.router, prefix="/v1", tags=["categories"])
    app.include_router(data.router, prefix="/v1", tags=["data"])

    return app


app = create_app()
