import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .core.errors import ExpenseTrackerError
from .database import init_db
from .routers import budgets as budgets_router
from .routers import categories as categories_router
from .routers import expenses as expenses_router
from .routers import summaries as summaries_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Expense Tracker – Backend", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def on_startup():
        if settings.storage_backend == "sql":
            init_db()
        logger.info("Expense tracker started with %s storage", settings.storage_backend)

    @app.exception_handler(ExpenseTrackerError)
    async def business_error(request: Request, exc: ExpenseTrackerError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "code": exc.code},
        )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(categories_router.router)
    app.include_router(expenses_router.router)
    app.include_router(budgets_router.router)
    app.include_router(summaries_router.router)

    return app


app = create_app()
