"""
FinLink Dashboard — FastAPI Application Entry Point
"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from finlink.core.config import settings
from finlink.core.database import Store
from finlink.core.logging_config import configure_logging
from finlink.services.risk_engine import RiskAssessmentClient
from finlink.api.routes import stats, graph, analyze, seed, records

log = structlog.get_logger()

APP_VERSION = "1.0.0"
STATIC_DIR = Path(__file__).resolve().parent / "static"


def create_app(
    database_url: Optional[str] = None,
    assessment_client: Optional[RiskAssessmentClient] = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the store and the model client; close the store on shutdown."""
        configure_logging(settings.LOG_LEVEL)
        log.info("Starting FinLink dashboard", env=settings.ENVIRONMENT)

        store = Store(database_url or settings.DATABASE_URL)
        await store.init_schema()
        app.state.store = store

        client = assessment_client or RiskAssessmentClient()
        if not client.configured:
            log.warning("GEMINI_API_KEY not set — analysis will return the fallback result")
        app.state.assessment_client = client

        log.info("API ready", docs="http://localhost:8000/docs")
        yield

        await store.dispose()
        log.info("Shutdown complete")

    app = FastAPI(
        title="FinLink Dashboard API",
        description="Accounts, transactions and calls as a relationship graph, with AI risk review",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ─── Middleware ──────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ─── Routers ─────────────────────────────────────────────────────────────
    app.include_router(stats.router,   prefix="/api", tags=["Stats"])
    app.include_router(graph.router,   prefix="/api", tags=["Graph"])
    app.include_router(analyze.router, prefix="/api", tags=["Analysis"])
    app.include_router(seed.router,    prefix="/api", tags=["Seed"])
    app.include_router(records.router, prefix="/api", tags=["Records"])

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "ok", "version": APP_VERSION}

    # ─── Dashboard ───────────────────────────────────────────────────────────
    @app.get("/", include_in_schema=False)
    async def index():
        return FileResponse(str(STATIC_DIR / "index.html"))

    return app


app = create_app()
