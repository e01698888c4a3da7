import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from freshness_checker.config import get_settings
from freshness_checker.routers import checks, recalls, reminders
from freshness_checker.services.errors import AINotConfiguredError, AIResponseError
from freshness_checker.utils.http import create_http_client

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.http_client = create_http_client()
    try:
        yield
    finally:
        await app.state.http_client.aclose()


app = FastAPI(
    title="Freshness Checker AI API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


def allowed_origins(frontend_url: str) -> list[str]:
    """Local dev origin plus each entry of a comma-separated FRONTEND_URL."""
    origins = ["http://localhost:3000"]
    for origin in frontend_url.split(","):
        origin = origin.strip()
        if origin and origin not in origins:
            origins.append(origin)
    return origins


app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(settings.FRONTEND_URL),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(checks.router, prefix="/api/v1/checks", tags=["Checks"])
app.include_router(recalls.router, prefix="/api/v1/recalls", tags=["Recalls"])
app.include_router(reminders.router, prefix="/api/v1/reminders", tags=["Reminders"])


@app.exception_handler(AIResponseError)
async def ai_response_error(request: Request, exc: AIResponseError):
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(AINotConfiguredError)
async def ai_not_configured(request: Request, exc: AINotConfiguredError):
    logger.error(f"{request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.get("/health")
def health():
    return {"status": "ok"}
