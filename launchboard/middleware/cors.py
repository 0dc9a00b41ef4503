from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from launchboard.core.config import settings
from loguru import logger


def setup_cors_middleware(app: FastAPI) -> None:
    """
    Allow the board SPA origins to call the API with bearer tokens
    """
    allowed_origins = list(settings.cors_origins_list)
    if settings.ENVIRONMENT == "development":
        # Vite preview port
        allowed_origins += ["http://localhost:4173", "http://127.0.0.1:4173"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Accept",
            "Content-Type",
            "Authorization",
            "X-Request-ID",
            "X-Trace-ID"
        ],
        expose_headers=["X-Request-ID", "X-Trace-ID"],
        max_age=600,
    )

    logger.info(f"CORS configured for {len(allowed_origins)} origins")
