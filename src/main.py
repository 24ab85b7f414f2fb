"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api import auth, users
from src.config import get_settings
from src.database import Database

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the connection pool on startup and release it on shutdown."""
    database = Database.from_settings(settings)
    if settings.db_create_tables:
        try:
            await database.create_all()
        except Exception:
            await database.dispose()
            raise
    app.state.database = database
    logger.info(f"Connection pool ready for {database.url.render_as_string()}")
    yield
    await database.dispose()
    logger.info("Connection pool closed")


app = FastAPI(
    title="Usuarios API",
    description="User records with password hashing and bearer-token sessions",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Report malformed input as a plain 400."""
    fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
    logger.info(f"{request.method} {request.url.path} invalid request: {fields}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": "invalid request"})


# Register routers
app.include_router(auth.router)
app.include_router(users.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
