"""FastAPI application entrypoint."""

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.adapters.inbound.http.routes import router
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import logger

# Load environment variables from .env file
load_dotenv()

app = FastAPI(
    title="Tax Lead Intake",
    description="Tax intake form backend with preparer routing and lead notifications",
    version="0.1.0",
)

app.include_router(router)

# Uploaded documents are linked from notifications
app.mount(
    "/uploads",
    StaticFiles(directory=settings.uploads_dir, check_dir=False),
    name="uploads",
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a generic 500 body; details only go to the log."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )
