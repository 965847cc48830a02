# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Description: main.py
# -----------------------------------------------------------------------------
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.AppContainer import app_container
from api.routers import health, matching

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    app_container.start()
    try:
        yield
    finally:
        app_container.shutdown()


app = FastAPI(title="SNHub Matching API", lifespan=lifespan)
app.include_router(health.router)
app.include_router(matching.router)


@app.exception_handler(RequestValidationError)
async def query_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed query parameters on the matching routes are bad requests (400)."""
    errors = exc.errors()
    if request.url.path.startswith(matching.router.prefix) and all(
        err.get("loc", ("",))[0] == "query" for err in errors
    ):
        detail = "; ".join(
            f"{err['loc'][-1]}: {err.get('msg', 'invalid value')}" for err in errors
        )
        logger.warning("%s %s -> 400 (%s)", request.method, request.url.path, detail)
        return JSONResponse(status_code=400, content={"detail": detail})
    return await request_validation_exception_handler(request, exc)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=os.getenv("MATCHING_API_HOST", "127.0.0.1"),
        port=int(os.getenv("MATCHING_API_PORT", "8000")),
        log_level="info",
        reload=False,
    )
