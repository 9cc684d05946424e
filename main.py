"""Main application module."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import models
from config import LOG_FILE, LOG_LEVEL
from database import engine
from errors import BlogError
from logging_config import setup_logging
from post_routes import router as post_router
from user_routes import router as user_router

setup_logging(LOG_LEVEL, LOG_FILE)
logger = logging.getLogger("blog_api")

app = FastAPI(title="Blog Platform API", version="1.0.0")
models.Base.metadata.create_all(bind=engine)

app.include_router(user_router)
app.include_router(post_router)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return "Invalid request - " + "; ".join(parts)


@app.exception_handler(BlogError)
async def blog_error_handler(request: Request, exc: BlogError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": _describe_validation_errors(exc)})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error"},
    )


@app.get("/")
async def read_index():
    return {"message": "Blog Platform API"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
