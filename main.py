from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from datetime import datetime
from domain.dates import format_date, format_time
from domain.errors import StorageError, TaskError
from interfaces.api import router as task_router
import os
import logging
import time
import uvicorn

# --- Basic Setup ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Task Manager API", version="1.0.0")
app.include_router(task_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    now = datetime.now()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"[{format_date(now)} {format_time(now)}]: {request.method} {request.url.path}"
        f" -> {response.status_code} ({elapsed_ms:.1f} ms)"
    )
    return response


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "code": status_code})


@app.exception_handler(TaskError)
async def handle_task_error(request: Request, exc: TaskError):
    if isinstance(exc, StorageError):
        logger.error(f"Storage failure on {request.method} {request.url.path}: {exc.message}")
        return error_response("Internal server error", exc.status_code)
    return error_response(exc.message, exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    # unknown paths and unsupported methods on known paths are both "no such route"
    if exc.status_code in (404, 405):
        return error_response("Route not found", 404)
    return error_response(str(exc.detail), exc.status_code)


def first_error_message(exc: RequestValidationError) -> str:
    """Message of the first failing field, in the request model's field order."""
    for error in exc.errors():
        loc = error.get("loc", ())
        if error.get("type") == "json_invalid" or len(loc) < 2:
            return "Request body must be a JSON object"
        ctx = error.get("ctx") or {}
        if "error" in ctx:
            return str(ctx["error"])
        return f"{loc[-1]}: {error.get('msg')}"
    return "Invalid request"


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    logger.debug(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return error_response(first_error_message(exc), 400)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response("Internal server error", 500)


@app.get("/health")
async def health():
    return {"status": "healthy"}


def run():
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
