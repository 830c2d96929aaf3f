import logging
import os
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from mediafetch.api import download, health, info
from mediafetch.config.settings import config, configure_logging
from mediafetch.core.errors import MediaToolError
from mediafetch.core.state import state
from mediafetch.services.ytdlp import MediaTool

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    state.ytdlp_version = await MediaTool.probe_version()
    logger.info(f"Using {config.ytdlp.binary} {state.ytdlp_version}")
    yield


app = FastAPI(
    title=config.api.title,
    version=config.api.version,
    docs_url="/docs" if config.api.debug else None,
    redoc_url=None,
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def assign_request_id(request: Request, call_next):
    request.state.request_id = uuid.uuid4().hex[:8]
    response = await call_next(request)
    response.headers["X-Request-ID"] = request.state.request_id
    return response


def describe_validation_errors(exc: RequestValidationError) -> str:
    """Plain-text summary of body validation errors"""
    messages = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            reason = error.get("ctx", {}).get("error")
            messages.append(f"{error['msg']}: {reason}" if reason else error["msg"])
            continue

        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(messages) or "Invalid request body"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return PlainTextResponse(describe_validation_errors(exc), status_code=400)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(MediaToolError)
async def media_tool_exception_handler(request: Request, exc: MediaToolError):
    return PlainTextResponse(exc.message, status_code=exc.status_code)


# Routes
app.include_router(health.router, tags=["Health"])
app.include_router(info.router, tags=["Info"])
app.include_router(download.router, tags=["Download"])

app.mount("/static", StaticFiles(directory=config.server.static_dir, check_dir=False), name="static")


@app.get("/", include_in_schema=False)
async def index():
    index_path = os.path.join(config.server.static_dir, "index.html")
    if not os.path.isfile(index_path):
        return PlainTextResponse("Not Found", status_code=404)
    return FileResponse(index_path)


def run() -> None:
    configure_logging()
    uvicorn.run(app, host=config.server.host, port=config.server.port, log_config=None)


if __name__ == "__main__":
    run()
