import tomllib
from contextlib import asynccontextmanager
from http import HTTPStatus
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sop_assistant.ai.chat.router import router as chat_router
from sop_assistant.config import ConfigurationError, get_client_base_url
from sop_assistant.integrations.slite.dependencies import close_slite_client
from sop_assistant.integrations.slite.router import router as slite_router
from sop_assistant.utils.logger import logger


def get_version():
    """Get version from pyproject.toml"""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)
    return data["project"]["version"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_slite_client()


app = FastAPI(
    title="SOP Assistant API",
    description="Retrieval-augmented chat over the team's SOPs",
    version=get_version(),
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_client_base_url()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat_router, prefix="/api")
app.include_router(slite_router, prefix="/api")


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("Server is missing configuration", error=exc.message, path=request.url.path)
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR, content={"error": exc.message}
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST, content={"error": f"Invalid request: {details}"}
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {"status": "ok", "message": "SOP Assistant API is running"}


@app.get("/healthcheck")
async def healthcheck():
    """Health check endpoint."""
    return {"status": "ok", "message": "SOP Assistant API is running"}
