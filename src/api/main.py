from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog
import time

from src.api.routers.tokens import router as tokens_router
from src.config import settings
from src.services.registry_store import JsonFileTokenStore
from src.utils.exceptions import StorageUnavailable, TokenRegistryErrorCodes
from src.utils.logging import setup_logging

setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        JsonFileTokenStore(settings.DATA_FILE).initialize()
    except StorageUnavailable as e:
        # Requests will answer 500 until the medium becomes available.
        logger.error("Token store unavailable at startup", error=e.message)
    yield


app = FastAPI(
    title="Token Registry",
    description="Token registry API",
    version=settings.SERVICE_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tokens_router, tags=["Tokens"])


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request, exc):
    logger.warning("Malformed request", path=request.url.path, method=request.method, error=str(exc))
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request data", "code": TokenRegistryErrorCodes.INVALID_PAYLOAD},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.middleware("http")
async def log_requests(request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    logger.info(
        "Request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        process_time=round(process_time, 3),
    )
    return response


@app.get("/")
async def root():
    return {"message": "Token Registry API", "version": settings.SERVICE_VERSION}


@app.get("/health")
async def health():
    return {"status": "healthy", "message": "Token Registry API is running", "data_file": settings.DATA_FILE}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
