import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Import models so they're registered with SQLAlchemy Base
from . import models  # noqa: F401
from .config import ALLOWED_ORIGINS
from .database import Base, SessionLocal, engine
from .domain.accounts import auth_router
from .domain.accounts import router as accounts_router
from .domain.clients import router as clients_router
from .domain.notifications import router as notifications_router
from .domain.settings import router as settings_router
from .domain.wishlists import router as wishlists_router
from .exceptions import WishlistError
from .seeder import seed_database

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("passlib").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            raise

    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Wishlist API", version="1.0.0", lifespan=lifespan)


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may carry the raised ValueError itself
    return jsonable_encoder(
        [{k: v for k, v in error.items() if k != "ctx"} for error in exc.errors()]
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Convert 422 validation errors from HTTPBearer to 401 authentication errors
    when the issue is with the Authorization header
    """
    for error in exc.errors():
        if error.get("loc") and "authorization" in str(error.get("loc")).lower():
            logger.warning(
                f"Authentication failed for {request.url.path}: Missing or invalid Authorization header"
            )
            return JSONResponse(
                status_code=401,
                content={
                    "detail": "Not authenticated. Please provide a valid Bearer token in the Authorization header."
                },
            )

    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})


@app.exception_handler(WishlistError)
async def wishlist_error_handler(request: Request, exc: WishlistError):
    """Report ordering failures with their own status code"""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"{request.method} {request.url.path} - {type(exc).__name__}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": type(exc).__name__},
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise
    elapsed_ms = (time.time() - start_time) * 1000
    logger.debug(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
    return response


logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Routes
app.include_router(auth_router)
app.include_router(accounts_router)
app.include_router(clients_router)
app.include_router(notifications_router)
# Before wishlists so /api/wishlist/settings is not read as a wishlist id
app.include_router(settings_router)
app.include_router(wishlists_router)


@app.get("/")
def root():
    return {"message": "Wishlist API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}


@app.get("/health/redis")
def redis_health_check():
    """Check Redis connectivity for the sort locks"""
    from .locks import get_redis_client

    redis_client = get_redis_client()
    if redis_client is None:
        return {"status": "degraded", "redis": {"connected": False, "locks": "process-local"}}

    try:
        start_time = time.time()
        redis_client.ping()
        response_time = (time.time() - start_time) * 1000
        info = redis_client.info()
        return {
            "status": "healthy",
            "redis": {
                "connected": True,
                "response_time_ms": round(response_time, 2),
                "version": info.get("redis_version", "unknown"),
            },
        }
    except Exception as e:
        return {"status": "unhealthy", "redis": {"connected": False, "error": str(e)}}
