import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from user_registry.config import settings
from user_registry.logging_config import setup_logging
from user_registry.middleware import TimingMiddleware
from user_registry.routers import users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting user registry (env=%s)", settings.APP_ENV)
    yield
    logger.info("Shutting down user registry")


app = FastAPI(
    title="User Registry API",
    description="CRUD API for users with unique CPF and email",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(users.router)


@app.exception_handler(SQLAlchemyError)
async def storage_fault_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Storage fault on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"msg": "Internal server error"})


@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}
