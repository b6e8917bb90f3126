"""
StartupOS API - FastAPI Backend
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import auth, files, investors, migration, webhooks
from config import get_settings
from exceptions import (
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from repositories import close_db_pool
from utils.datetime_utils import utc_now

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s [%(name)s] %(levelname)s: %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.is_production and settings.allow_unverified_passwords:
        logger.warning("⚠️  ALLOW_UNVERIFIED_PASSWORDS is on in production: logins are not password-checked")
    if settings.storage_configured:
        logger.info(f"✅ Uploads go to S3 bucket {settings.aws_bucket_name}")
    else:
        logger.info("⚠️  AWS credentials missing, uploads return mock URLs")
    yield
    await close_db_pool()


app = FastAPI(
    title="StartupOS API",
    description="Tenant-scoped CRUD API for StartupOS companies",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(files.router)
app.include_router(webhooks.router)
app.include_router(migration.router)
app.include_router(investors.router)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)


@app.get("/health")
async def health():
    return {"status": "ok", "timestamp": utc_now().isoformat()}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
