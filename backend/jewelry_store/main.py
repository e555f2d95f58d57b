import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from jewelry_store.core.config import settings
from jewelry_store.core.errors import AuthenticationError, CatalogError, ValidationError
from jewelry_store.models import Base  # noqa: F401 - register models
from jewelry_store.routers import auth, health, news, products, uploads

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Jewelry Store API",
    description="Jewelry catalog: products, news and image uploads",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    content = {"detail": exc.message}
    headers = None
    if isinstance(exc, ValidationError) and exc.field:
        content["field"] = exc.field
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    elif isinstance(exc, ValidationError):
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


app.include_router(health.router, prefix="/api/health")
app.include_router(auth.router, prefix="/api")
app.include_router(uploads.router, prefix="/api")
app.include_router(products.router, prefix="/api/products")
app.include_router(news.router, prefix="/api/news")

# Serve uploaded product and news images
upload_dir = Path(settings.UPLOAD_DIR)
upload_dir.mkdir(parents=True, exist_ok=True)
app.mount("/" + settings.UPLOAD_URL_PREFIX.strip("/"), StaticFiles(directory=str(upload_dir)), name="uploads")


@app.on_event("startup")
async def startup():
    # Seed the admin identity from settings if no admin users exist
    from jewelry_store.core.auth import seed_admin_user
    from jewelry_store.core.database import SessionLocal
    seed_admin_user(SessionLocal)
