import os
import tempfile
from pathlib import Path

# Settings are read at import time; point them somewhere disposable first
_TMP = tempfile.mkdtemp(prefix="jewelry-store-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'app.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "s3cret-pass"
os.environ.pop("ADMIN_PASSWORD_HASH", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from jewelry_store.core import deps
from jewelry_store.core.auth import seed_admin_user
from jewelry_store.core.database import create_db_engine
from jewelry_store.main import app
from jewelry_store.models import Base
from jewelry_store.schemas.product import ProductCreate
from jewelry_store.services.blob_store import BlobStore, IncomingBlob
from jewelry_store.services.catalog_reader import CatalogReader
from jewelry_store.services.code_generator import CodeGenerator
from jewelry_store.services.news import NewsService
from jewelry_store.services.products import ProductService

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'catalog.db'}", pool_size=5, pool_timeout=5)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def blob_store(tmp_path):
    return BlobStore(str(tmp_path / "uploads"), "/uploads", max_size_bytes=1024)


@pytest.fixture
def product_service(session_factory, blob_store):
    return ProductService(session_factory, blob_store, CodeGenerator(max_attempts=5))


@pytest.fixture
def news_service(session_factory, blob_store):
    return NewsService(session_factory, blob_store, CodeGenerator(max_attempts=5))


@pytest.fixture
def reader(session_factory):
    return CatalogReader(session_factory)


@pytest.fixture
def store_images(blob_store):
    """Write ``n`` PNGs to the blob store and return their refs."""

    def _store(n=1):
        return [blob_store.put(IncomingBlob(f"photo{i}.png", PNG_BYTES, "image/png")) for i in range(n)]

    return _store


@pytest.fixture
def ring_data():
    return ProductCreate(
        name="Love Ring",
        brand="Cartier",
        type="Ring",
        material="Vàng 18k",
        original_price="1200",
        sale_price="999.50",
        description="  Classic band  ",
    )


@pytest.fixture
def client(session_factory, blob_store):
    seed_admin_user(session_factory)
    app.dependency_overrides[deps.get_session_factory] = lambda: session_factory
    app.dependency_overrides[deps.get_blob_store] = lambda: blob_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    response = client.post("/api/login", json={"username": "admin", "password": "s3cret-pass"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def unlink_denied(monkeypatch):
    """Make every file removal fail as if the upload dir were read-only."""

    def _unlink(self, missing_ok=False):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "unlink", _unlink)
