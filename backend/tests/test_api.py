import io
import re

from fastapi import UploadFile
from starlette.datastructures import Headers

from jewelry_store.routers.uploads import read_uploads
from tests.conftest import PNG_BYTES


def _images(n):
    return [("images", (f"img{i}.png", PNG_BYTES, "image/png")) for i in range(n)]


RING_FORM = {
    "name": "Love Ring",
    "brand": "Cartier",
    "type": "Ring",
    "material": "Vàng 18k",
    "originalPrice": "1200",
    "salePrice": "999.5",
    "mainImageIndex": "0",
}


def _create_ring(client, auth_headers, n_images=1):
    response = client.post("/api/products", data=RING_FORM, files=_images(n_images), headers=auth_headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_login_and_verify_token(client):
    response = client.post("/api/login", json={"username": "admin", "password": "s3cret-pass"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["token"] == body["access_token"]

    response = client.get("/api/verify-token", headers={"Authorization": f"Bearer {body['token']}"})
    assert response.status_code == 200
    assert response.json() == {"valid": True, "username": "admin"}


def test_login_failure(client):
    response = client.post("/api/login", json={"username": "admin", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid username or password"


def test_mutations_require_token(client):
    response = client.post("/api/products", data=RING_FORM, files=_images(1))
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert client.delete("/api/products/RC0001").status_code == 401
    assert client.get("/api/verify-token", headers={"Authorization": "Bearer junk"}).status_code == 401


def test_create_product(client, auth_headers, blob_store):
    product = _create_ring(client, auth_headers, n_images=2)
    assert re.fullmatch(r"RC\d{4}", product["id"])
    assert product["version"] == 0
    assert product["originalPrice"] == 1200.0
    assert product["salePrice"] == 999.5
    assert len(product["imageUrls"]) == 2
    assert product["imageUrl3"] is None
    assert all(blob_store.exists(url) for url in product["imageUrls"])


def test_create_product_validation(client, auth_headers, blob_store):
    response = client.post(
        "/api/products", data={**RING_FORM, "brand": "Rolex"}, files=_images(1), headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["field"] == "brand"
    assert not blob_store.root.exists() or not any(blob_store.root.iterdir())


def test_create_product_needs_images(client, auth_headers):
    response = client.post("/api/products", data=RING_FORM, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "At least one image is required"


def test_create_product_rejects_non_image(client, auth_headers):
    files = [("images", ("doc.pdf", b"%PDF", "application/pdf"))]
    response = client.post("/api/products", data=RING_FORM, files=files, headers=auth_headers)
    assert response.status_code == 415


def test_create_product_rejects_overlong_name(client, auth_headers, blob_store):
    response = client.post(
        "/api/products", data={**RING_FORM, "name": "x" * 256}, files=_images(1), headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["field"] == "name"
    assert not blob_store.root.exists() or not any(blob_store.root.iterdir())


def test_list_and_get_products(client, auth_headers):
    product = _create_ring(client, auth_headers)
    assert [p["id"] for p in client.get("/api/products").json()] == [product["id"]]
    assert client.get("/api/products", params={"brand": "Bvlgari"}).json() == []
    assert client.get("/api/products", params={"type": "all"}).status_code == 200
    assert client.get("/api/products", params={"brand": "Rolex"}).status_code == 400
    assert client.get(f"/api/products/{product['id']}").json()["name"] == "Love Ring"
    assert client.get("/api/products/ZZ0001").status_code == 404


def test_patch_product_with_version(client, auth_headers):
    product = _create_ring(client, auth_headers)
    url = f"/api/products/{product['id']}"
    form = {"salePrice": "850", "version": "0", "keepImages": "true"}

    response = client.patch(url, data=form, headers=auth_headers)
    assert response.status_code == 200, response.text
    assert response.json()["version"] == 1
    assert response.json()["salePrice"] == 850.0

    response = client.patch(url, data=form, headers=auth_headers)
    assert response.status_code == 409


def test_patch_product_replaces_images(client, auth_headers, blob_store):
    product = _create_ring(client, auth_headers, n_images=2)
    response = client.patch(
        f"/api/products/{product['id']}", data={"version": "0"}, files=_images(2), headers=auth_headers
    )
    assert response.status_code == 200, response.text
    new_urls = response.json()["imageUrls"]
    assert len(new_urls) == 2
    assert set(new_urls).isdisjoint(product["imageUrls"])
    assert all(blob_store.exists(u) for u in new_urls)
    assert not any(blob_store.exists(u) for u in product["imageUrls"])


def test_patch_product_without_images_or_keep_flag(client, auth_headers):
    product = _create_ring(client, auth_headers)
    response = client.patch(f"/api/products/{product['id']}", data={"name": "x"}, headers=auth_headers)
    assert response.status_code == 400


def test_patch_rejects_bad_version(client, auth_headers):
    product = _create_ring(client, auth_headers)
    response = client.patch(
        f"/api/products/{product['id']}", data={"version": "one", "keepImages": "true"}, headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["field"] == "version"


def test_delete_product(client, auth_headers, blob_store):
    product = _create_ring(client, auth_headers)
    response = client.delete(f"/api/products/{product['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert client.get(f"/api/products/{product['id']}").status_code == 404
    assert not blob_store.exists(product["imageUrls"][0])
    assert client.delete(f"/api/products/{product['id']}", headers=auth_headers).status_code == 404


def test_news_lifecycle(client, auth_headers, blob_store):
    response = client.post(
        "/api/news",
        data={"title": "Grand opening", "content": "Visit us"},
        files={"image": ("cover.jpg", b"jpeg", "image/jpeg")},
        headers=auth_headers,
    )
    assert response.status_code == 201, response.text
    article = response.json()
    assert re.fullmatch(r"N\d{4}", article["id"])
    assert article["imageUrls"] == [article["imageUrl"]]

    assert [n["id"] for n in client.get("/api/news").json()] == [article["id"]]

    response = client.patch(
        f"/api/news/{article['id']}", data={"title": "Opened", "version": "0"}, headers=auth_headers
    )
    assert response.status_code == 200, response.text
    assert response.json()["imageUrl"] is None
    assert not blob_store.exists(article["imageUrl"])

    response = client.delete(f"/api/news/{article['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert client.get(f"/api/news/{article['id']}").status_code == 404


def test_upload_image(client, auth_headers, blob_store):
    response = client.post(
        "/api/upload-image", files={"upload": ("inline.png", PNG_BYTES, "image/png")}, headers=auth_headers
    )
    assert response.status_code == 200
    assert blob_store.exists(response.json()["url"])
    assert client.post("/api/upload-image", headers=auth_headers).status_code == 400


def test_upload_image_too_large(client, auth_headers, blob_store):
    big = PNG_BYTES + b"\0" * (blob_store.max_size_bytes * 4)
    response = client.post(
        "/api/upload-image", files={"upload": ("big.png", big, "image/png")}, headers=auth_headers
    )
    assert response.status_code == 413
    assert not blob_store.root.exists() or not any(blob_store.root.iterdir())


def test_read_uploads_stops_one_byte_past_limit():
    upload = UploadFile(
        io.BytesIO(b"x" * 5000), filename="big.png", headers=Headers({"content-type": "image/png"})
    )
    blobs = read_uploads([upload, None], max_size_bytes=1024)
    assert len(blobs) == 1
    assert len(blobs[0].content) == 1025
    assert blobs[0].content_type == "image/png"
