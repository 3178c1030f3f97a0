from io import BytesIO

import pytest
from botocore.exceptions import ClientError
from fastapi import HTTPException, UploadFile

from cobalt.routes.upload import read_limited

UPLOAD = "/api/v1/upload"


@pytest.fixture
def msds_id(client):
    return client.post("/api/v1/msds/", json={"name": "염산"}).json()["data"]["id"]


def pdf(name="sheet.pdf"):
    return {"file": (name, b"%PDF-1.4 test", "application/pdf")}


def test_pdf_upload_stores_object_and_updates_record(client, s3, msds_id):
    response = client.post(f"{UPLOAD}/pdf", data={"msds_id": msds_id}, files=pdf("염산 MSDS (v2).pdf"))
    assert response.status_code == 200

    body = response.json()
    key = body["file_name"]
    assert body["success"] is True
    assert key.startswith("pdfs/")
    assert key.endswith(f"_{msds_id}_MSDS_v2_.pdf")
    assert body["url"].endswith(f"msds/{key}")

    stored = s3.objects[key]
    assert stored["ACL"] == "public-read"
    assert stored["ContentType"] == "application/pdf"
    assert stored["Body"] == b"%PDF-1.4 test"

    item = client.get(f"/api/v1/msds/{msds_id}").json()
    assert item["pdf_file_name"] == key
    assert item["pdf_file_url"] == body["url"]


def test_pdf_upload_rejects_other_types(client, s3, msds_id):
    response = client.post(
        f"{UPLOAD}/pdf",
        data={"msds_id": msds_id},
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )
    assert response.status_code == 415
    assert s3.objects == {}


def test_pdf_upload_requires_existing_record(client, s3):
    response = client.post(f"{UPLOAD}/pdf", data={"msds_id": 999}, files=pdf())
    assert response.status_code == 404
    assert s3.objects == {}


def test_pdf_upload_size_limit(client, s3, msds_id, monkeypatch):
    monkeypatch.setattr("cobalt.routes.upload.MAX_PDF_SIZE", 4)
    response = client.post(f"{UPLOAD}/pdf", data={"msds_id": msds_id}, files=pdf())
    assert response.status_code == 413


def test_storage_failure_is_reported(client, s3, msds_id):
    s3.error = ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject")

    response = client.post(f"{UPLOAD}/pdf", data={"msds_id": msds_id}, files=pdf())
    assert response.status_code == 502

    assert client.get(f"/api/v1/msds/{msds_id}").json()["pdf_file_url"] == ""


@pytest.mark.parametrize("kind, column, folder", [
    ("warning-label", "warning_label", "warning-labels"),
    ("management-guidelines", "management_guidelines", "management-guidelines"),
])
def test_generated_document_upload(client, s3, msds_id, kind, column, folder):
    response = client.post(
        f"{UPLOAD}/{kind}",
        data={"msds_id": msds_id, "msds_name": "Sodium Hydroxide"},
        files=pdf("label.pdf"),
    )
    assert response.status_code == 200

    file_name = response.json()["file_name"]
    assert file_name.startswith(f"{column}_Sodium_Hydroxide_")
    assert file_name.endswith(".pdf")
    assert f"{folder}/{file_name}" in s3.objects

    item = client.get(f"/api/v1/msds/{msds_id}").json()
    assert item[f"{column}_pdf_name"] == file_name
    assert item[f"{column}_pdf_url"] == response.json()["url"]
    assert item["pdf_file_url"] == ""


def test_unknown_document_kind(client, msds_id):
    response = client.post(f"{UPLOAD}/safety-poster", data={"msds_id": msds_id}, files=pdf())
    assert response.status_code == 422


def test_image_upload(client, s3):
    response = client.post(
        f"{UPLOAD}/image",
        data={"item_type": "prgear"},
        files={"file": ("gas mask.png", b"\x89PNG", "image/png")},
    )
    assert response.status_code == 200

    body = response.json()
    assert body["file_path"].startswith("prgear/")
    assert body["file_path"].endswith("_gas_mask.png")
    assert body["file_name"] == "gas mask.png"
    assert s3.objects[body["file_path"]]["ContentType"] == "image/png"


def test_image_upload_limits(client, s3, monkeypatch):
    response = client.post(
        f"{UPLOAD}/image",
        files={"file": ("sheet.pdf", b"%PDF", "application/pdf")},
    )
    assert response.status_code == 415

    monkeypatch.setattr("cobalt.routes.upload.MAX_IMAGE_SIZE", 2)
    response = client.post(
        f"{UPLOAD}/image",
        files={"file": ("big.png", b"\x89PNG", "image/png")},
    )
    assert response.status_code == 413
    assert s3.objects == {}


def test_delete_image(client, s3):
    s3.objects["ghs/1_flame.png"] = {}

    response = client.delete(f"{UPLOAD}/image", params={"file_path": "ghs/1_flame.png"})
    assert response.json() == {"success": True}
    assert s3.deleted == ["ghs/1_flame.png"]
    assert s3.objects == {}

    assert client.delete(f"{UPLOAD}/image").status_code == 400


async def test_read_limited_stops_after_limit():
    body = BytesIO(b"x" * 3 * 1024 * 1024)

    with pytest.raises(HTTPException) as exc_info:
        await read_limited(UploadFile(file=body, filename="big.pdf"), 1024)

    assert exc_info.value.status_code == 413
    assert body.tell() <= 1025


async def test_read_limited_trusts_known_size():
    body = BytesIO(b"x" * 4096)

    with pytest.raises(HTTPException):
        await read_limited(UploadFile(file=body, filename="big.pdf", size=4096), 1024)

    assert body.tell() == 0


async def test_read_limited_returns_small_files_whole():
    content = await read_limited(UploadFile(file=BytesIO(b"%PDF-1.4"), filename="a.pdf"), 1024)
    assert content == b"%PDF-1.4"


def test_generated_document_with_hangul_name_uses_id(client, s3, msds_id):
    response = client.post(
        f"{UPLOAD}/warning-label",
        data={"msds_id": msds_id, "msds_name": "염산"},
        files=pdf("label.pdf"),
    )
    assert response.status_code == 200

    file_name = response.json()["file_name"]
    assert file_name.startswith(f"warning_label_{msds_id}_")
    assert "document" not in file_name
    assert f"warning-labels/{file_name}" in s3.objects


def test_generated_document_without_name_uses_id(client, msds_id):
    response = client.post(f"{UPLOAD}/management-guidelines", data={"msds_id": msds_id}, files=pdf())
    assert response.json()["file_name"].startswith(f"management_guidelines_{msds_id}_")
