import re
import time
from typing import TYPE_CHECKING
from urllib.parse import urljoin

from botocore.handlers import validate_bucket_name

from cobalt.constants import S3_BUCKET_NAME, S3_URL

if TYPE_CHECKING:
    from types_aiobotocore_s3.client import S3Client


def timestamp_ms() -> int:
    return int(time.time() * 1000)


def safe_pdf_name(filename: str, default: str = "document.pdf") -> str:
    """Object-key-safe PDF name: Hangul dropped, anything outside [A-Za-z0-9.-] becomes "_"."""
    name = re.sub(r"[가-힣ㄱ-ㅎㅏ-ㅣ]", "", filename or "")
    name = re.sub(r"[^a-zA-Z0-9.-]", "_", name)
    name = re.sub(r"_{2,}", "_", name)
    name = name.strip("_")
    return name or default


def safe_image_name(filename: str) -> str:
    return re.sub(r"[^a-zA-Z0-9._-]", "_", filename or "image")


def public_url(key: str) -> str:
    return urljoin(S3_URL or "", f"{S3_BUCKET_NAME}/{key}")


async def put_public_object(s3, key: str, body: bytes, content_type: str) -> str:
    async with s3() as client:
        client: S3Client

        # Disable bucket name validation to support Ceph RGW tenancy
        client.meta.events.unregister("before-parameter-build.s3", validate_bucket_name)

        await client.put_object(
            ACL="public-read",
            Bucket=S3_BUCKET_NAME,
            Body=body,
            Key=key,
            ContentType=content_type,
        )

    return public_url(key)


async def delete_object(s3, key: str) -> None:
    async with s3() as client:
        client: S3Client
        client.meta.events.unregister("before-parameter-build.s3", validate_bucket_name)

        await client.delete_object(Bucket=S3_BUCKET_NAME, Key=key)
