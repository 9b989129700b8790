"""
Cloudinary upload/delete over its REST API.

Uploads use an unsigned upload preset; deletes are signed with the API secret.
Calls go through ``requests`` and are pushed onto the threadpool so a batch of
uploads runs concurrently.
"""
import asyncio
import hashlib
import logging
import time

import requests
from fastapi.concurrency import run_in_threadpool

from config import (
    CLOUDINARY_API_KEY,
    CLOUDINARY_API_SECRET,
    CLOUDINARY_CLOUD_NAME,
    CLOUDINARY_FOLDER,
    CLOUDINARY_UPLOAD_PRESET,
    HTTP_TIMEOUT,
)

logger = logging.getLogger(__name__)

API_BASE = "https://api.cloudinary.com/v1_1"


class MediaError(Exception):
    pass


def resource_type_for(content_type):
    content_type = content_type or ""
    if content_type.startswith("image/"):
        return "image"
    if content_type.startswith("video/"):
        return "video"
    return "raw"


def upload_file(filename, content_type, content):
    """Upload one file. Returns ``{"url", "public_id", "resource_type"}``."""
    resource_type = resource_type_for(content_type)
    url = f"{API_BASE}/{CLOUDINARY_CLOUD_NAME}/{resource_type}/upload"
    data = {"upload_preset": CLOUDINARY_UPLOAD_PRESET, "folder": CLOUDINARY_FOLDER}
    files = {"file": (filename, content, content_type or "application/octet-stream")}

    try:
        response = requests.post(url, data=data, files=files, timeout=HTTP_TIMEOUT)
    except requests.RequestException as exc:
        raise MediaError(f"Failed to upload {filename}") from exc
    if response.status_code != 200:
        raise MediaError(f"Failed to upload {filename}: HTTP {response.status_code}")

    try:
        body = response.json()
        return {
            "url": body["secure_url"],
            "public_id": body.get("public_id"),
            "resource_type": resource_type,
        }
    except (ValueError, KeyError) as exc:
        raise MediaError(f"Failed to upload {filename}: unexpected response") from exc


async def _upload_one(index, item):
    filename, content_type, content = item
    try:
        result = await run_in_threadpool(upload_file, filename, content_type, content)
    except MediaError as exc:
        logger.error("Upload error: %s", exc)
        return {"index": index, "filename": filename, "error": str(exc)}
    logger.info("%s uploaded to %s", filename, result["url"])
    result.update(index=index, filename=filename)
    return result


async def upload_files(items, on_uploaded=None):
    """
    Upload ``(filename, content_type, bytes)`` tuples concurrently.

    ``on_uploaded`` is called with each successful result as soon as that
    upload finishes, so callers see completion order, not submission order.
    One result per item is returned in submission order, each tagged with its
    batch ``index``; failures carry an ``error`` key and do not affect the other uploads.
    """

    async def run(index, item):
        result = await _upload_one(index, item)
        if on_uploaded is not None and "error" not in result:
            on_uploaded(result)
        return result

    return await asyncio.gather(*(run(index, item) for index, item in enumerate(items)))


def sign(params, secret):
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{to_sign}{secret}".encode("utf-8")).hexdigest()


def delete_file(public_id, resource_type="image"):
    """Signed destroy call. True when Cloudinary answers ``result: ok``."""
    if not public_id or not CLOUDINARY_API_KEY or not CLOUDINARY_API_SECRET:
        raise MediaError("Missing required parameters")

    timestamp = int(time.time())
    signature = sign({"public_id": public_id, "timestamp": timestamp}, CLOUDINARY_API_SECRET)
    data = {
        "public_id": public_id,
        "timestamp": str(timestamp),
        "api_key": CLOUDINARY_API_KEY,
        "signature": signature,
    }
    url = f"{API_BASE}/{CLOUDINARY_CLOUD_NAME}/{resource_type}/destroy"

    try:
        response = requests.post(url, data=data, timeout=HTTP_TIMEOUT)
    except requests.RequestException as exc:
        raise MediaError(f"Failed to delete {public_id}") from exc

    try:
        result = response.json().get("result")
    except (ValueError, AttributeError) as exc:
        raise MediaError(f"Failed to delete {public_id}: unexpected response") from exc
    if result != "ok":
        logger.warning("Cloudinary refused to delete %s: %s", public_id, result)
        return False
    return True
