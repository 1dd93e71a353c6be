"""
Image Storage Service
Uploads and deletes artwork images and course thumbnails in Supabase Storage

The public_id returned by upload_image is the object path inside the
bucket; it is what delete_images expects back.
"""
import logging
import mimetypes
from typing import Iterable, Optional

from supabase import Client, create_client

from artverse.core.config import settings
from artverse.core.errors import BadRequestError, StorageNotConfiguredError
from artverse.core.ids import new_id

logger = logging.getLogger(__name__)

_client: Optional[Client] = None


def get_storage_client() -> Client:
    """
    Supabase client, created on first use

    Raises:
        StorageNotConfiguredError: SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY missing
    """
    global _client
    if not settings.storage_configured:
        raise StorageNotConfiguredError()
    if _client is None:
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    return _client


def _extension_for(filename: Optional[str], content_type: str) -> str:
    if filename and "." in filename:
        return filename.rsplit(".", 1)[1].lower()
    guessed = mimetypes.guess_extension(content_type or "")
    return guessed.lstrip(".") if guessed else "bin"


def upload_image(owner_id: str, filename: Optional[str], content_type: Optional[str], data: bytes) -> dict:
    """
    Upload one image under <owner_id>/<uuid>.<ext>

    Returns:
        {"url": public URL, "public_id": object path}
    """
    if not content_type or not content_type.startswith("image/"):
        raise BadRequestError("Only image uploads are allowed")
    if not data:
        raise BadRequestError("Uploaded file is empty")

    client = get_storage_client()
    bucket = client.storage.from_(settings.SUPABASE_STORAGE_BUCKET)
    path = f"{owner_id}/{new_id()}.{_extension_for(filename, content_type)}"

    bucket.upload(path, data, {"content-type": content_type})
    url = bucket.get_public_url(path)
    logger.info(f"Uploaded image {path} ({len(data)} bytes)")
    return {"url": url, "public_id": path}


def delete_images(public_ids: Iterable[str]) -> None:
    """Best-effort removal; failures are logged, never raised"""
    paths = [public_id for public_id in public_ids if public_id]
    if not paths:
        return

    try:
        client = get_storage_client()
        client.storage.from_(settings.SUPABASE_STORAGE_BUCKET).remove(paths)
        logger.info(f"Deleted {len(paths)} image(s) from storage")
    except Exception as e:
        logger.warning(f"Failed to delete images {paths}: {e}")
