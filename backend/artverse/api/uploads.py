"""
Image Upload API Endpoint
Stores artwork images and course thumbnails in Supabase Storage
"""
from fastapi import APIRouter, Depends, File, UploadFile, status

from artverse.api.responses import success
from artverse.core.auth import TokenUser, require_roles
from artverse.services import storage_service

router = APIRouter()


@router.post("/images", status_code=status.HTTP_201_CREATED)
def upload_image(
    file: UploadFile = File(...),
    user: TokenUser = Depends(require_roles("artist", "admin")),
):
    """
    Upload one image

    Returns {url, public_id}; send both back inside artwork images or a
    course thumbnail.
    """
    data = file.file.read()
    image = storage_service.upload_image(user.id, file.filename, file.content_type, data)
    return success(data=image, message="Image uploaded successfully")
