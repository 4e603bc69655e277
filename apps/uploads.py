"""Storing uploaded files under the public media path."""

import os
import uuid

from django.conf import settings
from django.core.files.storage import default_storage

IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.gif')
VIDEO_EXTENSIONS = ('.mp4', '.webm')


class InvalidUploadError(ValueError):
    """Uploaded file has a disallowed extension or is too large."""
    pass


def upload_limit(kind: str) -> int:
    """Maximum upload size in bytes for a folder (users/references/commissions)."""
    return settings.COMMISSIONS['UPLOAD_LIMITS'][kind]


def validate_upload(uploaded_file, *, kind: str, extensions=IMAGE_EXTENSIONS) -> str:
    """
    Check an uploaded file's extension and size.

    Returns:
        The lower-cased file extension

    Raises:
        InvalidUploadError: If the extension is not allowed or the file is too big
    """
    ext = os.path.splitext(uploaded_file.name)[1].lower()
    if ext not in extensions:
        if extensions == IMAGE_EXTENSIONS:
            raise InvalidUploadError('Only image files are allowed!')
        raise InvalidUploadError('Only image and video files are allowed!')

    limit = upload_limit(kind)
    if uploaded_file.size > limit:
        raise InvalidUploadError(f'File is too large (max {limit // (1024 * 1024)} MB)')

    return ext


def save_upload(uploaded_file, *, kind: str, prefix: str, extensions=IMAGE_EXTENSIONS) -> str:
    """
    Validate and store an upload, returning its public URL path.

    Files land in MEDIA_ROOT/<kind>/ under a unique generated name.
    """
    ext = validate_upload(uploaded_file, kind=kind, extensions=extensions)
    name = default_storage.save(
        f'{kind}/{prefix}-{uuid.uuid4().hex}{ext}',
        uploaded_file,
    )
    return settings.MEDIA_URL + name


def is_video(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in VIDEO_EXTENSIONS
