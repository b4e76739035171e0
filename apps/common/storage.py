"""
Blob storage for promotion banners and business logos.

Wraps Django's storage API with the two calls the marketplace needs:
``upload`` and ``get_public_url``. Objects live under a bucket prefix
(``promotion-banners/``, ``logos/``), so any configured storage backend
(filesystem, S3, ...) behaves like a set of public buckets.
"""
import logging
import mimetypes
import posixpath
import time

from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from .exceptions import ServiceError, StorageError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {'image/jpeg', 'image/png', 'image/webp', 'image/gif'}


class InvalidImageError(ServiceError):
    """Uploaded file is not a supported image."""

    code = 'invalid_image'


class BlobStorage:
    """Bucket-style facade over a Django storage backend."""

    def __init__(self, storage=None):
        self._storage = storage or default_storage

    def upload(self, bucket, path, content, content_type):
        """
        Store ``content`` at ``bucket/path``.

        Args:
            bucket: Bucket name (top-level prefix)
            path: Object path inside the bucket
            content: Raw bytes
            content_type: MIME type, must be a supported image type

        Returns:
            Object path inside the bucket (the backend may rename on collision)

        Raises:
            InvalidImageError: If content type is not an image
            StorageError: If the backend write fails
        """
        if content_type not in ALLOWED_IMAGE_TYPES:
            raise InvalidImageError(f"Unsupported content type: {content_type}")

        name = posixpath.join(bucket, path)
        try:
            stored = self._storage.save(name, ContentFile(content))
        except OSError as e:
            logger.error("Upload to %s failed: %s", name, e)
            raise StorageError("Failed to upload image. Please try again.")

        logger.info("Uploaded %s (%d bytes)", stored, len(content))
        return posixpath.relpath(stored, bucket)

    def get_public_url(self, bucket, path):
        """Return the public URL of an object."""
        return self._storage.url(posixpath.join(bucket, path))

    def delete(self, bucket, path):
        """Remove an object; missing objects are ignored."""
        name = posixpath.join(bucket, path)
        try:
            self._storage.delete(name)
        except OSError as e:
            logger.error("Delete of %s failed: %s", name, e)
            raise StorageError("Failed to delete image.")
        logger.info("Deleted %s", name)

    def store_image(self, bucket, owner_id, uploaded_file):
        """
        Upload a Django ``UploadedFile`` under ``<owner_id>/<timestamp>.<ext>``.

        Returns:
            Object path inside the bucket
        """
        content_type = (
            getattr(uploaded_file, 'content_type', None)
            or mimetypes.guess_type(uploaded_file.name)[0]
            or ''
        )
        ext = posixpath.splitext(uploaded_file.name)[1].lstrip('.').lower() or 'jpg'
        path = f"{owner_id}/{int(time.time() * 1000)}.{ext}"

        return self.upload(bucket, path, uploaded_file.read(), content_type)

    def upload_image(self, bucket, owner_id, uploaded_file):
        """Upload an image and return its public URL."""
        return self.get_public_url(bucket, self.store_image(bucket, owner_id, uploaded_file))


blob_storage = BlobStorage()
