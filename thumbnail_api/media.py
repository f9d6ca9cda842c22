import logging
import os
import uuid

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from thumbnail_api.errors import UploadError

logger = logging.getLogger(__name__)


class CloudinaryPublisher:
    """Uploads generated images to Cloudinary through a transient local file."""

    def __init__(self, images_dir):
        self.images_dir = images_dir

    def _transient_path(self):
        return os.path.join(self.images_dir, f"thumbnail-{uuid.uuid4().hex}.png")

    def publish(self, data: bytes) -> str:
        os.makedirs(self.images_dir, exist_ok=True)
        file_path = self._transient_path()

        try:
            with open(file_path, "wb") as f:
                f.write(data)

            try:
                result = cloudinary.uploader.upload(file_path, resource_type="image")
            except cloudinary.exceptions.Error as e:
                logger.error("Cloudinary upload failed", extra={"file_path": file_path}, exc_info=True)
                raise UploadError(f"Image upload failed: {e}") from e

            secure_url = (result or {}).get("secure_url")
            if not secure_url:
                raise UploadError("Image upload returned no secure_url")

            logger.info("Uploaded image to Cloudinary", extra={"image_url": secure_url})
            return secure_url
        finally:
            if os.path.exists(file_path):
                os.remove(file_path)
