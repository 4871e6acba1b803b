"""Product image and logo uploads to Supabase Storage."""

from functools import lru_cache
from typing import Optional

from libs.common.config import get_settings
from libs.common.datetime_utils import epoch_millis
from libs.common.logging import get_logger
from services.storefront_service.models import LogoKind

from supabase import Client, create_client

logger = get_logger(__name__)

DEFAULT_IMAGE_EXT = "jpg"
DEFAULT_LOGO_EXT = "png"


class UploadError(Exception):
    """Raised when the storage backend rejects an upload."""


def _extension(filename: Optional[str], default: str) -> str:
    if not filename or "." not in filename:
        return default
    ext = filename.rsplit(".", 1)[-1].strip().lower()
    return ext or default


def product_image_filename(
    sku: str, original_filename: Optional[str], millis: Optional[int] = None
) -> str:
    """``<SKU>_<millis>.<ext>``; the SKU keeps images traceable to products."""
    sku = (sku or "").strip()
    if not sku:
        raise ValueError("A SKU is required before uploading product images")
    millis = epoch_millis() if millis is None else millis
    return f"{sku}_{millis}.{_extension(original_filename, DEFAULT_IMAGE_EXT)}"


def logo_filename(
    kind: LogoKind, original_filename: Optional[str], millis: Optional[int] = None
) -> str:
    millis = epoch_millis() if millis is None else millis
    return f"{kind.value}-logo-{millis}.{_extension(original_filename, DEFAULT_LOGO_EXT)}"


class ImageStorage:
    """Uploads into the public product-images bucket and returns public URLs."""

    def __init__(self, client: Optional[Client] = None, bucket: Optional[str] = None):
        settings = get_settings()
        self.supabase: Client = client or create_client(
            settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY
        )
        self.bucket = bucket or settings.SUPABASE_STORAGE_BUCKET

    def upload_product_image(
        self,
        sku: str,
        data: bytes,
        original_filename: Optional[str] = None,
        content_type: str = "image/jpeg",
    ) -> tuple[str, str]:
        """Returns (public_url, stored_filename)."""
        filename = product_image_filename(sku, original_filename)
        return self._upload(filename, data, content_type, upsert=False), filename

    def upload_logo(
        self,
        kind: LogoKind,
        data: bytes,
        original_filename: Optional[str] = None,
        content_type: str = "image/png",
    ) -> tuple[str, str]:
        filename = logo_filename(kind, original_filename)
        return self._upload(filename, data, content_type, upsert=True), filename

    def _upload(self, path: str, data: bytes, content_type: str, upsert: bool) -> str:
        bucket = self.supabase.storage.from_(self.bucket)
        try:
            bucket.upload(
                path=path,
                file=data,
                file_options={
                    "content-type": content_type,
                    "cache-control": "3600",
                    "upsert": "true" if upsert else "false",
                },
            )
        except Exception as e:
            logger.error(f"Upload of {path} to {self.bucket} failed: {e}")
            raise UploadError(str(e)) from e

        return bucket.get_public_url(path)


@lru_cache
def get_image_storage() -> ImageStorage:
    return ImageStorage()
