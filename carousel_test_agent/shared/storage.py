"""Filesystem storage for generated slide images.

Images are written under `<uploads>/carousel/` and handed back as relative URLs
(`/uploads/carousel/test-slide-3-1718040000000.png`) so the first image can be
passed straight back in as the reference for the remaining slides.

Filenames carry the slide number and a millisecond timestamp. Files are opened
exclusively, and the timestamp is bumped on collision, so a write never
replaces an earlier image. Nothing is ever cleaned up.
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from .errors import ImageStorageError

CAROUSEL_SUBDIR = "carousel"
DEFAULT_URL_ROOT = "uploads"


class ImageStore:
    """Writes generated images and resolves image URLs back to files."""

    def __init__(self, uploads_dir: Union[str, Path]):
        self.uploads_dir = Path(uploads_dir)
        self.carousel_dir = self.uploads_dir / CAROUSEL_SUBDIR
        # "." or "/" have no name of their own
        self.url_root = self.uploads_dir.resolve().name or DEFAULT_URL_ROOT
        self.carousel_dir.mkdir(parents=True, exist_ok=True)

    @property
    def url_prefix(self) -> str:
        return f"/{self.url_root}/{CAROUSEL_SUBDIR}"

    def save_image(self, slide_number: int, data: bytes, timestamp_ms: Optional[int] = None) -> str:
        """Write image bytes for a slide and return the image's relative URL.

        Raises:
            ImageStorageError: If the file cannot be written.
        """
        timestamp_ms = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)

        while True:
            filename = f"test-slide-{slide_number}-{timestamp_ms}.png"
            filepath = self.carousel_dir / filename
            try:
                with open(filepath, "xb") as f:
                    f.write(data)
                break
            except FileExistsError:
                timestamp_ms += 1
            except OSError as e:
                raise ImageStorageError(f"Failed to save image for slide {slide_number}: {e}") from e

        logging.info(f"💾 Saved slide {slide_number} image to {filepath}")
        return f"{self.url_prefix}/{filename}"

    def resolve(self, image_url: str) -> Path:
        """Map an image URL (or plain path) to a file on disk.

        URLs under the store's prefix (e.g. `/uploads/carousel/x.png`) resolve
        relative to the uploads directory; anything else is used as a path.
        """
        uploads_prefix = f"/{self.url_root}/"
        if image_url.startswith(uploads_prefix):
            return self.uploads_dir / image_url[len(uploads_prefix):]
        return Path(image_url)

    def exists(self, image_url: str) -> bool:
        return bool(image_url) and self.resolve(image_url).is_file()

    def read_image(self, image_url: str) -> bytes:
        """Read an image previously written (or placed) on disk.

        Raises:
            ImageStorageError: If the file cannot be read.
        """
        path = self.resolve(image_url)
        try:
            return path.read_bytes()
        except OSError as e:
            raise ImageStorageError(f"Failed to read reference image {image_url}: {e}") from e
