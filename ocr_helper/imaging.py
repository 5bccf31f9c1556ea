"""Image loading for OCR."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import logging

from PIL import Image, UnidentifiedImageError

from .errors import ImageLoadError

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class LoadedImage:
    path: Path
    image: "Image.Image"
    width: int
    height: int


def load_image(path: Path) -> LoadedImage:
    """Decode ``path`` fully into an RGB pixel buffer.

    Raises ImageLoadError for missing, unreadable or undecodable files.
    """
    path = Path(path)
    try:
        with Image.open(path) as image:
            image.load()
            rgb = image.convert("RGB")
    except FileNotFoundError as exc:
        raise ImageLoadError(path, "file not found") from exc
    except UnidentifiedImageError as exc:
        raise ImageLoadError(path, "unrecognized image format") from exc
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageLoadError(path, str(exc)) from exc

    width, height = rgb.size
    if width <= 0 or height <= 0:
        raise ImageLoadError(path, "image has no pixels")
    LOGGER.debug("Loaded %s (%dx%d)", path, width, height)
    return LoadedImage(path=path, image=rgb, width=width, height=height)
