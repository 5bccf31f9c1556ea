"""Linear OCR pipeline: load, recognize, transform, serialize."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import logging
import time

from .config import OCRConfig
from .errors import RecognitionError
from .geometry import RecognizedTextRegion, to_pixel_region
from .imaging import LoadedImage, load_image
from .ocr.engine import BaseOCREngine, RawObservation, build_engine
from .serializer import dumps_regions

LOGGER = logging.getLogger(__name__)


def to_regions(observations: List[RawObservation], image: LoadedImage) -> List[RecognizedTextRegion]:
    return [
        to_pixel_region(obs.text, obs.confidence, obs.box, image.width, image.height)
        for obs in observations
    ]


def recognize_file(
    image_path: Path,
    config: OCRConfig,
    engine: Optional[BaseOCREngine] = None,
) -> List[RecognizedTextRegion]:
    """Run OCR on one image and return pixel-space regions in engine order.

    Propagates ImageLoadError, RecognitionError and ConfigError.
    """
    image = load_image(image_path)
    if engine is None:
        engine = build_engine(config)

    LOGGER.info("Running OCR via %s on %s", engine.name, image_path)
    start = time.perf_counter()
    try:
        observations = engine.recognize(image)
    except RecognitionError:
        raise
    except Exception as exc:
        LOGGER.exception("OCR engine %s failed", engine.name)
        raise RecognitionError(f"{engine.name} engine failed: {exc}") from exc
    LOGGER.info(
        "OCR via %s completed in %.2fs (observations=%d)",
        engine.name,
        time.perf_counter() - start,
        len(observations),
    )
    return to_regions(observations, image)


def run(image_path: Path, config: OCRConfig, engine: Optional[BaseOCREngine] = None) -> str:
    return dumps_regions(recognize_file(image_path, config, engine))
