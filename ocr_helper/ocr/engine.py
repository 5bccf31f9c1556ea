"""OCR engine interface and engine selection."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import logging
import sys

from ocr_helper.config import OCRConfig
from ocr_helper.errors import ConfigError, OCRDependencyError
from ocr_helper.geometry import NormalizedBox
from ocr_helper.imaging import LoadedImage

LOGGER = logging.getLogger(__name__)

ENGINE_NAMES = ("vision", "tesseract")


@dataclass(frozen=True, slots=True)
class RawObservation:
    text: str
    confidence: float
    box: NormalizedBox

    @classmethod
    def from_candidate(cls, text: Optional[str], confidence: float, box: NormalizedBox) -> "RawObservation":
        """Build an observation, treating a missing top candidate as empty text."""
        return cls(text=text if text is not None else "", confidence=float(confidence), box=box)


class BaseOCREngine:
    name: str

    def recognize(self, image: LoadedImage) -> List[RawObservation]:  # pragma: no cover - interface
        """Return observations in engine order, boxes normalized with a bottom-left origin."""
        raise NotImplementedError


def build_engine(config: OCRConfig) -> BaseOCREngine:
    """Instantiate the engine named by ``config.engine``.

    ``auto`` prefers Apple Vision on macOS and falls back to Tesseract.
    """
    from .tesseract import TesseractOCREngine
    from .vision import VisionOCREngine, vision_available

    requested = config.engine.strip().lower()
    if requested == "auto":
        if sys.platform == "darwin" and vision_available():
            requested = "vision"
        else:
            requested = "tesseract"
        LOGGER.debug("Engine 'auto' resolved to %s", requested)

    if requested == "vision":
        return VisionOCREngine()
    if requested == "tesseract":
        return TesseractOCREngine(
            languages=config.languages,
            psm=config.page_segmentation_mode,
            oem=config.oem,
            cmd=config.tesseract_cmd,
            timeout=config.timeout_seconds,
        )
    raise ConfigError(
        f"Unknown OCR engine '{config.engine}'; expected one of: auto, {', '.join(ENGINE_NAMES)}"
    )


__all__ = [
    "BaseOCREngine",
    "ENGINE_NAMES",
    "OCRDependencyError",
    "RawObservation",
    "build_engine",
]
