"""OCR package."""

from .engine import BaseOCREngine, RawObservation, build_engine
from .tesseract import TesseractOCREngine
from .vision import VisionOCREngine, vision_available

__all__ = [
    "BaseOCREngine",
    "RawObservation",
    "TesseractOCREngine",
    "VisionOCREngine",
    "build_engine",
    "vision_available",
]
