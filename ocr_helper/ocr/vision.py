"""Apple Vision text recognition (macOS only, via pyobjc)."""
from __future__ import annotations

from typing import List

import io
import logging

from ocr_helper.errors import OCRDependencyError, RecognitionError
from ocr_helper.geometry import NormalizedBox
from ocr_helper.imaging import LoadedImage
from .engine import BaseOCREngine, RawObservation

LOGGER = logging.getLogger(__name__)

try:  # pragma: no cover - optional dependency, macOS only
    import Quartz  # type: ignore
    import Vision  # type: ignore
    from Foundation import NSData  # type: ignore
except ImportError:  # pragma: no cover - dependency guard
    Quartz = None
    Vision = None
    NSData = None


def vision_available() -> bool:
    return Vision is not None and Quartz is not None


class VisionOCREngine(BaseOCREngine):  # pragma: no cover - needs macOS
    name = "vision"

    def __init__(self) -> None:
        if not vision_available():
            raise OCRDependencyError("pyobjc Vision framework bindings are not installed")

    def _cg_image(self, image: LoadedImage):
        buffer = io.BytesIO()
        image.image.save(buffer, format="PNG")
        payload = buffer.getvalue()
        data = NSData.dataWithBytes_length_(payload, len(payload))
        source = Quartz.CGImageSourceCreateWithData(data, None)
        cg_image = Quartz.CGImageSourceCreateImageAtIndex(source, 0, None) if source else None
        if cg_image is None:
            raise RecognitionError(f"Cannot hand {image.path} to Vision")
        return cg_image

    def recognize(self, image: LoadedImage) -> List[RawObservation]:
        request = Vision.VNRecognizeTextRequest.alloc().init()
        request.setRecognitionLevel_(Vision.VNRequestTextRecognitionLevelFast)
        request.setUsesLanguageCorrection_(False)

        handler = Vision.VNImageRequestHandler.alloc().initWithCGImage_options_(self._cg_image(image), {})
        ok, error = handler.performRequests_error_([request], None)
        if not ok:
            raise RecognitionError(f"Vision error: {error}")

        observations: List[RawObservation] = []
        for obs in request.results() or []:
            candidates = obs.topCandidates_(1)
            text = str(candidates[0].string()) if candidates else None
            bbox = obs.boundingBox()
            box = NormalizedBox(
                x=float(bbox.origin.x),
                y=float(bbox.origin.y),
                width=float(bbox.size.width),
                height=float(bbox.size.height),
            )
            observations.append(RawObservation.from_candidate(text, obs.confidence(), box))
        LOGGER.debug("Vision OCR produced %d observations", len(observations))
        return observations
