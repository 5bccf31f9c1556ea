from __future__ import annotations

from pathlib import Path
from typing import List

import pytest
from PIL import Image

from ocr_helper.geometry import NormalizedBox
from ocr_helper.imaging import LoadedImage
from ocr_helper.ocr.engine import BaseOCREngine, RawObservation


class FakeEngine(BaseOCREngine):
    name = "fake"

    def __init__(self, observations: List[RawObservation] | None = None, error: Exception | None = None) -> None:
        self.observations = observations or []
        self.error = error
        self.seen: List[LoadedImage] = []

    def recognize(self, image: LoadedImage) -> List[RawObservation]:
        self.seen.append(image)
        if self.error is not None:
            raise self.error
        return list(self.observations)


@pytest.fixture
def image_path(tmp_path: Path) -> Path:
    path = tmp_path / "screen.png"
    Image.new("RGB", (200, 100), color="white").save(path)
    return path


@pytest.fixture
def sample_observations() -> List[RawObservation]:
    return [
        RawObservation(text="Hello", confidence=0.9, box=NormalizedBox(0.1, 0.8, 0.2, 0.1)),
        RawObservation(text="", confidence=0.5, box=NormalizedBox(0.0, 0.0, 1.0, 1.0)),
    ]


@pytest.fixture
def fake_engine():
    return FakeEngine
