from __future__ import annotations

import pytest

from ocr_helper.config import OCRConfig
from ocr_helper.errors import ConfigError
from ocr_helper.geometry import NormalizedBox
from ocr_helper.ocr import engine as engine_module
from ocr_helper.ocr import vision
from ocr_helper.ocr.engine import RawObservation, build_engine
from ocr_helper.ocr.tesseract import TesseractOCREngine


def test_missing_candidate_becomes_empty_text():
    obs = RawObservation.from_candidate(None, 0.3, NormalizedBox(0, 0, 1, 1))
    assert obs.text == ""
    assert obs.confidence == 0.3


def test_explicit_tesseract_engine_uses_config():
    config = OCRConfig(engine="tesseract", languages="deu", page_segmentation_mode=4, oem=3, tesseract_cmd="/opt/tess")
    engine = build_engine(config)
    assert isinstance(engine, TesseractOCREngine)
    assert (engine.languages, engine.psm, engine.oem, engine.cmd) == ("deu", 4, 3, "/opt/tess")


def test_auto_falls_back_to_tesseract_off_macos(monkeypatch):
    monkeypatch.setattr(engine_module.sys, "platform", "linux")
    assert build_engine(OCRConfig(engine="auto")).name == "tesseract"


def test_auto_falls_back_to_tesseract_without_vision_bindings(monkeypatch):
    monkeypatch.setattr(engine_module.sys, "platform", "darwin")
    monkeypatch.setattr(vision, "Vision", None)
    assert build_engine(OCRConfig(engine="AUTO")).name == "tesseract"


def test_unknown_engine_is_a_config_error():
    with pytest.raises(ConfigError, match="Unknown OCR engine"):
        build_engine(OCRConfig(engine="paddle"))
