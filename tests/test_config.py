from __future__ import annotations

from pathlib import Path

import pytest

from ocr_helper.config import CONFIG_ENV, OCRConfig, load_config
from ocr_helper.errors import ConfigError


def test_defaults_without_file_or_env():
    config = load_config(None, environ={})
    assert config.ocr == OCRConfig()
    assert config.ocr.engine == "auto"
    assert config.log_level is None


def test_yaml_file_overrides_defaults(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "log_level: debug\n"
        "ocr:\n"
        "  engine: Tesseract\n"
        "  languages: eng+fra\n"
        "  page_segmentation_mode: 6\n"
        "  timeout_seconds: 12\n",
        encoding="utf-8",
    )
    config = load_config(path, environ={})
    assert config.ocr.engine == "tesseract"
    assert config.ocr.languages == "eng+fra"
    assert config.ocr.page_segmentation_mode == 6
    assert config.ocr.oem == 1
    assert config.ocr.timeout_seconds == 12.0
    assert config.log_level == "DEBUG"


def test_config_path_from_environment(tmp_path: Path):
    path = tmp_path / "helper.yaml"
    path.write_text("ocr:\n  languages: jpn\n", encoding="utf-8")
    config = load_config(None, environ={CONFIG_ENV: str(path)})
    assert config.ocr.languages == "jpn"


def test_environment_overrides_file(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("ocr:\n  engine: vision\n", encoding="utf-8")
    config = load_config(
        path,
        environ={"OCR_HELPER_ENGINE": "tesseract", "TESSERACT_CMD": "/usr/local/bin/tesseract"},
    )
    assert config.ocr.engine == "tesseract"
    assert config.ocr.tesseract_cmd == "/usr/local/bin/tesseract"


def test_empty_file_uses_defaults(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path, environ={}).ocr == OCRConfig()


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "ocr: tesseract\n",
        "ocr:\n  page_segmentation_mode: sparse\n",
        "ocr: [unclosed\n",
    ],
)
def test_malformed_config_raises(tmp_path: Path, content: str):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path, environ={})


def test_missing_config_file_raises(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml", environ={})
