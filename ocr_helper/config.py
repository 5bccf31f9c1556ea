"""Configuration helpers for the OCR helper."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import logging
import os

import yaml

from .errors import ConfigError

LOGGER = logging.getLogger(__name__)

CONFIG_ENV = "OCR_HELPER_CONFIG"


@dataclass(slots=True)
class OCRConfig:
    engine: str = "auto"  # "auto", "vision" or "tesseract"
    languages: str = "eng"
    page_segmentation_mode: int = 11  # sparse text; screenshots rarely hold one uniform block
    oem: int = 1
    tesseract_cmd: str = "tesseract"
    timeout_seconds: Optional[float] = None


@dataclass(slots=True)
class AppConfig:
    ocr: OCRConfig = field(default_factory=OCRConfig)
    log_level: Optional[str] = None


def _validate_dict(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = raw.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{key}' must be a mapping")
    return section


def _optional_float(value: Any) -> Optional[float]:
    if value in {None, ""}:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"timeout_seconds must be a number, got {value!r}") from exc


def load_config(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """Build the config from defaults, an optional YAML file and the environment.

    ``path`` falls back to ``$OCR_HELPER_CONFIG``. Environment overrides
    (``OCR_HELPER_ENGINE``, ``OCR_HELPER_LANGUAGES``, ``TESSERACT_CMD``) win
    over the file.
    """
    env = os.environ if environ is None else environ
    if path is None and env.get(CONFIG_ENV):
        path = Path(env[CONFIG_ENV])

    raw_config: Dict[str, Any] = _load_yaml_file(path) if path is not None else {}
    ocr_cfg = _validate_dict(raw_config, "ocr")
    defaults = OCRConfig()

    try:
        ocr = OCRConfig(
            engine=str(ocr_cfg.get("engine", defaults.engine)).strip().lower(),
            languages=str(ocr_cfg.get("languages", defaults.languages)),
            page_segmentation_mode=int(
                ocr_cfg.get("page_segmentation_mode", defaults.page_segmentation_mode)
            ),
            oem=int(ocr_cfg.get("oem", defaults.oem)),
            tesseract_cmd=str(ocr_cfg.get("tesseract_cmd", defaults.tesseract_cmd)),
            timeout_seconds=_optional_float(ocr_cfg.get("timeout_seconds")),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid 'ocr' section: {exc}") from exc

    if env.get("OCR_HELPER_ENGINE"):
        ocr.engine = env["OCR_HELPER_ENGINE"].strip().lower()
    if env.get("OCR_HELPER_LANGUAGES"):
        ocr.languages = env["OCR_HELPER_LANGUAGES"].strip()
    if env.get("TESSERACT_CMD"):
        ocr.tesseract_cmd = env["TESSERACT_CMD"].strip()

    log_level = raw_config.get("log_level")
    config = AppConfig(ocr=ocr, log_level=str(log_level).upper() if log_level else None)
    LOGGER.debug("Loaded configuration: %s", config)
    return config


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    LOGGER.debug("Using PyYAML to parse %s", path)
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return loaded
