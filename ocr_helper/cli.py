"""Command line entry point: OCR one image and print JSON regions to stdout."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import argparse
import logging
import sys

from .config import AppConfig, load_config
from .errors import ConfigError, ImageLoadError, RecognitionError, SerializationError, UsageError
from .ocr.engine import BaseOCREngine
from .pipeline import recognize_file
from .serializer import EMPTY_RESULT, dumps_regions

LOGGER = logging.getLogger(__name__)

USAGE = "Usage: ocr_helper <image_path>"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ocr_helper",
        description="Run OCR on a single image and print recognized text lines as JSON.",
    )
    parser.add_argument("image", nargs="?", type=Path, help="Path to input image (PNG/JPG/...).")
    parser.add_argument("--config", type=Path, default=None, help="Optional YAML config file.")
    parser.add_argument("--engine", type=str, default=None, help="OCR engine: auto|vision|tesseract")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    # stdout carries the JSON payload, everything else goes to stderr
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _apply_log_level(config: AppConfig, verbose: bool) -> None:
    if verbose or not config.log_level:
        return
    level = getattr(logging, config.log_level, None)
    if isinstance(level, int):
        logging.getLogger().setLevel(level)
    else:
        LOGGER.warning("Ignoring unknown log_level '%s'", config.log_level)


def _emit(payload: str) -> None:
    # always UTF-8, whatever the locale or PYTHONIOENCODING says
    data = (payload + "\n").encode("utf-8")
    sys.stdout.flush()
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        sys.stdout.write(payload + "\n")
        sys.stdout.flush()
        return
    buffer.write(data)
    buffer.flush()


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    args, extras = _build_parser().parse_known_args(argv)
    _setup_logging(args.verbose)
    if extras:
        LOGGER.debug("Ignoring extra arguments: %s", extras)
    if args.image is None:
        raise UsageError(USAGE)
    return args


def main(argv: Optional[List[str]] = None, engine: Optional[BaseOCREngine] = None) -> int:
    try:
        args = _parse_args(argv)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        config = load_config(args.config)
        _apply_log_level(config, args.verbose)
        if args.engine:
            config.ocr.engine = args.engine.strip().lower()
        regions = recognize_file(args.image, config.ocr, engine)
    except ImageLoadError as exc:
        LOGGER.error("Error: %s", exc)
        _emit(EMPTY_RESULT)
        return 0
    except (RecognitionError, ConfigError) as exc:
        LOGGER.error("OCR error: %s", exc)
        _emit(EMPTY_RESULT)
        return 0

    try:
        payload = dumps_regions(regions)
    except SerializationError as exc:
        LOGGER.debug("Falling back to empty result: %s", exc)
        payload = EMPTY_RESULT
    _emit(payload)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
