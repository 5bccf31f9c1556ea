"""Tesseract engine: word-level TSV regrouped into text lines."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import csv
import io
import logging
import shutil
import subprocess

from ocr_helper.errors import OCRDependencyError, RecognitionError
from ocr_helper.geometry import NormalizedBox
from ocr_helper.imaging import LoadedImage
from .engine import BaseOCREngine, RawObservation

LOGGER = logging.getLogger(__name__)

LineKey = Tuple[int, int, int, int]  # page, block, paragraph, line


@dataclass(slots=True)
class _LineAccumulator:
    words: List[str] = field(default_factory=list)
    confidences: List[float] = field(default_factory=list)
    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    def add(self, text: str, confidence: float, left: int, top: int, width: int, height: int) -> None:
        if not self.words:
            self.left, self.top = left, top
            self.right, self.bottom = left + width, top + height
        else:
            self.left = min(self.left, left)
            self.top = min(self.top, top)
            self.right = max(self.right, left + width)
            self.bottom = max(self.bottom, top + height)
        self.words.append(text)
        self.confidences.append(confidence)


def _int_field(row: Dict[str, str], key: str) -> int:
    return int(row.get(key) or 0)


def parse_tsv(tsv: str, image_width: int, image_height: int) -> List[RawObservation]:
    """Group Tesseract word rows into one observation per text line.

    Lines keep the order in which Tesseract first reports them. Confidence is
    the mean word confidence scaled to [0, 1].
    """
    reader = csv.DictReader(io.StringIO(tsv), delimiter="\t", quoting=csv.QUOTE_NONE)
    lines: Dict[LineKey, _LineAccumulator] = {}
    for row in reader:
        text = (row.get("text") or "").strip()
        if not text:
            continue
        try:
            conf = float(row.get("conf") or -1)
            key = (
                _int_field(row, "page_num"),
                _int_field(row, "block_num"),
                _int_field(row, "par_num"),
                _int_field(row, "line_num"),
            )
            left = _int_field(row, "left")
            top = _int_field(row, "top")
            width = _int_field(row, "width")
            height = _int_field(row, "height")
        except ValueError:
            LOGGER.debug("Skipping malformed TSV row: %s", row)
            continue
        if conf < 0:
            continue
        lines.setdefault(key, _LineAccumulator()).add(text, conf / 100.0, left, top, width, height)

    observations: List[RawObservation] = []
    for line in lines.values():
        box = NormalizedBox.from_pixel_rect(
            line.left,
            line.top,
            line.right - line.left,
            line.bottom - line.top,
            image_width,
            image_height,
        )
        confidence = sum(line.confidences) / len(line.confidences)
        observations.append(RawObservation.from_candidate(" ".join(line.words), confidence, box))
    return observations


class TesseractOCREngine(BaseOCREngine):
    name = "tesseract"

    def __init__(
        self,
        languages: str = "eng",
        psm: int = 11,
        oem: int = 1,
        cmd: str = "tesseract",
        timeout: Optional[float] = None,
    ) -> None:
        self.languages = languages
        self.psm = psm
        self.oem = oem
        self.cmd = cmd
        self.timeout = timeout

    def build_command(self) -> List[str]:
        # Dictionary lookups off: no language correction, and it is faster.
        return [
            self.cmd,
            "stdin",
            "stdout",
            "-l",
            self.languages,
            "--psm",
            str(self.psm),
            "--oem",
            str(self.oem),
            "-c",
            "load_system_dawg=0",
            "-c",
            "load_freq_dawg=0",
            "tsv",
        ]

    def recognize(self, image: LoadedImage) -> List[RawObservation]:
        if shutil.which(self.cmd) is None:
            raise OCRDependencyError(f"Tesseract binary '{self.cmd}' is not available on PATH")

        buffer = io.BytesIO()
        image.image.save(buffer, format="PNG")

        cmd = self.build_command()
        LOGGER.debug("Executing Tesseract command: %s", " ".join(cmd))
        with subprocess.Popen(
            cmd,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        ) as proc:
            try:
                stdout, stderr = proc.communicate(buffer.getvalue(), timeout=self.timeout)
            except subprocess.TimeoutExpired as exc:
                proc.kill()
                proc.communicate()
                raise RecognitionError(f"Tesseract timed out after {self.timeout}s") from exc
            if proc.returncode != 0:
                detail = stderr.decode("utf-8", errors="replace").strip()
                raise RecognitionError(f"Tesseract failed: {detail}")

        observations = parse_tsv(stdout.decode("utf-8", errors="replace"), image.width, image.height)
        LOGGER.debug("Tesseract OCR produced %d lines", len(observations))
        return observations
