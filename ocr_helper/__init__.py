"""Single-image OCR helper emitting JSON text regions."""

__version__ = "0.1.0"
