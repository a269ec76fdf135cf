"""Loading plain-text editions from disk.

Book editions and translations arrive in whatever encoding they were saved
in, so bytes are decoded with a detected encoding before alignment.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple, Union

import chardet  # type: ignore

logger = logging.getLogger(__name__)


def decode_text_bytes(data: bytes) -> Tuple[str, str]:
	"""Decode ``data`` into text with newlines unified to "\\n".

	Returns:
		(text, encoding) where encoding is the codec actually used
	"""
	if not data:
		return "", "utf-8"

	detected = chardet.detect(data)
	encoding = detected.get("encoding") or "utf-8"
	confidence = detected.get("confidence") or 0.0
	logger.debug("Detected encoding: %s (confidence: %.2f)", encoding, confidence)

	try:
		text = data.decode(encoding)
	except (UnicodeDecodeError, LookupError):
		logger.warning("Failed to decode with %s, falling back to UTF-8 with error handling", encoding)
		encoding = "utf-8"
		text = data.decode("utf-8", errors="replace")

	if text.startswith("\ufeff"):
		text = text[1:]  # Remove BOM

	text = text.replace("\r\n", "\n").replace("\r", "\n")
	return text, encoding


def read_text_file(path: Union[str, Path]) -> str:
	"""Read a text file of unknown encoding."""
	p = Path(path)
	if not p.is_file():
		raise FileNotFoundError(f"Text file not found: {path}")
	text, _ = decode_text_bytes(p.read_bytes())
	return text
