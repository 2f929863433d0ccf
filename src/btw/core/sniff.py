"""Heuristic text/binary classification of files."""

from __future__ import annotations

import codecs
import logging
import os

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 8192
ALLOWED_CONTROL = frozenset(b"\t\n\r")
MAX_CONTROL_RATIO = 0.1
MAX_HIGH_BIT_RATIO = 0.3
TEXT_ENCODING = "utf-8"


def looks_like_text(path: str | os.PathLike[str]) -> bool | None:
    """Guess whether ``path`` is a text file from its first 8 KiB.

    Returns ``None`` if the file cannot be read.  Callers that need a
    yes/no answer should treat ``None`` as "not text".
    """
    try:
        with open(path, "rb") as f:
            sample = f.read(SAMPLE_SIZE)
    except OSError as e:
        logger.warning("Error reading file %s: %s", path, e)
        return None

    if not sample:
        return True

    if b"\x00" in sample:
        return False

    control = sum(1 for byte in sample if byte < 32 and byte not in ALLOWED_CONTROL)
    if control / len(sample) > MAX_CONTROL_RATIO:
        return False

    high_bit = sum(1 for byte in sample if byte > 127)
    if high_bit / len(sample) > MAX_HIGH_BIT_RATIO:
        # A multi-byte character may straddle the sample boundary.
        decoder = codecs.getincrementaldecoder(TEXT_ENCODING)()
        try:
            decoder.decode(sample, final=False)
        except UnicodeDecodeError:
            return False

    return True
