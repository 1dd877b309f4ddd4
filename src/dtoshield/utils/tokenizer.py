# src/dtoshield/utils/tokenizer.py
import logging
from typing import List, Tuple

import tiktoken

from dtoshield.config import CHARS_PER_TOKEN
from dtoshield.models import FileRecord

logger = logging.getLogger(__name__)

ENCODING_NAMES = ("cl100k_base", "p50k_base")


class Tokenizer:
    """
    Token counts for the review table. tiktoken downloads its encodings on
    first use; when none can be loaded (offline) every later count uses the
    chars-per-token heuristic without retrying the download.
    """

    _encoding = None
    _unavailable = False

    @classmethod
    def get_encoding(cls):
        if cls._encoding is None:
            errors = []
            for name in ENCODING_NAMES:
                try:
                    cls._encoding = tiktoken.get_encoding(name)
                    break
                except Exception as e:
                    errors.append(f"{name}: {e}")
            else:
                raise RuntimeError("; ".join(errors))
        return cls._encoding

    @classmethod
    def count(cls, text: str) -> int:
        if not cls._unavailable:
            try:
                return len(cls.get_encoding().encode_ordinary(text))
            except Exception as e:
                logger.debug("tiktoken unavailable, using heuristic: %s", e)
                cls._unavailable = True
        return -(-len(text) // CHARS_PER_TOKEN)


def largest_files(files: List[FileRecord], limit: int = 10) -> List[Tuple[int, FileRecord]]:
    """Returns (token_count, record) pairs for the biggest files, largest first."""
    counted = [(Tokenizer.count(f.content), f) for f in files]
    counted.sort(key=lambda pair: pair[0], reverse=True)
    return counted[:limit]
