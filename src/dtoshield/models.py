# src/dtoshield/models.py
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union

from dtoshield.config import ACCEPTED_EXTENSIONS, CONTENT_MARKER, DEFAULT_NAME_PATTERNS


@dataclass(frozen=True)
class FileRecord:
    """Immutable snapshot of a matched file at scan time."""
    path: Path
    rel_path: str
    content: str
    size: int

    @classmethod
    def from_content(cls, path: Path, rel_path: str, content: str) -> "FileRecord":
        return cls(path=path, rel_path=rel_path, content=content, size=len(content))


@dataclass(frozen=True)
class ScanFilter:
    """
    Decides which files a scan returns: accepted extension, filename match
    and content marker must all hold.
    """
    name_pattern: Optional[str] = None
    content_marker: str = CONTENT_MARKER
    default_name_patterns: Tuple[str, ...] = DEFAULT_NAME_PATTERNS
    extensions: Tuple[str, ...] = ACCEPTED_EXTENSIONS
    _marker_re: "re.Pattern[str]" = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_marker_re", re.compile(self.content_marker))

    def accepts_extension(self, file_name: str) -> bool:
        return file_name.endswith(self.extensions)

    def matches_name(self, file_name: str) -> bool:
        lower_name = file_name.lower()
        if self.name_pattern:
            return self.name_pattern.lower() in lower_name
        return any(p in lower_name for p in self.default_name_patterns)

    def matches_content(self, content: str) -> bool:
        return self._marker_re.search(content) is not None


@dataclass(frozen=True)
class ModelPricing:
    input_per_million: float
    output_per_million: float


@dataclass(frozen=True)
class CostEstimate:
    input_tokens: int
    output_tokens: int
    total_tokens: int
    input_cost: float
    output_cost: float
    total_cost: float


@dataclass(frozen=True)
class PromptPair:
    """System/user instruction pair sent to the generation service."""
    system: str
    user: str


# A recipe builds either one combined prompt or a system/user pair
Instruction = Union[str, PromptPair]


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one call to the generation service."""
    text: Optional[str] = None
    error: Optional[str] = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None

    @classmethod
    def failure(cls, error: str) -> "GenerationResult":
        return cls(text=None, error=error)


@dataclass(frozen=True)
class TransformationOutcome:
    file_path: Path
    success: bool
    error: Optional[str] = None
    reason: str = ""
