# src/dtoshield/core/pipeline.py
import logging
import re
import sys
from typing import Callable, List, Optional, Sequence

from dtoshield.models import FileRecord, GenerationResult, Instruction, TransformationOutcome
from dtoshield.recipes import Recipe

logger = logging.getLogger(__name__)

# (record, generated_text) -> rejection message, or None to accept
OutputCheck = Callable[[FileRecord, str], Optional[str]]

_FENCE_RE = re.compile(r"^\s*```")


def _print_error(message: str) -> None:
    print(message, file=sys.stderr)


def make_output_check(content_marker: str) -> OutputCheck:
    """
    Builds the gate run before a file is overwritten. Rejects empty replies,
    replies wrapped in a Markdown code fence, and replies that lost the
    content marker the file was selected for.
    """
    marker_re = re.compile(content_marker)

    def check(record: FileRecord, text: str) -> Optional[str]:
        if not text.strip():
            return "Generated content is empty"
        if _FENCE_RE.match(text):
            return "Generated content is wrapped in a Markdown code fence"
        if not marker_re.search(text):
            return "Generated content no longer contains the content marker"
        return None

    return check


class TransformationPipeline:
    """
    Rewrites files one at a time through the generation client.

    The client must provide ensure_credentials() and
    generate(instruction, model) -> GenerationResult.
    Progress goes to reporter, per-file errors to error_reporter (stderr).
    """

    def __init__(self, client, recipe: Recipe, output_check: Optional[OutputCheck] = None,
                 reporter: Callable[[str], None] = print,
                 error_reporter: Callable[[str], None] = _print_error):
        self.client = client
        self.recipe = recipe
        self.output_check = output_check
        self.reporter = reporter
        self.error_reporter = error_reporter

    def _transform(self, record: FileRecord, model: str) -> GenerationResult:
        instruction: Instruction = self.recipe.build(record.path.name, record.content)
        result = self.client.generate(instruction, model)
        if not result.ok:
            return result

        if self.output_check is not None:
            rejection = self.output_check(record, result.text)
            if rejection:
                return GenerationResult.failure(rejection)

        # Destructive: no backup is kept
        record.path.write_text(result.text, encoding="utf-8")
        return result

    def run(self, files: Sequence[FileRecord], model: str) -> List[TransformationOutcome]:
        """
        Processes files strictly in order and returns one outcome per file.
        Raises MissingCredentialError before touching anything if the client
        has no credential; every per-file failure is recorded and skipped.
        """
        self.client.ensure_credentials()

        outcomes: List[TransformationOutcome] = []
        total = len(files)
        succeeded = 0

        for i, record in enumerate(files, start=1):
            self.reporter(f"Processing {i}/{total}: {record.rel_path}")
            try:
                result = self._transform(record, model)
            except Exception as e:
                result = GenerationResult.failure(str(e) or type(e).__name__)

            if result.ok:
                succeeded += 1
                self.reporter(f"   Modified: {record.rel_path} ({succeeded} enhanced so far)")
                if result.reason:
                    self.reporter(f"      Reason: {result.reason}")
                outcomes.append(TransformationOutcome(file_path=record.path, success=True, reason=result.reason))
            else:
                logger.debug("Transformation of %s failed: %s", record.path, result.error)
                self.error_reporter(f"   Error processing {record.rel_path}: {result.error}")
                outcomes.append(TransformationOutcome(file_path=record.path, success=False, error=result.error))

        return outcomes
