# tests/test_pipeline.py
import pytest

from dtoshield.core.pipeline import TransformationPipeline, make_output_check
from dtoshield.errors import MissingCredentialError
from dtoshield.models import FileRecord, GenerationResult, PromptPair
from dtoshield.recipes import Recipe, get_recipe

ORIGINAL = "export class A {\n  @ApiProperty()\n  id: string;\n}\n"
ENHANCED = "export class A {\n  @ApiProperty()\n  @IsUUID(4)\n  id: string;\n}\n"


class FakeClient:
    """Records calls; fails for any file name listed in fail_for."""

    def __init__(self, fail_for=(), raise_for=(), text=ENHANCED, has_key=True):
        self.fail_for = set(fail_for)
        self.raise_for = set(raise_for)
        self.text = text
        self.has_key = has_key
        self.calls = []

    def ensure_credentials(self):
        if not self.has_key:
            raise MissingCredentialError("GOOGLE_GENERATIVE_AI_API_KEY")

    def generate(self, instruction, model):
        self.calls.append((instruction, model))
        user = instruction.user if isinstance(instruction, PromptPair) else instruction
        for name in self.raise_for:
            if name in user:
                raise RuntimeError("connection reset")
        for name in self.fail_for:
            if name in user:
                return GenerationResult.failure("quota exceeded")
        return GenerationResult(text=self.text, reason="added UUID validation")


@pytest.fixture
def files(tmp_path):
    records = []
    for name in ("a.dto.ts", "b.dto.ts", "c.dto.ts"):
        path = tmp_path / name
        path.write_text(ORIGINAL, encoding="utf-8")
        records.append(FileRecord.from_content(path, name, ORIGINAL))
    return records


def _pipeline(client, **kwargs):
    return TransformationPipeline(client, get_recipe("security"), reporter=lambda _msg: None,
                                  error_reporter=lambda _msg: None, **kwargs)


# --- Test 1: Happy path ---

def test_all_files_rewritten(files):
    client = FakeClient()
    outcomes = _pipeline(client).run(files, "gemini-2.5-flash")

    assert [o.file_path for o in outcomes] == [f.path for f in files]
    assert all(o.success for o in outcomes)
    assert all(o.reason == "added UUID validation" for o in outcomes)
    for f in files:
        assert f.path.read_text(encoding="utf-8") == ENHANCED
    assert [model for _, model in client.calls] == ["gemini-2.5-flash"] * 3


def test_recipe_receives_file_name_and_content(files):
    seen = []

    def build(file_name, file_content):
        seen.append((file_name, file_content))
        return "prompt"

    TransformationPipeline(FakeClient(), Recipe("t", "test", build), reporter=lambda _m: None).run(files, "m")
    assert seen == [(f.path.name, ORIGINAL) for f in files]


# --- Test 2: Failure isolation ---

def test_failure_in_middle_does_not_stop_batch(files):
    client = FakeClient(fail_for={"b.dto.ts"})
    outcomes = _pipeline(client).run(files, "gemini-2.5-flash")

    assert len(outcomes) == 3
    assert [o.success for o in outcomes] == [True, False, True]
    assert outcomes[1].error == "quota exceeded"
    assert files[0].path.read_text(encoding="utf-8") == ENHANCED
    assert files[1].path.read_text(encoding="utf-8") == ORIGINAL
    assert files[2].path.read_text(encoding="utf-8") == ENHANCED


def test_exception_from_client_is_recorded(files):
    client = FakeClient(raise_for={"a.dto.ts"})
    outcomes = _pipeline(client).run(files, "gemini-2.5-flash")

    assert [o.success for o in outcomes] == [False, True, True]
    assert outcomes[0].error == "connection reset"


def test_write_failure_is_recorded(files):
    files[2].path.unlink()
    files[2].path.mkdir()  # writing to a directory fails

    outcomes = _pipeline(FakeClient()).run(files, "gemini-2.5-flash")

    assert [o.success for o in outcomes] == [True, True, False]
    assert outcomes[2].error


def test_recipe_exception_is_recorded(files):
    def build(file_name, file_content):
        if file_name == "a.dto.ts":
            raise ValueError("bad template")
        return "prompt"

    pipeline = TransformationPipeline(FakeClient(), Recipe("t", "test", build), reporter=lambda _m: None)
    outcomes = pipeline.run(files, "m")
    assert [o.success for o in outcomes] == [False, True, True]
    assert outcomes[0].error == "bad template"


def test_empty_input_yields_no_outcomes():
    assert _pipeline(FakeClient()).run([], "gemini-2.5-flash") == []


# --- Test 3: Credential precondition ---

def test_missing_credential_touches_nothing(files):
    client = FakeClient(has_key=False)
    with pytest.raises(MissingCredentialError):
        _pipeline(client).run(files, "gemini-2.5-flash")

    assert client.calls == []
    for f in files:
        assert f.path.read_text(encoding="utf-8") == ORIGINAL


# --- Test 4: Output gate ---

def test_output_check_rejections(files):
    check = make_output_check(r"@ApiProperty\s*\(")
    record = files[0]

    assert check(record, ENHANCED) is None
    assert "empty" in check(record, "  \n")
    assert "fence" in check(record, "```typescript\n" + ENHANCED + "```")
    assert "marker" in check(record, "export class A {}")


def test_rejected_output_leaves_file_untouched(files):
    client = FakeClient(text="```ts\nnope\n```")
    outcomes = _pipeline(client, output_check=make_output_check(r"@ApiProperty\s*\(")).run(files, "m")

    assert not any(o.success for o in outcomes)
    for f in files:
        assert f.path.read_text(encoding="utf-8") == ORIGINAL


def test_progress_is_reported(files):
    lines, errors = [], []
    pipeline = TransformationPipeline(FakeClient(fail_for={"c.dto.ts"}), get_recipe("classic"),
                                      reporter=lines.append, error_reporter=errors.append)
    pipeline.run(files, "m")

    assert lines[0] == "Processing 1/3: a.dto.ts"
    assert any("2 enhanced so far" in line for line in lines)
    assert not any("Error processing" in line for line in lines)
    assert [e.strip() for e in errors] == ["Error processing c.dto.ts: quota exceeded"]


def test_errors_go_to_stderr_by_default(files, capsys):
    TransformationPipeline(FakeClient(fail_for={"b.dto.ts"}), get_recipe("security")).run(files, "m")

    captured = capsys.readouterr()
    assert "Processing 2/3: b.dto.ts" in captured.out
    assert "Error processing b.dto.ts: quota exceeded" in captured.err
    assert "Error processing" not in captured.out
