"""Tests for the Copilot instructions generator."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from readmegen.errors import DirectoryNotFound, UnsupportedModel
from readmegen.generators import CopilotInstructionsGenerator
from readmegen.models import GenerationStatus
from tests._fixtures.tree_builder import FailingProvider, RecordingProvider, factory_for


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    path = tmp_path / "cwd"
    path.mkdir()
    return path


def _generator(provider: RecordingProvider, workdir: Path, **kwargs) -> CopilotInstructionsGenerator:
    return CopilotInstructionsGenerator(
        provider_factory=factory_for(provider),
        working_dir=workdir,
        **kwargs,
    )


def _seed_readmes(tree_builder) -> None:
    tree_builder.write(
        {
            "README.md": "Root readme",
            "src/readme.md": "Source readme",
            "src/api/v1/README.MD": "API readme",
            "docs/guide.md": "Not collected",
            "lib/README.md.bak": "Not collected either",
        }
    )


def test_aggregate_contains_every_readme_with_relative_path(tree_builder, make_request, workdir) -> None:
    _seed_readmes(tree_builder)
    provider = RecordingProvider("# Instructions")

    _generator(provider, workdir).generate(make_request(tree_builder.path(), language="ja"))

    prompt = provider.prompts[0]
    assert "# README.md\n\nRoot readme\n" in prompt
    assert "# src/readme.md\n\nSource readme\n" in prompt
    assert "# src/api/v1/README.MD\n\nAPI readme\n" in prompt
    assert "Not collected" not in prompt
    assert "in ja language" in prompt


def test_collect_readmes_descends_without_recursive_flag(tree_builder, workdir) -> None:
    _seed_readmes(tree_builder)
    generator = _generator(RecordingProvider(), workdir)

    documents = generator.collect_readmes(tree_builder.path())

    assert [doc.relative_path for doc in documents] == [
        "README.md",
        "src/readme.md",
        "src/api/v1/README.MD",
    ]


def test_output_lands_in_working_directory_github_folder(tree_builder, make_request, workdir) -> None:
    _seed_readmes(tree_builder)

    report = _generator(RecordingProvider("# Instructions"), workdir).generate(
        make_request(tree_builder.path())
    )

    output = workdir / ".github" / "copilot-instructions.md"
    assert report.ok
    assert report.written == [output]
    assert not (tree_builder.path() / ".github").exists()
    content = output.read_text(encoding="utf-8")
    assert content.startswith("# Instructions\n\n---\n\n# All README files\n")
    assert "# src/api/v1/README.MD\n\nAPI readme" in content


def test_output_path_defaults_to_process_working_directory(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    generator = CopilotInstructionsGenerator()

    assert generator.output_path == tmp_path / ".github" / "copilot-instructions.md"


def test_append_readmes_can_be_disabled(tree_builder, make_request, workdir) -> None:
    _seed_readmes(tree_builder)

    _generator(RecordingProvider("# Only model text"), workdir, append_readmes=False).generate(
        make_request(tree_builder.path())
    )

    output = workdir / ".github" / "copilot-instructions.md"
    assert output.read_text(encoding="utf-8") == "# Only model text"


def test_existing_github_directory_is_reused(tree_builder, make_request, workdir) -> None:
    _seed_readmes(tree_builder)
    (workdir / ".github").mkdir()

    report = _generator(RecordingProvider("text"), workdir).generate(make_request(tree_builder.path()))

    assert report.ok


def test_existing_instructions_are_folded_into_prompt(tree_builder, make_request, workdir) -> None:
    _seed_readmes(tree_builder)
    output = workdir / ".github" / "copilot-instructions.md"
    output.parent.mkdir()
    output.write_text(
        "# Old rules\n\nUse tabs.\n\n---\n\n# All README files\n# README.md\n\nstale\n",
        encoding="utf-8",
    )
    provider = RecordingProvider("# New rules")

    _generator(provider, workdir).generate(make_request(tree_builder.path()))

    prompt = provider.prompts[0]
    assert "## Existing instructions" in prompt
    assert "# Old rules\n\nUse tabs." in prompt
    assert "stale" not in prompt


def test_existing_instructions_without_appendix_are_verbatim(tree_builder, make_request, workdir) -> None:
    _seed_readmes(tree_builder)
    existing = "# Rules\n\n- Prefer small functions.\n"
    output = workdir / ".github" / "copilot-instructions.md"
    output.parent.mkdir()
    output.write_text(existing, encoding="utf-8")
    provider = RecordingProvider("# New rules")

    _generator(provider, workdir).generate(make_request(tree_builder.path()))

    assert existing in provider.prompts[0]


def test_empty_response_leaves_existing_file_untouched(tree_builder, make_request, workdir) -> None:
    _seed_readmes(tree_builder)
    output = workdir / ".github" / "copilot-instructions.md"
    output.parent.mkdir()
    output.write_text("# Previous", encoding="utf-8")

    report = _generator(RecordingProvider(""), workdir).generate(make_request(tree_builder.path()))

    assert report.results[0].status is GenerationStatus.GENERATION_FAILED
    assert output.read_text(encoding="utf-8") == "# Previous"


def test_empty_response_does_not_create_output(tree_builder, make_request, workdir) -> None:
    _seed_readmes(tree_builder)

    report = _generator(RecordingProvider(""), workdir).generate(make_request(tree_builder.path()))

    assert not report.ok
    assert not (workdir / ".github" / "copilot-instructions.md").exists()


def test_provider_error_is_reported(tree_builder, make_request, workdir) -> None:
    _seed_readmes(tree_builder)
    provider = FailingProvider(fail_on="README files")

    report = _generator(provider, workdir).generate(make_request(tree_builder.path()))

    assert report.results[0].status is GenerationStatus.PROVIDER_ERROR
    assert not (workdir / ".github").exists()


def test_tree_without_readmes_still_generates(tree_builder, make_request, workdir) -> None:
    tree_builder.write({"main.py": "print('x')\n"})
    provider = RecordingProvider("# Instructions")

    report = _generator(provider, workdir).generate(make_request(tree_builder.path()))

    assert report.ok
    assert "No README files were found" in provider.prompts[0]
    output = workdir / ".github" / "copilot-instructions.md"
    assert output.read_text(encoding="utf-8") == "# Instructions"


def test_unsupported_model_raises_before_file_io(tree_builder, make_request, workdir) -> None:
    _seed_readmes(tree_builder)

    with pytest.raises(UnsupportedModel):
        CopilotInstructionsGenerator(working_dir=workdir).generate(
            make_request(tree_builder.path(), model="foo-bar")
        )

    assert not (workdir / ".github").exists()


def test_missing_root_raises(tmp_path: Path, make_request, workdir) -> None:
    with pytest.raises(DirectoryNotFound):
        _generator(RecordingProvider(), workdir).generate(make_request(tmp_path / "missing"))


def test_unreadable_readme_is_reported_and_skipped(tree_builder, make_request, workdir, tmp_path: Path) -> None:
    _seed_readmes(tree_builder)
    tree_builder.mkdir("broken")
    os.symlink(tmp_path / "nowhere", tree_builder.path("broken/README.md"))
    provider = RecordingProvider("# Instructions")

    report = _generator(provider, workdir).generate(make_request(tree_builder.path()))

    statuses = [result.status for result in report.results]
    assert statuses == [GenerationStatus.IO_ERROR, GenerationStatus.WRITTEN]
    assert report.results[0].path == tree_builder.path("broken/README.md")
    assert not report.ok
    assert "Root readme" in provider.prompts[0]
    assert (workdir / ".github" / "copilot-instructions.md").exists()


def test_github_path_that_is_a_file_is_reported(tree_builder, make_request, workdir) -> None:
    _seed_readmes(tree_builder)
    (workdir / ".github").write_text("not a directory", encoding="utf-8")

    report = _generator(RecordingProvider("# Instructions"), workdir).generate(
        make_request(tree_builder.path())
    )

    assert [result.status for result in report.results] == [GenerationStatus.IO_ERROR]
    assert not report.ok
    assert (workdir / ".github").read_text(encoding="utf-8") == "not a directory"
