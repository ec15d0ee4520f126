"""Tests for the run orchestrator."""

from __future__ import annotations

from pathlib import Path

from tagdocs.config import TagDocsConfig, TargetConfig
from tagdocs.extractors.methods import TagMethod
from tagdocs.indexing.options import IndexOptions
from tagdocs.orchestrator import Orchestrator
from tests._fixtures.docs_tree import DocsTreeBuilder


def _config(tree_builder: DocsTreeBuilder, **overrides: object) -> TagDocsConfig:
    target = TargetConfig(
        cwd=tree_builder.path("src").resolve(),
        out_dir=tree_builder.path("docs").resolve(),
        patterns=["**/*.js"],
        create_index=True,
    )
    config = TagDocsConfig(
        root=tree_builder.path(),
        index=IndexOptions(excerpt=None),
        targets=[target],
    )
    for key, value in overrides.items():
        setattr(config, key, value)
    return config


def test_run_generates_documents_and_indexes(tree_builder: DocsTreeBuilder) -> None:
    tree_builder.write(
        {
            "src/a.js": "// <docs>Alpha docs.</docs>",
            "src/lib/b.js": "// <docs>Beta docs.</docs>",
            "src/lib/none.js": "const x = 1;",
        }
    )

    result = Orchestrator(_config(tree_builder)).run()

    assert result.success_count == 2
    assert result.total_count == 3
    assert result.missing_documentation_files == ("lib/none.js",)
    assert result.logs == (
        "targets[0]: Generated documentation file for a.js",
        "targets[0]: Generated documentation file for lib/b.js",
        "targets[0]: No documentation found in lib/none.js",
        "Finished. Success: 2 / Total: 3",
        "Found 1 file(s) with no documentation",
    )
    assert tree_builder.read("docs/a.md") == "Alpha docs."
    assert tree_builder.read("docs/lib/b.md") == "Beta docs."
    assert tree_builder.read("docs/index.md") == "- [a.md](a.md)\n- [lib/](lib/index.md)\n"
    assert tree_builder.read("docs/lib/index.md") == "- [b.md](b.md)\n"


def test_dry_run_writes_nothing(tree_builder: DocsTreeBuilder) -> None:
    tree_builder.write({"src/a.js": "// <docs>Alpha</docs>"})

    result = Orchestrator(_config(tree_builder, dry_run=True)).run()

    assert result.success_count == 1
    assert not tree_builder.path("docs").exists()


def test_missing_cwd_skips_target(tree_builder: DocsTreeBuilder) -> None:
    config = _config(tree_builder)

    result = Orchestrator(config).run()

    assert result.logs == (
        f"targets[0]: Cwd {tree_builder.path('src').resolve()} not found",
        "Finished. Success: 0 / Total: 0",
    )


def test_file_errors_are_logged_and_run_continues(tree_builder: DocsTreeBuilder) -> None:
    tree_builder.write({"src/a.js": "no docs", "src/b.js": "// <docs>Beta</docs>"})
    config = _config(tree_builder, extraction=[TagMethod(tag="docs", fatal=True)])

    result = Orchestrator(config).run()

    assert result.success_count == 1
    assert result.total_count == 2
    assert result.logs[0] == "Error: Content not found between tags"
    assert result.missing_documentation_count == 0
    assert tree_builder.read("docs/b.md") == "Beta"


def test_root_index_is_regenerated_with_its_template(tree_builder: DocsTreeBuilder) -> None:
    tree_builder.write(
        {
            "src/a.js": "// <docs>Alpha</docs>",
            "src/lib/b.js": "// <docs>Beta</docs>",
            "root.template.md": "# API\n\n%content%",
        }
    )
    config = _config(tree_builder)
    config.root_index = IndexOptions(template_path=tree_builder.path("root.template.md"), excerpt=None)

    Orchestrator(config).run()

    assert tree_builder.read("docs/index.md") == "# API\n\n- [a.md](a.md)\n- [lib/](lib/index.md)\n"
    assert tree_builder.read("docs/lib/index.md") == "- [b.md](b.md)\n"


def test_missing_index_template_is_logged(tree_builder: DocsTreeBuilder) -> None:
    tree_builder.write({"src/a.js": "// <docs>Alpha</docs>"})
    config = _config(tree_builder, index=IndexOptions(template_path=tree_builder.path("gone.md")))

    result = Orchestrator(config).run()

    assert result.success_count == 1
    assert any(line.startswith("Error: Template file not found") for line in result.logs)


def test_undecodable_markdown_in_index_pass_does_not_stop_later_targets(tree_builder: DocsTreeBuilder) -> None:
    tree_builder.write({"src/a.js": "// <docs>Alpha</docs>", "src2/b.js": "// <docs>Beta</docs>"})
    tree_builder.mkdir("docs")
    tree_builder.path("docs/legacy.md").write_bytes(b"Caf\xe9 notes here.")
    config = _config(tree_builder, index=IndexOptions())
    config.targets.append(
        TargetConfig(
            cwd=tree_builder.path("src2").resolve(),
            out_dir=tree_builder.path("docs2").resolve(),
            patterns=["**/*.js"],
            create_index=True,
        )
    )

    result = Orchestrator(config).run()

    assert result.success_count == 2
    assert any(line.startswith("Error: Cannot read") and "legacy.md" in line for line in result.logs)
    assert result.logs[-1] == "Finished. Success: 2 / Total: 2"
    assert tree_builder.read("docs2/index.md") == "- [b.md](b.md) - Beta.\n"


def test_symlinked_directory_outside_cwd_is_mirrored_by_link_name(
    tree_builder: DocsTreeBuilder, tmp_path: Path
) -> None:
    tree_builder.write({"src/a.js": "// <docs>Alpha</docs>"})
    outside = tmp_path / "shared"
    outside.mkdir()
    (outside / "b.js").write_text("// <docs>Shared</docs>", encoding="utf-8")
    tree_builder.path("src/linked").symlink_to(outside, target_is_directory=True)
    config = _config(tree_builder)
    config.targets[0].patterns = ["*.js", "*/*.js"]

    result = Orchestrator(config).run()

    assert result.success_count == 2
    assert "targets[0]: Generated documentation file for linked/b.js" in result.logs
    assert tree_builder.read("docs/linked/b.md") == "Shared"
