"""
Unit tests for the procedural documentation checks.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from complyscan.checks import DOCS_HANDLERS, BaseCheck
from complyscan.checks.docs_links import _LinkCheck
from complyscan.checks.docs_navigation import _DocumentCheck, heading_mentions
from complyscan.domain.models import FailResult, PassResult, SkipResult


@pytest.fixture
def run_handler(
    make_project: Callable[..., Path],
    make_rule: Callable[..., Any],
    make_context: Callable[..., Any],
) -> Callable[..., Any]:
    """Run a docs handler by name against a project built from files."""
    calls = itertools.count()

    def _run(handler: str, files: dict[str, str] | None = None, **context_fields: Any):
        root = make_project(files or {}, name=f"project-{next(calls)}")
        check = DOCS_HANDLERS[handler](make_rule({"type": "builtin", "handler": handler}))
        return check.run(make_context(root, **context_fields))

    return _run


def _messages(result: Any) -> list[str]:
    return [v.message for v in result.violations]


class TestModuleDocs:
    """Tests for module doc folder conventions."""

    def test_singular_doc_folder(self, run_handler: Callable[..., Any]) -> None:
        """A module doc/ folder should fail."""
        result = run_handler("module_docs_plural", {"modules/core/doc/a.md": ""})
        assert _messages(result) == ["Module 'modules/core' uses doc/ (singular); should use docs/"]

    def test_root_doc_not_a_module(self, run_handler: Callable[..., Any]) -> None:
        """The root's own doc/ folder belongs to another rule."""
        assert isinstance(run_handler("module_docs_plural", {"doc/a.md": ""}), PassResult)

    def test_both_folders(self, run_handler: Callable[..., Any]) -> None:
        """A module with doc/ and docs/ should fail."""
        result = run_handler(
            "module_docs_not_both", {"pkg/doc/a.md": "", "pkg/docs/b.md": "", "other/docs/c.md": ""}
        )
        assert _messages(result) == ["Module 'pkg' has both doc/ and docs/"]


class TestSdlcPhases:
    """Tests for phase directory numbering."""

    def test_numbering_limit(self, run_handler: Callable[..., Any]) -> None:
        """Phase numbers above 7 should fail."""
        result = run_handler(
            "sdlc_phase_numbering", {"docs/1-requirements/": "", "docs/8-extra/": ""}
        )
        assert _messages(result) == ["Phase directory '8-extra' has number > 7"]

    def test_numbering_without_docs(self, run_handler: Callable[..., Any]) -> None:
        """Without docs/ the rule skips."""
        assert isinstance(run_handler("sdlc_phase_numbering"), SkipResult)

    def test_duplicate_phase_numbers(self, run_handler: Callable[..., Any]) -> None:
        """Two phases sharing a number are out of order."""
        result = run_handler(
            "sdlc_phase_order", {"docs/1-design/": "", "docs/1-requirements/": "", "docs/2-x/": ""}
        )
        assert _messages(result) == ["Phase '1-requirements' is out of order (follows '1-design')"]

    def test_ordered_phases(self, run_handler: Callable[..., Any]) -> None:
        """Gaps are allowed as long as numbers increase."""
        result = run_handler("sdlc_phase_order", {"docs/0-planning/": "", "docs/3-design/": ""})
        assert isinstance(result, PassResult)


class TestChecklist:
    """Tests for checklist_completeness."""

    def test_enough_checkboxes(self, run_handler: Callable[..., Any]) -> None:
        """Ten or more checkboxes should pass."""
        content = "".join(f"- [{'x' if i % 2 else ' '}] item {i}\n" for i in range(10))
        files = {"docs/3-design/compliance/compliance_checklist.md": content}
        assert isinstance(run_handler("checklist_completeness", files), PassResult)

    def test_too_few_checkboxes(self, run_handler: Callable[..., Any]) -> None:
        """Fewer than ten checkboxes should fail."""
        files = {"docs/3-design/compliance/compliance_checklist.md": "- [ ] one\n- [X] two\n"}
        result = run_handler("checklist_completeness", files)
        assert _messages(result) == [
            "Checklist has only 2 checkboxes; expected comprehensive coverage"
        ]

    def test_missing_checklist(self, run_handler: Callable[..., Any]) -> None:
        """A missing checklist skips."""
        assert isinstance(run_handler("checklist_completeness"), SkipResult)


class TestCommunity:
    """Tests for open source community files."""

    def test_community_files(self, run_handler: Callable[..., Any]) -> None:
        """Each missing community file is a violation."""
        result = run_handler("open_source_community_files", {"SUPPORT.md": ""})
        assert _messages(result) == ["CODE_OF_CONDUCT.md does not exist"]

    def test_github_templates(self, run_handler: Callable[..., Any]) -> None:
        """Issue and pull request templates are both required."""
        assert isinstance(
            run_handler(
                "open_source_github_templates",
                {".github/ISSUE_TEMPLATE/bug.md": "", ".github/PULL_REQUEST_TEMPLATE.md": ""},
            ),
            PassResult,
        )
        result = run_handler("open_source_github_templates")
        assert len(result.violations) == 2

    def test_templates_populated(self, run_handler: Callable[..., Any]) -> None:
        """An empty docs/templates/ fails; a missing one skips."""
        assert isinstance(run_handler("templates_populated", {"docs/templates/": ""}), FailResult)
        assert isinstance(run_handler("templates_populated"), SkipResult)
        assert isinstance(
            run_handler("templates_populated", {"docs/templates/adr.md": ""}), PassResult
        )


class TestModuleReadme:
    """Tests for module_readme_w3h."""

    def test_missing_sections(self, run_handler: Callable[..., Any]) -> None:
        """Module READMEs need what, why and how headings."""
        files = {
            "modules/core/pyproject.toml": "",
            "modules/core/docs/README.md": "# Core\n\n## What\n",
            "modules/cli/pyproject.toml": "",
            "modules/cli/docs/README.md": "## What\n## Why\n## How\n",
        }
        result = run_handler("module_readme_w3h", files)
        assert _messages(result) == ["Module 'core' README missing W3H sections: why, how"]

    def test_module_filter(self, run_handler: Callable[..., Any]) -> None:
        """Only the configured modules are inspected."""
        files = {
            "modules/core/pyproject.toml": "",
            "modules/core/docs/README.md": "# Core\n",
        }
        assert isinstance(run_handler("module_readme_w3h", files, modules=["cli"]), PassResult)


class TestFilenames:
    """Tests for docs filename conventions."""

    def test_lowercase(self, run_handler: Callable[..., Any]) -> None:
        """Upper-case names fail except conventional files and ADRs."""
        files = {
            "docs/README.md": "",
            "docs/Setup.md": "",
            "docs/3-design/adr/001-Use-X.md": "",
        }
        result = run_handler("docs_filenames_lowercase", files)
        assert [v.path for v in result.violations] == ["docs/Setup.md"]

    def test_no_hyphens(self, run_handler: Callable[..., Any]) -> None:
        """Hyphens fail unless they follow a phase number."""
        files = {"docs/1-requirements.md": "", "docs/user-guide.md": ""}
        result = run_handler("docs_filenames_no_hyphens", files)
        assert _messages(result) == ["Filename 'user-guide.md' contains hyphens; use underscores"]

    def test_no_spaces(self, run_handler: Callable[..., Any]) -> None:
        """Spaces in names fail."""
        result = run_handler("docs_filenames_no_spaces", {"docs/my notes.md": ""})
        assert _messages(result) == ["Filename 'my notes.md' contains spaces"]

    def test_no_markdown_skips(self, run_handler: Callable[..., Any]) -> None:
        """With no markdown under docs/ the naming rules skip."""
        assert isinstance(run_handler("docs_filenames_no_spaces"), SkipResult)

    def test_guide_naming(self, run_handler: Callable[..., Any]) -> None:
        """Guides follow name_{phase}_guide.md."""
        files = {
            "docs/guide/README.md": "",
            "docs/guide/setup_dev_guide.md": "",
            "docs/guide/Setup.md": "",
        }
        result = run_handler("guide_naming", files)
        assert [v.path for v in result.violations] == ["docs/guide/Setup.md"]

    def test_testing_file_placement(self, run_handler: Callable[..., Any]) -> None:
        """Testing documents belong in 5-testing/."""
        files = {
            "docs/5-testing/unit_testing_plan.md": "",
            "docs/3-design/load_testing_notes.md": "",
        }
        result = run_handler("testing_file_placement", files)
        assert [v.path for v in result.violations] == ["docs/3-design/load_testing_notes.md"]


class TestTldr:
    """Tests for TLDR requirements."""

    def test_long_file_needs_tldr(self, run_handler: Callable[..., Any]) -> None:
        """Files of 200 lines or more need a TLDR."""
        long_doc = "line\n" * 200
        result = run_handler("tldr_required", {"docs/long.md": long_doc})
        assert _messages(result) == ["File has 200 lines but no TLDR section"]
        with_tldr = "## TLDR\n" + "line\n" * 250
        assert isinstance(run_handler("tldr_required", {"docs/long.md": with_tldr}), PassResult)

    def test_short_file_tldr_unnecessary(self, run_handler: Callable[..., Any]) -> None:
        """Short files with a TLDR are flagged."""
        result = run_handler("tldr_unnecessary", {"docs/short.md": "**TLDR** tiny\n"})
        assert _messages(result) == [
            "File has only 1 lines but has a TLDR section (unnecessary)"
        ]


class TestGlossary:
    """Tests for glossary checks."""

    def test_format(self, run_handler: Callable[..., Any]) -> None:
        """Terms must be followed by a separator and a definition."""
        glossary = "# Glossary\n\n**API** - Application programming interface\n**Bad** no dash\n"
        result = run_handler("glossary_format", {"docs/glossary.md": glossary})
        assert _messages(result) == [
            "Line 4: Term definition doesn't follow '**Term** - Definition' format"
        ]

    def test_alphabetized(self, run_handler: Callable[..., Any]) -> None:
        """Terms should be sorted case-insensitively."""
        glossary = "**beta** - b\n**Alpha** - a\n**gamma** - g\n"
        result = run_handler("glossary_alphabetized", {"docs/glossary.md": glossary})
        assert _messages(result) == ["Term 'alpha' should come before 'beta'"]

    def test_acronyms(self, run_handler: Callable[..., Any]) -> None:
        """Acronyms need a written-out expansion."""
        glossary = "**API** - Application programming interface\n**SDK** - SDK\n"
        result = run_handler("glossary_acronyms", {"docs/glossary.md": glossary})
        assert _messages(result) == ["Line 2: Acronym 'SDK' lacks expansion in definition"]

    def test_missing_glossary(self, run_handler: Callable[..., Any]) -> None:
        """Glossary rules skip without a glossary."""
        assert isinstance(run_handler("glossary_format"), SkipResult)


class TestNavigation:
    """Tests for the hub and README navigation checks."""

    def test_heading_mentions(self) -> None:
        """Keywords are found in level 1-3 headings only."""
        assert heading_mentions("## Why this exists\n", "why")
        assert not heading_mentions("why\n", "why")

    def test_w3h_hub(self, run_handler: Callable[..., Any]) -> None:
        """The hub should mention who, what, why and how."""
        result = run_handler("w3h_hub", {"docs/README.md": "# Hub\n\n## What\n**who** uses it\n"})
        assert _messages(result) == ["Hub document missing W3H sections: why, how"]

    def test_hub_links_phases(self, run_handler: Callable[..., Any]) -> None:
        """Every phase directory should be linked from the hub."""
        files = {
            "docs/README.md": "- [Req](1-requirements/)\n",
            "docs/1-requirements/srs.md": "",
            "docs/2-planning/plan.md": "",
        }
        result = run_handler("hub_links_phases", files)
        assert _messages(result) == ["Hub does not link to phase directory '2-planning'"]

    def test_hub_missing_skips(self, run_handler: Callable[..., Any]) -> None:
        """Hub rules skip without a hub."""
        result = run_handler("w3h_hub")
        assert isinstance(result, SkipResult)
        assert result.reason == "docs/README.md not found"

    def test_no_deep_links(self, run_handler: Callable[..., Any]) -> None:
        """The root README links the hub, not phase pages."""
        readme = "See [docs](docs/README.md)\nand [srs](docs/1-requirements/srs.md)\n"
        result = run_handler("no_deep_links", {"README.md": readme})
        assert _messages(result) == ["Line 2: Root README deep-links into docs/ subdirectory"]


class TestLinks:
    """Tests for link resolution."""

    def test_internal_links(self, run_handler: Callable[..., Any]) -> None:
        """Links to missing markdown files fail; anchors and URLs are ignored."""
        files = {
            "docs/README.md": (
                "[ok](guide.md#setup)\n[gone](missing.md)\n"
                "[web](https://example.com/x.md)\n[anchor](#top)\n[root](/README.md)\n"
            ),
            "docs/guide.md": "",
            "README.md": "",
        }
        result = run_handler("internal_links_resolve", files)
        assert _messages(result) == ["Broken link: 'missing.md' does not exist"]

    def test_relative_links(self, run_handler: Callable[..., Any]) -> None:
        """Relative links to any missing target fail."""
        files = {
            "docs/1-requirements/srs.md": "[img](../assets/diagram.png)\n[up](../README.md)\n",
            "docs/README.md": "",
        }
        result = run_handler("relative_links_resolve", files)
        assert _messages(result) == ["Broken relative link: '../assets/diagram.png' does not exist"]


class TestAdr:
    """Tests for architecture decision records."""

    def test_adr_naming(self, run_handler: Callable[..., Any]) -> None:
        """ADR files follow NNN-title.md; the index is exempt."""
        files = {
            "docs/3-design/adr/README.md": "",
            "docs/3-design/adr/001-use-yaml.md": "",
            "docs/3-design/adr/decision.md": "",
        }
        result = run_handler("adr_naming", files)
        assert [v.path for v in result.violations] == ["docs/3-design/adr/decision.md"]

    def test_adr_naming_no_dir(self, run_handler: Callable[..., Any]) -> None:
        """Without an ADR directory the rule skips."""
        assert isinstance(run_handler("adr_naming"), SkipResult)

    def test_adr_index(self, run_handler: Callable[..., Any]) -> None:
        """Every numbered ADR must appear in the index."""
        files = {
            "docs/3-design/adr/README.md": "- [001](001-use-yaml.md)\n",
            "docs/3-design/adr/001-use-yaml.md": "",
            "docs/3-design/adr/002-drop-toml.md": "",
        }
        result = run_handler("adr_index_completeness", files)
        assert _messages(result) == ["ADR '002-drop-toml.md' not referenced in index"]


class TestModuleFolders:
    """Tests for per-module examples, tests, toolchain and deployment docs."""

    MODULE = {"crates/auth/Cargo.toml": "[package]\n"}

    def test_no_modules_passes(self, run_handler: Callable[..., Any]) -> None:
        """Projects without modules pass vacuously."""
        for handler in (
            "module_examples_exist",
            "module_tests_exist",
            "module_toolchain_docs",
            "module_deployment_docs",
        ):
            assert isinstance(run_handler(handler, {"README.md": ""}), PassResult)

    def test_examples(self, run_handler: Callable[..., Any]) -> None:
        """A module needs at least one file directly in examples/."""
        result = run_handler("module_examples_exist", {**self.MODULE, "crates/auth/examples/": ""})
        assert _messages(result) == ["Module 'auth' missing examples/ directory with files"]
        assert result.violations[0].path == "crates/auth/examples"
        files = {**self.MODULE, "crates/auth/examples/basic.py": ""}
        assert isinstance(run_handler("module_examples_exist", files), PassResult)

    def test_tests(self, run_handler: Callable[..., Any]) -> None:
        """A module needs at least one file directly in tests/."""
        assert isinstance(run_handler("module_tests_exist", self.MODULE), FailResult)
        files = {**self.MODULE, "crates/auth/tests/test_login.py": ""}
        assert isinstance(run_handler("module_tests_exist", files), PassResult)

    def test_toolchain(self, run_handler: Callable[..., Any]) -> None:
        """Modules document their toolchain."""
        result = run_handler("module_toolchain_docs", self.MODULE)
        assert _messages(result) == ["Module 'auth' missing docs/3-design/toolchain.md"]
        files = {**self.MODULE, "crates/auth/docs/3-design/toolchain.md": "# Toolchain\n"}
        assert isinstance(run_handler("module_toolchain_docs", files), PassResult)

    def test_deployment_incomplete(self, run_handler: Callable[..., Any]) -> None:
        """Each missing deployment file is one violation."""
        files = {**self.MODULE, "crates/auth/docs/6-deployment/README.md": "# Deploy\n"}
        result = run_handler("module_deployment_docs", files)
        assert _messages(result) == [
            "Module 'auth' deployment directory missing prerequisites.md",
            "Module 'auth' deployment directory missing installation.md",
        ]

    def test_deployment_folder_optional(self, run_handler: Callable[..., Any]) -> None:
        """Modules without docs/6-deployment/ are not inspected."""
        assert isinstance(run_handler("module_deployment_docs", self.MODULE), PassResult)


class TestTraceability:
    """Tests for cross-phase traceability checks."""

    def test_phase_artifacts_present(self, run_handler: Callable[..., Any]) -> None:
        """Each existing phase holds its expected artifact."""
        files = {
            "docs/1-requirements/srs.md": "",
            "docs/2-planning/implementation_plan.md": "",
            "docs/3-design/architecture.md": "",
        }
        assert isinstance(run_handler("phase_artifact_presence", files), PassResult)

    def test_phase_artifact_missing(self, run_handler: Callable[..., Any]) -> None:
        """A phase directory without its artifact fails."""
        files = {"docs/2-planning/README.md": "", "docs/3-design/architecture.md": ""}
        result = run_handler("phase_artifact_presence", files)
        assert _messages(result) == [
            "Phase directory 'docs/2-planning' exists but is missing expected artifact "
            "containing 'plan' or 'implementation'"
        ]

    def test_phase_artifacts_no_phases(self, run_handler: Callable[..., Any]) -> None:
        """Without phase directories the rule skips."""
        result = run_handler("phase_artifact_presence", {"docs/README.md": ""})
        assert isinstance(result, SkipResult)
        assert result.reason == "No SDLC phase directories exist"

    def test_design_traces_requirements(self, run_handler: Callable[..., Any]) -> None:
        """Design documents must reference requirements; ADRs and the hub are exempt."""
        files = {
            "docs/3-design/README.md": "# Design\n",
            "docs/3-design/architecture.md": "# Architecture\n\nImplements FR-001.\n",
            "docs/3-design/data_model.md": "# Data model\n",
            "docs/3-design/adr/001-use-yaml.md": "# Use YAML\n",
        }
        result = run_handler("design_traces_requirements", files)
        assert [v.path for v in result.violations] == ["docs/3-design/data_model.md"]

    def test_design_traces_skips(self, run_handler: Callable[..., Any]) -> None:
        """No design directory or no qualifying files means skip."""
        assert isinstance(run_handler("design_traces_requirements"), SkipResult)
        files = {"docs/3-design/README.md": "# Design\n"}
        result = run_handler("design_traces_requirements", files)
        assert result.reason == "No qualifying .md files in docs/3-design/"

    def test_plan_traces_design(self, run_handler: Callable[..., Any]) -> None:
        """Planning documents must reference the architecture."""
        files = {
            "docs/2-planning/implementation_plan.md": "Follows docs/3-design/architecture.md\n",
            "docs/2-planning/roadmap.md": "# Roadmap\n",
        }
        result = run_handler("plan_traces_design", files)
        assert _messages(result) == [
            "Planning document 'docs/2-planning/roadmap.md' does not reference architecture "
            "(expected pattern: architecture.md, 3-design, or architectural)"
        ]

    def test_backlog_traces_requirements(self, run_handler: Callable[..., Any]) -> None:
        """The backlog must reference requirements."""
        backlog = "docs/2-planning/backlog.md"
        assert isinstance(run_handler("backlog_traces_requirements"), SkipResult)
        assert isinstance(
            run_handler("backlog_traces_requirements", {backlog: "- BL-1 login\n"}), PassResult
        )
        result = run_handler("backlog_traces_requirements", {backlog: "- tidy up\n"})
        assert result.violations[0].path == backlog


class TestStandardsSections:
    """Tests for the standards section checks."""

    SRS = "docs/1-requirements/srs.md"

    def test_srs_missing_fails(self, run_handler: Callable[..., Any]) -> None:
        """A missing SRS is a violation, not a skip."""
        result = run_handler("srs_29148_attributes")
        assert _messages(result) == ["File 'docs/1-requirements/srs.md' does not exist"]

    def test_srs_attributes(self, run_handler: Callable[..., Any]) -> None:
        """Each FR/NFR block is checked for the five attributes."""
        content = (
            "# SRS\n\n"
            "#### FR-001: Login\n\n"
            "| **Priority** | Must |\n| **State** | Approved |\n"
            "| **Verification** | Test |\n| **Traces to** | STK-01 |\n"
            "| **Acceptance** | Works |\n\n"
            "#### NFR-002: Speed\n\n"
            "| **Priority** | Should |\n| **Traceability** | STK-02 |\n| **Acceptance** | Fast |\n\n"
            "## Appendix\n\n**State** stray text outside any block\n"
        )
        result = run_handler("srs_29148_attributes", {self.SRS: content})
        assert _messages(result) == ["NFR-002 missing State, Verification attributes"]

    def test_srs_single_missing_attribute(self, run_handler: Callable[..., Any]) -> None:
        """A single missing attribute is reported in the singular."""
        content = (
            "#### FR-003: Export\n"
            "**Priority** **State** **Verification** **Traces to**\n"
        )
        result = run_handler("srs_29148_attributes", {self.SRS: content})
        assert _messages(result) == ["FR-003 missing Acceptance attribute"]

    def test_srs_without_blocks_skips(self, run_handler: Callable[..., Any]) -> None:
        """An SRS without requirement blocks skips."""
        result = run_handler("srs_29148_attributes", {self.SRS: "# SRS\n\nTBD\n"})
        assert isinstance(result, SkipResult)

    def test_arch_sections(self, run_handler: Callable[..., Any]) -> None:
        """Project and module architecture documents are both inspected."""
        files = {
            "docs/3-design/architecture.md": "## Stakeholders\n## Rationale\n## Viewpoints\n",
            "modules/api/pyproject.toml": "",
            "modules/api/docs/3-design/architecture.md": "## Stakeholders\n",
        }
        result = run_handler("arch_42010_sections", files)
        assert _messages(result) == [
            "Module 'api' architecture missing 42010 sections: Concerns/rationale, Viewpoints/views"
        ]
        assert result.violations[0].path == "modules/api/docs/3-design/architecture.md"

    def test_arch_project_level(self, run_handler: Callable[..., Any]) -> None:
        """The project document uses its own label."""
        files = {"docs/3-design/architecture.md": "# Architecture\n\n## Who\n## Why\n"}
        result = run_handler("arch_42010_sections", files)
        assert _messages(result) == ["Architecture document missing 42010 section: Viewpoints/views"]

    def test_arch_empty_or_absent_skips(self, run_handler: Callable[..., Any]) -> None:
        """Empty and absent documents are ignored, leaving nothing to inspect."""
        result = run_handler("arch_42010_sections", {"docs/3-design/architecture.md": "  \n"})
        assert isinstance(result, SkipResult)
        assert result.reason == "No architecture.md files found (project or module level)"

    def test_testing_strategy_sections(self, run_handler: Callable[..., Any]) -> None:
        """The testing strategy covers strategy, cases and coverage."""
        path = "docs/5-testing/testing_strategy.md"
        complete = "## Test strategy\n## Test pyramid\n## Coverage targets\n"
        assert isinstance(run_handler("test_29119_sections", {path: complete}), PassResult)
        result = run_handler("test_29119_sections", {path: "## Test strategy\n"})
        assert _messages(result) == [
            "Testing strategy missing 29119-3 sections: Test cases/categories, Coverage/criteria"
        ]

    def test_prod_readiness(self, run_handler: Callable[..., Any]) -> None:
        """The production readiness review must exist."""
        result = run_handler("prod_readiness_exists")
        assert _messages(result) == ["Production readiness document does not exist"]
        files = {"docs/6-deployment/production_readiness.md": "# Readiness\n"}
        assert isinstance(run_handler("prod_readiness_exists", files), PassResult)


class TestCheckBases:
    """Tests for the abstract check bases."""

    def test_bases_not_instantiable(self, make_rule: Callable[..., Any]) -> None:
        """Bases without their hook cannot be instantiated."""
        rule = make_rule({"type": "builtin", "handler": "w3h_hub"})
        for base in (BaseCheck, _DocumentCheck, _LinkCheck):
            with pytest.raises(TypeError):
                base(rule)

    def test_every_handler_instantiable(self, make_rule: Callable[..., Any]) -> None:
        """Every registered handler implements its hooks."""
        for name, handler in DOCS_HANDLERS.items():
            assert handler(make_rule({"type": "builtin", "handler": name})).rule.handler == name
