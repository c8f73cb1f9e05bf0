"""
Checks for complyscan.

Every rule runs as a Check. Declarative rules share one interpreter;
procedural rules name a handler from the closed registry of their scanner.
"""

from complyscan.checks.base import BaseCheck, Check
from complyscan.checks.declarative import DeclarativeCheck
from complyscan.checks.docs_adr import AdrIndexCompleteness, AdrNaming
from complyscan.checks.docs_content import (
    GlossaryAcronyms,
    GlossaryAlphabetized,
    GlossaryFormat,
    TldrRequired,
    TldrUnnecessary,
)
from complyscan.checks.docs_links import InternalLinksResolve, RelativeLinksResolve
from complyscan.checks.docs_naming import (
    DocsFilenamesLowercase,
    DocsFilenamesNoHyphens,
    DocsFilenamesNoSpaces,
    GuideNaming,
    TestingFilePlacement,
)
from complyscan.checks.docs_module import (
    ModuleDeploymentDocs,
    ModuleExamplesExist,
    ModuleReadmeW3h,
    ModuleTestsExist,
    ModuleToolchainDocs,
)
from complyscan.checks.docs_navigation import HubLinksPhases, NoDeepLinks, W3hHub
from complyscan.checks.docs_requirements import (
    Arch42010Sections,
    ProdReadinessExists,
    Srs29148Attributes,
    Test29119Sections,
)
from complyscan.checks.docs_structure import (
    ChecklistCompleteness,
    ModuleDocsNotBoth,
    ModuleDocsPlural,
    OpenSourceCommunityFiles,
    OpenSourceGithubTemplates,
    SdlcPhaseNumbering,
    SdlcPhaseOrder,
    TemplatesPopulated,
)
from complyscan.checks.docs_traceability import (
    BacklogTracesRequirements,
    DesignTracesRequirements,
    PhaseArtifactPresence,
    PlanTracesDesign,
)
from complyscan.checks.package import (
    DocsDirExists,
    InitFilesPresent,
    LicenseDeclared,
    NoTestsInPackage,
    PackageRootExists,
    PyTypedMarker,
    ScriptNamesValid,
    ScriptTargetsResolve,
    TestFilesNaming,
    TestFunctionsNamed,
    WorkspaceMembersExist,
)

# Procedural handlers available to the docs scanner
DOCS_HANDLERS: dict[str, type[BaseCheck]] = {
    # Structure
    "module_docs_plural": ModuleDocsPlural,
    "module_docs_not_both": ModuleDocsNotBoth,
    "sdlc_phase_numbering": SdlcPhaseNumbering,
    "sdlc_phase_order": SdlcPhaseOrder,
    "checklist_completeness": ChecklistCompleteness,
    "open_source_community_files": OpenSourceCommunityFiles,
    "open_source_github_templates": OpenSourceGithubTemplates,
    "templates_populated": TemplatesPopulated,
    # Naming
    "docs_filenames_lowercase": DocsFilenamesLowercase,
    "docs_filenames_no_hyphens": DocsFilenamesNoHyphens,
    "docs_filenames_no_spaces": DocsFilenamesNoSpaces,
    "guide_naming": GuideNaming,
    "testing_file_placement": TestingFilePlacement,
    # Content
    "tldr_required": TldrRequired,
    "tldr_unnecessary": TldrUnnecessary,
    "glossary_format": GlossaryFormat,
    "glossary_alphabetized": GlossaryAlphabetized,
    "glossary_acronyms": GlossaryAcronyms,
    # Navigation
    "w3h_hub": W3hHub,
    "hub_links_phases": HubLinksPhases,
    "no_deep_links": NoDeepLinks,
    # Cross references
    "internal_links_resolve": InternalLinksResolve,
    "relative_links_resolve": RelativeLinksResolve,
    # ADR
    "adr_naming": AdrNaming,
    "adr_index_completeness": AdrIndexCompleteness,
    # Traceability
    "phase_artifact_presence": PhaseArtifactPresence,
    "design_traces_requirements": DesignTracesRequirements,
    "plan_traces_design": PlanTracesDesign,
    "backlog_traces_requirements": BacklogTracesRequirements,
    # Modules
    "module_readme_w3h": ModuleReadmeW3h,
    "module_examples_exist": ModuleExamplesExist,
    "module_tests_exist": ModuleTestsExist,
    "module_toolchain_docs": ModuleToolchainDocs,
    "module_deployment_docs": ModuleDeploymentDocs,
    # Standards sections
    "srs_29148_attributes": Srs29148Attributes,
    "arch_42010_sections": Arch42010Sections,
    "test_29119_sections": Test29119Sections,
    "prod_readiness_exists": ProdReadinessExists,
}

# Procedural handlers available to the structure scanner
STRUCTURE_HANDLERS: dict[str, type[BaseCheck]] = {
    "package_root_exists": PackageRootExists,
    "license_declared": LicenseDeclared,
    "script_targets_resolve": ScriptTargetsResolve,
    "script_names_valid": ScriptNamesValid,
    "workspace_members_exist": WorkspaceMembersExist,
    "test_files_naming": TestFilesNaming,
    "test_functions_named": TestFunctionsNamed,
    "no_tests_in_package": NoTestsInPackage,
    "init_files_present": InitFilesPresent,
    "py_typed_marker": PyTypedMarker,
    "docs_dir_exists": DocsDirExists,
}

__all__ = [
    "BaseCheck",
    "Check",
    "DeclarativeCheck",
    "DOCS_HANDLERS",
    "STRUCTURE_HANDLERS",
]
