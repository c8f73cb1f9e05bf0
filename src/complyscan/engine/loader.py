"""
Rule loader.

Parses a rule document (the embedded catalogue or a user override) into
validated RuleDefinitions and resolves each one to a runnable Check. All
problems surface here as ScanConfigError, before any check runs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from complyscan.catalogues import catalogue_name, read_catalogue
from complyscan.checks import DOCS_HANDLERS, STRUCTURE_HANDLERS, BaseCheck, Check, DeclarativeCheck
from complyscan.domain.config import ScannerKind
from complyscan.domain.exceptions import ScanConfigError
from complyscan.domain.rules import KIND_TAGS, Builtin, RuleDefinition

logger = logging.getLogger(__name__)

# Record keys that belong to the rule rather than to its matcher
RULE_FIELDS = frozenset(
    {"id", "category", "description", "severity", "project_type", "project_kind", "scope", "fix_hint"}
)


def handlers_for(scanner: ScannerKind | str) -> dict[str, type[BaseCheck]]:
    """The closed procedural handler registry of a scanner."""
    return STRUCTURE_HANDLERS if ScannerKind(scanner) is ScannerKind.STRUCTURE else DOCS_HANDLERS


def load_rules(
    scanner: ScannerKind | str = ScannerKind.DOCS,
    rules_path: Path | str | None = None,
) -> list[RuleDefinition]:
    """
    Load the rules for a scan.

    Args:
        scanner: Scanner whose default catalogue and handlers apply.
        rules_path: Rule document replacing the default catalogue entirely.

    Returns:
        Rules in document order.

    Raises:
        ScanConfigError: If the document cannot be read, parsed or validated.
    """
    scanner = ScannerKind(scanner)
    if rules_path is None:
        source = f"<builtin:{catalogue_name(scanner.value)}>"
        content = read_catalogue(scanner.value)
    else:
        path = Path(rules_path)
        source = str(path)
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ScanConfigError(f"Rules file not found: {path}", source=source)
        except (OSError, UnicodeDecodeError) as e:
            raise ScanConfigError(f"Error reading rules file {path}: {e}", source=source)

    rules = parse_rules(content, source=source, handlers=handlers_for(scanner))
    logger.debug("Loaded %d rules from %s", len(rules), source)
    return rules


def parse_rules(
    content: str,
    source: str = "<string>",
    handlers: dict[str, type[BaseCheck]] | None = None,
) -> list[RuleDefinition]:
    """
    Parse a YAML rule document.

    The document is either a mapping with a ``rules`` list or a bare list of
    rule records.
    """
    handlers = DOCS_HANDLERS if handlers is None else handlers

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ScanConfigError(f"Invalid YAML in {source}: {e}", source=source)

    if isinstance(data, dict):
        if "rules" not in data:
            raise ScanConfigError(f"{source} has no 'rules' list", source=source)
        data = data["rules"]
    if not isinstance(data, list):
        raise ScanConfigError(
            f"{source} must contain a list of rules, got {type(data).__name__}", source=source
        )

    rules: list[RuleDefinition] = []
    seen: set[int] = set()
    for index, record in enumerate(data, start=1):
        rule = _parse_record(record, index, source, handlers)
        if rule.id in seen:
            raise ScanConfigError(
                f"Duplicate rule id {rule.id} in {source}", source=source, rule_id=rule.id
            )
        seen.add(rule.id)
        rules.append(rule)
    return rules


def _parse_record(
    record: Any,
    index: int,
    source: str,
    handlers: dict[str, type[BaseCheck]],
) -> RuleDefinition:
    if not isinstance(record, dict):
        raise ScanConfigError(f"Rule #{index} in {source} is not a mapping", source=source)

    rule_id = record.get("id")
    label = f"Rule {rule_id}" if rule_id is not None else f"Rule #{index}"

    kind_type = record.get("type")
    if not kind_type:
        raise ScanConfigError(
            f"{label} in {source}: missing required field 'type'", source=source, rule_id=rule_id
        )

    if not isinstance(kind_type, str):
        raise ScanConfigError(
            f"{label} in {source}: 'type' must be a string", source=source, rule_id=rule_id
        )
    if kind_type == "builtin" and not isinstance(record.get("handler"), str):
        raise ScanConfigError(
            f"{label} in {source}: 'handler' must be a string", source=source, rule_id=rule_id
        )

    kind: dict[str, Any] = {k: v for k, v in record.items() if k not in RULE_FIELDS}
    if kind_type not in KIND_TAGS:
        # A handler name used directly as the type
        kind = {"type": "builtin", "handler": kind_type}
    if kind["type"] == "builtin" and kind.get("handler") not in handlers:
        raise ScanConfigError(
            f"{label} in {source}: unknown rule type or handler '{kind.get('handler', kind_type)}'",
            source=source,
            rule_id=rule_id,
        )

    fields = {k: v for k, v in record.items() if k in RULE_FIELDS}
    if isinstance(fields.get("project_type"), str):
        fields["project_type"] = fields["project_type"].replace("-", "_")

    try:
        return RuleDefinition(**fields, kind=kind)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'] if p != kind['type'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ScanConfigError(
            f"{label} in {source}: {problems}", source=source, rule_id=rule_id
        )


def build_registry(
    rules: list[RuleDefinition],
    handlers: dict[str, type[BaseCheck]] | None = None,
) -> list[Check]:
    """
    Resolve every rule to a runnable check, once.

    Raises:
        ScanConfigError: If a builtin rule names a handler the registry lacks.
    """
    handlers = DOCS_HANDLERS if handlers is None else handlers
    checks: list[Check] = []
    for rule in rules:
        if isinstance(rule.kind, Builtin):
            handler = handlers.get(rule.kind.handler)
            if handler is None:
                raise ScanConfigError(
                    f"Rule {rule.id}: unknown handler '{rule.kind.handler}'", rule_id=rule.id
                )
            checks.append(handler(rule))
        else:
            checks.append(DeclarativeCheck(rule))
    return checks
