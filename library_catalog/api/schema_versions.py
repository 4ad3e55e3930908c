# This file holds the version metadata attached to operational responses and the
# contract comparison used by `scripts/check_api_contracts.py`.
# A finding is anything that could break an existing client: a vanished route or
# verb, a dropped response property, or a field that became mandatory.

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


def build_version_fields(*, schema_version: str, app_version: str) -> dict[str, str]:
    """Version block merged into `/health`, `/ready`, and `/version` bodies."""

    return {"schema_version": schema_version, "app_version": app_version}


def _route_findings(previous: dict[str, Any], current: dict[str, Any]) -> Iterator[str]:
    for path in sorted(previous):
        if path not in current:
            yield f"Removed API path: {path}"
            continue
        for verb in sorted(set(previous[path]) - set(current[path])):
            yield f"Removed method {verb.upper()} on {path}"


def _component_findings(name: str, before: dict[str, Any], after: dict[str, Any] | None) -> Iterator[str]:
    if after is None:
        yield f"Removed schema component: {name}"
        return
    kept_properties = after.get("properties", {})
    for prop in sorted(before.get("properties", {})):
        if prop not in kept_properties:
            yield f"Schema {name} removed property: {prop}"
    newly_required = set(after.get("required", [])) - set(before.get("required", []))
    for field in sorted(newly_required):
        yield f"Schema {name} now requires field: {field}"


def detect_breaking_schema_changes(
    *,
    previous_snapshot: dict[str, Any],
    current_snapshot: dict[str, Any],
) -> list[str]:
    """List client-visible contract breaks between two OpenAPI snapshots."""

    findings = list(_route_findings(previous_snapshot.get("paths", {}), current_snapshot.get("paths", {})))

    before_components = previous_snapshot.get("components", {}).get("schemas", {})
    after_components = current_snapshot.get("components", {}).get("schemas", {})
    for name, before in before_components.items():
        findings.extend(_component_findings(name, before, after_components.get(name)))
    return findings
