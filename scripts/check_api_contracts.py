# This file compares the catalog API's OpenAPI document with the last accepted snapshot.
# A breaking change fails the check unless `API_SCHEMA_VERSION` was bumped; the
# snapshot is only replaced when the check passes, so a failing run keeps the baseline.
# ruff: noqa: E402

from __future__ import annotations

import argparse
import json
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from library_catalog.api.api_config import get_api_config
from library_catalog.api.app import app
from library_catalog.api.schema_versions import detect_breaking_schema_changes

CONTRACT_DIR = Path("reports/api/contract_checks")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check the catalog API contract for breaking changes")
    parser.add_argument("--snapshot", type=Path, default=CONTRACT_DIR / "latest_contract_snapshot.json")
    parser.add_argument("--report", type=Path, default=CONTRACT_DIR / "contract_diff_report.md")
    return parser.parse_args(argv)


def current_snapshot() -> dict[str, Any]:
    config = get_api_config()
    document = app.openapi()
    return {
        "api_prefix": config.api_prefix,
        "schema_version": config.schema_version,
        "app_version": config.app_version,
        "generated_at": datetime.now(tz=UTC).isoformat(),
        "paths": document.get("paths", {}),
        "components": document.get("components", {}),
    }


def _verdict(previous: dict[str, Any] | None, current: dict[str, Any], findings: list[str]) -> tuple[bool, str]:
    if previous is None:
        return True, "No previous snapshot existed; this run recorded the baseline."
    if not findings:
        return True, "No breaking API contract changes detected."
    if previous.get("schema_version") == current.get("schema_version"):
        return False, "Breaking contract changes detected without a schema version bump."
    return True, (
        f"Breaking changes accepted with schema version "
        f"{previous.get('schema_version')} -> {current.get('schema_version')}."
    )


def render_report(current: dict[str, Any], findings: list[str], summary: str) -> str:
    lines = [
        "# Catalog API Contract Report",
        "",
        f"Generated at: {current['generated_at']}",
        f"Prefix: `{current['api_prefix']}`  Schema version: `{current['schema_version']}`",
        "",
        summary,
        "",
        "## Findings",
        "",
    ]
    lines.extend(f"- {item}" for item in findings)
    if not findings:
        lines.append("None.")
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    current = current_snapshot()
    previous = json.loads(args.snapshot.read_text(encoding="utf-8")) if args.snapshot.exists() else None

    findings: list[str] = []
    if previous is not None:
        findings = detect_breaking_schema_changes(previous_snapshot=previous, current_snapshot=current)
    passed, summary = _verdict(previous, current, findings)

    args.report.parent.mkdir(parents=True, exist_ok=True)
    args.report.write_text(render_report(current, findings, summary), encoding="utf-8")
    if passed:
        args.snapshot.parent.mkdir(parents=True, exist_ok=True)
        args.snapshot.write_text(json.dumps(current, indent=2, sort_keys=True), encoding="utf-8")

    print(summary)
    for item in findings:
        print(f"- {item}")
    return 0 if passed else 1


if __name__ == "__main__":
    raise SystemExit(main())
