"""CLI utilities for developer workflows."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from jira_servicedesk.contracts import API_ROOT, ENDPOINT_COVERAGE


HTTP_METHODS = {"get", "post", "put", "patch", "delete", "head", "options", "trace"}

logger = logging.getLogger(__name__)


def _load_openapi(path: Path) -> set[str]:
    payload = json.loads(path.read_text())
    paths = payload.get("paths", {})
    discovered: set[str] = set()
    for route, operations in paths.items():
        if not route.startswith(API_ROOT):
            continue
        for method in operations:
            if not isinstance(method, str) or method.lower() not in HTTP_METHODS:
                continue
            discovered.add(f"{method.upper()} {route}")
    logger.info("Loaded %d service desk operations from %s", len(discovered), path)
    return discovered


def _diff_contracts(discovered: set[str], contract: dict[str, str]) -> tuple[list[str], list[str]]:
    expected = set(contract)
    missing = sorted(expected - discovered)
    extra = sorted(discovered - expected)
    return missing, extra


def logging_conf(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )


def _main() -> int:
    parser = argparse.ArgumentParser(
        description="Compare the client's endpoint coverage with a Service Desk OpenAPI document.",
    )
    parser.add_argument("--openapi", required=True, type=Path)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()
    logging_conf(args.verbose)

    discovered = _load_openapi(args.openapi)
    missing, extra = _diff_contracts(discovered, ENDPOINT_COVERAGE)

    if missing:
        print("Missing endpoints in OpenAPI for covered client methods:")
        for endpoint in missing:
            method = ENDPOINT_COVERAGE[endpoint]
            print(f"  - {endpoint} ({method})")

    if extra:
        print("OpenAPI endpoints not represented in client coverage map:")
        for endpoint in extra:
            print(f"  - {endpoint}")

    if missing or extra:
        print("Contract coverage check failed")
        return 1

    print("Contract coverage check passed")
    return 0


def main() -> None:
    raise SystemExit(_main())
