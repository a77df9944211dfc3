#!/usr/bin/env python3
"""Headless entry point for the icosphere generator."""

from __future__ import annotations

import logging
from pathlib import Path
import sys
from typing import Any, Dict, List

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from icomesh import generator, parameters


def configure_logging() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


def main() -> None:
    configure_logging()
    overrides, cli = parameters.parse_cli_overrides(_sanitized_args())
    config_path = _resolve_config_path(cli.config)
    try:
        params = parameters.load_parameters(config_path, overrides)
    except (KeyError, TypeError, ValueError) as exc:
        logging.error("Invalid parameters: %s", exc)
        sys.exit(2)
    logging.info(
        "Parameters: radius=%.3f subdivision=%d uv=%s",
        params.radius,
        params.subdivision,
        params.has_uv,
    )

    mesh = generator.generate_from_parameters(params)
    logging.info("Mesh summary: %s", mesh.summary())
    report = generator.validate_mesh(mesh)
    _log_validation_report(report)


def _sanitized_args() -> List[str]:
    return [arg for arg in sys.argv[1:] if arg not in {"--", "-"}]


def _default_config_path() -> str | None:
    candidate = REPO_ROOT / "configs" / "base.json"
    if candidate.exists():
        return str(candidate)
    return None


def _resolve_config_path(cli_config: str | None) -> str | None:
    if cli_config:
        path = Path(cli_config)
        if path.exists():
            return str(path)
        logging.warning("Config file %s not found; trying project default", path)
    default = _default_config_path()
    if default is None:
        logging.info("No configuration file; using built-in defaults")
    return default


def _log_validation_report(report: Dict[str, Any]) -> None:
    logging.info("Max vertex radius deviation: %.3g", report.get("max_radius_error", 0.0))
    logging.info("Max normal length deviation: %.3g", report.get("max_normal_error", 0.0))
    problems = sum(
        len(report.get(key, []))
        for key in ("out_of_range_indices", "inward_faces", "degenerate_faces", "uv_seam_violations")
    )
    if problems:
        logging.error("Validation found %d problems", problems)
    else:
        logging.info("Validation passed")


if __name__ == "__main__":
    main()
