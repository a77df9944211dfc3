"""Configuration stack for the icosphere generator.

Parameters are resolved in two layers ordered from lowest to highest
precedence:

1. JSON file (optional) — persistent project configuration.
2. CLI overrides — runtime tweaks for headless runs.

The defaults match a fresh icosphere asset: unit radius, two subdivision
levels, no UVs.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple
import json
import logging
import math
import numbers

__all__ = [
    "IcosphereParameters",
    "load_json_config",
    "apply_overrides",
    "parse_cli_overrides",
    "load_parameters",
]


@dataclass(slots=True)
class IcosphereParameters:
    """Canonical set of adjustable icosphere parameters."""

    radius: float = 1.0
    subdivision: int = 2  # 1 keeps the bare icosahedron
    has_uv: bool = False  # UVs force the duplicated-vertex layout

    # Triangle count grows as 20 * 4^(subdivision - 1); cap it to bound memory.
    max_subdivision: int = 8

    def validate(self) -> None:
        if not (math.isfinite(self.radius) and self.radius > 0):
            raise ValueError("Radius must be positive")
        if isinstance(self.subdivision, bool) or not isinstance(self.subdivision, numbers.Integral):
            raise TypeError("Subdivision must be an integer")
        if self.subdivision < 1:
            raise ValueError("Subdivision must be at least 1")
        if self.max_subdivision < 1:
            raise ValueError("Maximum subdivision must be at least 1")
        if self.subdivision > self.max_subdivision:
            raise ValueError(
                f"Subdivision {self.subdivision} exceeds the limit of {self.max_subdivision}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IcosphereParameters":
        base = cls()
        merged = {**asdict(base), **data}
        unknown = set(merged) - set(asdict(base))
        if unknown:
            raise KeyError(f"Unknown parameter(s): {', '.join(sorted(unknown))}")
        params = cls(**merged)
        params.validate()
        return params


def load_json_config(path: Path | str | None) -> Dict[str, Any]:
    """Load the JSON config file or return an empty dict if no path is given."""

    if path is None:
        return {}
    json_path = Path(path)
    if not json_path.exists():
        raise FileNotFoundError(f"Config file not found: {json_path}")
    data = json.loads(json_path.read_text(encoding="utf-8"))
    if not isinstance(data, Mapping):
        raise ValueError("Top-level JSON config must be an object")
    return dict(data)


def apply_overrides(
    base: IcosphereParameters, overrides: Mapping[str, Any]
) -> IcosphereParameters:
    """Return a copy of ``base`` with overrides applied."""

    merged = base.to_dict()
    for key, value in overrides.items():
        if key not in merged:
            raise KeyError(f"Unknown parameter '{key}'")
        merged[key] = value
    return IcosphereParameters.from_dict(merged)


def parse_cli_overrides(
    args: Optional[Iterable[str]] = None,
) -> Tuple[Dict[str, Any], Any]:
    """Parse CLI-style overrides using argparse conventions."""

    import argparse

    parser = argparse.ArgumentParser(description="Icosphere mesh generator")
    parser.add_argument("--config", type=str, help="Path to JSON config", default=None)
    parser.add_argument("--radius", type=float, help="Sphere radius")
    parser.add_argument(
        "--subdivision",
        type=int,
        help="Subdivision level (1 = base icosahedron)",
    )
    parser.add_argument(
        "--max-subdivision",
        type=int,
        help="Refuse subdivision levels above this value",
    )
    uv_group = parser.add_mutually_exclusive_group()
    uv_group.add_argument(
        "--uv",
        action="store_true",
        help="Emit seam-corrected UVs (duplicated-vertex layout)",
    )
    uv_group.add_argument(
        "--no-uv",
        action="store_true",
        help="Skip UVs and share vertices between triangles",
    )

    parsed, unknown = parser.parse_known_args(args=None if args is None else list(args))
    if unknown:
        logging.info("Ignoring unknown CLI args: %s", " ".join(unknown))
    overrides: Dict[str, Any] = {}
    if parsed.radius is not None:
        overrides["radius"] = parsed.radius
    if parsed.subdivision is not None:
        overrides["subdivision"] = parsed.subdivision
    if parsed.max_subdivision is not None:
        overrides["max_subdivision"] = parsed.max_subdivision
    if parsed.uv:
        overrides["has_uv"] = True
    if parsed.no_uv:
        overrides["has_uv"] = False

    return overrides, parsed


def load_parameters(
    config_path: Path | str | None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> IcosphereParameters:
    """Load parameters using the JSON → CLI precedence chain."""

    data = load_json_config(config_path)
    params = IcosphereParameters.from_dict(data)
    if cli_overrides:
        params = apply_overrides(params, cli_overrides)
    return params
