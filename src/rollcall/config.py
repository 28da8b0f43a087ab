from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ReporterConfig:
    verbose: bool = False
    bail: bool = False
    root_dir: str | None = None
    no_highlight: bool = False
    collect_coverage: bool = False

    def replace(self, **changes: Any) -> ReporterConfig:
        return dataclasses.replace(self, **changes)


_FIELDS = {f.name for f in dataclasses.fields(ReporterConfig)}


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        import yaml
    except ImportError as exc:
        raise RuntimeError("PyYAML is required to load YAML files.") from exc
    try:
        return yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc


def _load_json(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text())


def load_payload(path: str | Path) -> Any:
    """Read a JSON or YAML document, picking the parser from the suffix."""
    path = Path(path)
    if path.suffix in {".yaml", ".yml"}:
        return _load_yaml(path)
    return _load_json(path)


def parse_config(payload: dict[str, Any], base_dir: Path | None = None) -> ReporterConfig:
    unknown = set(payload) - _FIELDS
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    root_dir = payload.get("root_dir")
    if root_dir is not None:
        root = Path(root_dir)
        if not root.is_absolute() and base_dir is not None:
            root = base_dir / root
        root_dir = str(root.resolve())

    return ReporterConfig(
        verbose=bool(payload.get("verbose", False)),
        bail=bool(payload.get("bail", False)),
        root_dir=root_dir,
        no_highlight=bool(payload.get("no_highlight", False)),
        collect_coverage=bool(payload.get("collect_coverage", False)),
    )


def load_config(path: str | Path) -> ReporterConfig:
    path = Path(path)
    payload = load_payload(path)
    if not isinstance(payload, dict):
        raise ValueError(f"Config file {path} must contain a mapping.")
    return parse_config(payload, base_dir=path.parent)
