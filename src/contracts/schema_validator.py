"""Offline JSON Schema validation for exported puzzle artifacts."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import jsonschema

from artifacts import artifact_store

from .errors import SchemaValidationError

_REPO_ROOT = Path(__file__).resolve().parents[2]
_CONTRACT_ROOT = _REPO_ROOT / "PuzzleContracts"
_CATALOG_PATH = _CONTRACT_ROOT / "catalog.json"


@dataclass(frozen=True)
class SchemaDescriptor:
    """Descriptor that binds an artifact type to its active schema."""

    type: str
    version: str
    schema_id: str
    schema_path: str


_catalog: Dict[str, SchemaDescriptor] = {}
_schema_cache: Dict[str, Dict[str, Any]] = {}


def _load_catalog() -> Dict[str, SchemaDescriptor]:
    if _catalog:
        return _catalog

    raw = json.loads(_CATALOG_PATH.read_text("utf-8"))
    for artifact_type, data in raw.items():
        _catalog[artifact_type] = SchemaDescriptor(
            type=artifact_type,
            version=data["version"],
            schema_id=data["schema_id"],
            schema_path=data["schema_path"],
        )
    return _catalog


def get_schema_descriptor(artifact_type: str) -> SchemaDescriptor:
    """Return the schema descriptor for *artifact_type*."""

    catalog = _load_catalog()
    if artifact_type not in catalog:
        raise SchemaValidationError("schema-not-found", artifact_type)
    return catalog[artifact_type]


def load_schema(schema_path: str) -> Dict[str, Any]:
    """Load a schema relative to the contracts root directory."""

    resolved = (_CONTRACT_ROOT / schema_path).resolve()
    cache_key = str(resolved)
    if cache_key in _schema_cache:
        return _schema_cache[cache_key]

    try:
        schema = json.loads(resolved.read_text("utf-8"))
    except FileNotFoundError as exc:
        raise SchemaValidationError("schema-not-found", schema_path) from exc

    _schema_cache[cache_key] = schema
    return schema


def _invariant(detail: str) -> None:
    raise SchemaValidationError("invariant-violation", detail)


def _validate_bundle(obj: Dict[str, Any]) -> None:
    puzzle = obj["puzzle"]
    solution = obj["solution"]
    blanks = sum(1 for ch in puzzle if ch == "0")
    if blanks != obj["mask_count"]:
        _invariant(f"puzzle has {blanks} blank cells, mask_count is {obj['mask_count']}")
    for index, (given, answer) in enumerate(zip(puzzle, solution)):
        if given != "0" and given != answer:
            _invariant(f"puzzle cell {index} disagrees with the solution")
    if obj["placeholder"] in obj["alphabet"]:
        _invariant("placeholder must not be part of the alphabet")

    artifact_id = obj.get("artifact_id")
    if artifact_id is not None and artifact_id != artifact_store.compute_artifact_id(obj):
        _invariant("artifact_id does not match canonical hash")


def validate_artifact(obj: Dict[str, Any]) -> None:
    """Validate an artifact against its catalogued JSON Schema and invariants."""

    if not isinstance(obj, dict):
        raise SchemaValidationError("invalid-envelope", "artifact must be an object")
    artifact_type = obj.get("type")
    if not isinstance(artifact_type, str) or not artifact_type:
        raise SchemaValidationError("invalid-envelope", "missing type")

    descriptor = get_schema_descriptor(artifact_type)
    if obj.get("version") != descriptor.version:
        raise SchemaValidationError("invalid-envelope", "unexpected version")

    schema = load_schema(descriptor.schema_path)
    Validator = jsonschema.validators.validator_for(schema)
    Validator.check_schema(schema)
    try:
        Validator(schema).validate(obj)
    except jsonschema.ValidationError as exc:
        raise SchemaValidationError("invariant-violation", exc.message) from exc

    if artifact_type == "PuzzleBundle":
        _validate_bundle(obj)


__all__ = [
    "SchemaDescriptor",
    "get_schema_descriptor",
    "load_schema",
    "validate_artifact",
]
