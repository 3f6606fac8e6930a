"""Canonical storage of exported puzzle bundles."""

from __future__ import annotations

import copy
import hashlib
import json
import math
import unicodedata
from pathlib import Path
from typing import Any, Dict, Optional

from project_config import get_section

_REPO_ROOT = Path(__file__).resolve().parents[2]


def _normalize(obj: Any) -> Any:
    """Return a deep-normalised structure suitable for canonical JSON."""

    if isinstance(obj, dict):
        return {str(k): _normalize(v) for k, v in sorted(obj.items(), key=lambda item: str(item[0]))}
    if isinstance(obj, (list, tuple)):
        return [_normalize(item) for item in obj]
    if isinstance(obj, str):
        return unicodedata.normalize("NFC", obj)
    if isinstance(obj, float):
        if not math.isfinite(obj):
            raise ValueError("Non-finite numbers are not allowed in artifacts")
        return obj
    return obj


def canonicalize(obj: Dict[str, Any]) -> bytes:
    """Serialise *obj* into canonical JSON bytes.

    Dictionaries are sorted lexicographically by key, strings are normalised to
    NFC, and the output does not contain insignificant whitespace.
    """

    normalised = _normalize(obj)
    return json.dumps(normalised, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def compute_artifact_id(obj: Dict[str, Any]) -> str:
    """Hash the canonical JSON of *obj* with its ``artifact_id`` field removed."""

    base = dict(obj)
    base.pop("artifact_id", None)
    digest = hashlib.sha256(canonicalize(base)).hexdigest()
    return f"sha256-{digest}"


def artifact_root(root: Optional[str | Path] = None) -> Path:
    path = Path(root) if root is not None else Path(get_section("export.output_dir", "exports"))
    if not path.is_absolute():
        path = _REPO_ROOT / path
    return path


def save_artifact(obj: Dict[str, Any], root: Optional[str | Path] = None) -> Path:
    """Persist an artifact under ``<root>/<Type>/<artifact_id>.json`` and return the path.

    ``artifact_id`` is computed from the canonical payload and written back
    into *obj*.
    """

    if not isinstance(obj, dict):
        raise TypeError("Artifact must be a mapping")

    artifact_copy: Dict[str, Any] = copy.deepcopy(obj)
    artifact_id = compute_artifact_id(artifact_copy)
    existing_id = artifact_copy.get("artifact_id")
    if existing_id is not None and existing_id != artifact_id:
        raise ValueError("Provided artifact_id does not match canonical hash")
    artifact_copy["artifact_id"] = artifact_id

    artifact_type = artifact_copy.get("type")
    if not isinstance(artifact_type, str) or not artifact_type:
        raise ValueError("Artifact type must be a non-empty string")

    target_dir = artifact_root(root) / artifact_type
    target_dir.mkdir(parents=True, exist_ok=True)
    target_path = target_dir / f"{artifact_id}.json"
    target_path.write_bytes(canonicalize(artifact_copy))

    obj["artifact_id"] = artifact_id
    return target_path


def load_artifact(artifact_id: str, root: Optional[str | Path] = None) -> Dict[str, Any]:
    """Load and return an artifact by its identifier."""

    if not artifact_id.startswith("sha256-"):
        raise ValueError("Artifact identifier must start with 'sha256-'")
    for type_dir in artifact_root(root).glob("*"):
        if not type_dir.is_dir():
            continue
        candidate = type_dir / f"{artifact_id}.json"
        if candidate.exists():
            return json.loads(candidate.read_text("utf-8"))
    raise FileNotFoundError(f"Artifact '{artifact_id}' was not found in the store")


__all__ = [
    "artifact_root",
    "canonicalize",
    "compute_artifact_id",
    "save_artifact",
    "load_artifact",
]
