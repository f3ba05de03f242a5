import json
import logging
from typing import Any, Dict, List, Optional

from .errors import ConfigError, MultipleReferenceMappingsError, NoReferenceMappingError
from .models import Dataset, FieldMapping

logger = logging.getLogger(__name__)

REFERENCE_FIELD_TYPE = "Invoice Number"
REQUIRED_KEYS = ["file_a", "file_b", "field_type"]


def _parse_mapping(raw: Dict[str, Any], index: int, path: str) -> FieldMapping:
    if not isinstance(raw, dict):
        raise ConfigError(f"Mapping #{index + 1} in {path} must be an object")
    missing = [k for k in REQUIRED_KEYS if not str(raw.get(k, "")).strip()]
    if missing:
        raise ConfigError(f"Mapping #{index + 1} in {path} is missing {missing}")

    # JSON true/false only; "false" as a string must not turn into a reference
    is_reference = raw.get("is_reference", False)
    if not isinstance(is_reference, bool):
        raise ConfigError(
            f"Mapping #{index + 1} in {path} has a non-boolean is_reference: {is_reference!r}"
        )

    return FieldMapping(
        file_a=str(raw["file_a"]),
        file_b=str(raw["file_b"]),
        field_type=str(raw["field_type"]),
        is_reference=is_reference,
    )


def load_field_mappings(path: str = "config/field_mappings.json") -> List[FieldMapping]:
    """
    Reads a JSON list of {"file_a", "file_b", "field_type", "is_reference"} objects.
    Mapping order is kept; it decides the order of mismatch reasons and export columns.
    """
    try:
        with open(path, "r") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Mapping config not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(raw, list):
        raise ConfigError(f"{path} must contain a JSON list of mappings")

    mappings = [_parse_mapping(m, i, path) for i, m in enumerate(raw)]
    logger.info("Loaded %d field mappings from %s", len(mappings), path)
    return mappings


def find_reference_mapping(mappings: List[FieldMapping]) -> Optional[FieldMapping]:
    for m in mappings:
        if m.is_reference:
            return m
    return None


def validate_mappings(mappings: List[FieldMapping]) -> FieldMapping:
    """Returns the single reference mapping or raises a MappingError."""
    refs = [m for m in mappings if m.is_reference]
    if not refs:
        raise NoReferenceMappingError()
    if len(refs) > 1:
        raise MultipleReferenceMappingsError(len(refs))
    return refs[0]


def suggest_mappings(dataset_a: Dataset, dataset_b: Dataset) -> List[FieldMapping]:
    """
    Pairs every recognized header of A with the first header of B recognized as the
    same field type. Invoice Number pairs are proposed as the reference.
    """
    out: List[FieldMapping] = []
    seen = set()
    for header_a, field_type in dataset_a.recognized_fields.items():
        header_b = next(
            (h for h, t in dataset_b.recognized_fields.items() if t == field_type), None
        )
        if header_b is None or (header_a, header_b) in seen:
            continue
        seen.add((header_a, header_b))
        out.append(FieldMapping(
            file_a=header_a,
            file_b=header_b,
            field_type=field_type,
            is_reference=field_type == REFERENCE_FIELD_TYPE,
        ))
    return out
