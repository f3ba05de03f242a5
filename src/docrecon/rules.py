import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from .errors import ConfigError
from .models import FieldMapping, ToleranceSetting, ToleranceType

logger = logging.getLogger(__name__)

# field type -> (kind, value) proposed when no tolerance config is given
DEFAULT_TOLERANCES: Dict[str, tuple] = {
    "Amount": (ToleranceType.ABSOLUTE, 0.01),
    "Tax": (ToleranceType.ABSOLUTE, 0.01),
    "Quantity": (ToleranceType.ABSOLUTE, 1.0),
    "Date": (ToleranceType.DAYS, 1.0),
}


def _parse_tolerance(raw: Dict[str, Any], index: int, path: str) -> ToleranceSetting:
    if not isinstance(raw, dict):
        raise ConfigError(f"Tolerance #{index + 1} in {path} must be an object")
    field_type = str(raw.get("field_type", "")).strip()
    if not field_type:
        raise ConfigError(f"Tolerance #{index + 1} in {path} has no field_type")

    kind = str(raw.get("tolerance_type", "")).strip().lower()
    try:
        tolerance_type = ToleranceType(kind)
    except ValueError:
        allowed = [t.value for t in ToleranceType]
        raise ConfigError(f"Tolerance for '{field_type}' has unknown tolerance_type '{kind}' (expected one of {allowed})")

    try:
        value = float(raw.get("value", 0))
    except (TypeError, ValueError):
        raise ConfigError(f"Tolerance for '{field_type}' has a non-numeric value: {raw.get('value')!r}")
    if value < 0:
        raise ConfigError(f"Tolerance for '{field_type}' must be >= 0, got {value}")

    return ToleranceSetting(field_type=field_type, tolerance_type=tolerance_type, value=value)


def load_tolerances(path: str = "config/tolerances.json") -> List[ToleranceSetting]:
    try:
        with open(path, "r") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Tolerance config not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(raw, list):
        raise ConfigError(f"{path} must contain a JSON list of tolerances")

    out = [_parse_tolerance(t, i, path) for i, t in enumerate(raw)]

    seen = set()
    for t in out:
        if t.field_type in seen:
            raise ConfigError(f"Duplicate tolerance for field type '{t.field_type}' in {path}")
        seen.add(t.field_type)

    logger.info("Loaded %d tolerance settings from %s", len(out), path)
    return out


def default_tolerances(mappings: List[FieldMapping]) -> List[ToleranceSetting]:
    out: List[ToleranceSetting] = []
    seen = set()
    for m in mappings:
        if m.field_type not in DEFAULT_TOLERANCES or m.field_type in seen:
            continue
        seen.add(m.field_type)
        kind, value = DEFAULT_TOLERANCES[m.field_type]
        out.append(ToleranceSetting(field_type=m.field_type, tolerance_type=kind, value=value))
    return out


def find_tolerance(tolerances: Sequence[ToleranceSetting], field_type: str) -> Optional[ToleranceSetting]:
    for t in tolerances:
        if t.field_type == field_type:
            return t
    return None
