"""Known record fields (Catalog) and their display labels."""
from dataclasses import dataclass
from enum import StrEnum
from typing import Dict, List, Optional, Union

# A record maps a field key to a number, a string or a missing value.
FieldValue = Optional[Union[float, int, str]]
Record = Dict[str, FieldValue]

ID_FIELD = "record_id"


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class FieldKind(StrEnum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


# ------------------------------------------------------------------------------
# Data Structures
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class FieldSpec:
    key: str
    label: str
    kind: FieldKind


FIELD_CATALOG: List[FieldSpec] = [
    FieldSpec("age", "Age", FieldKind.NUMERIC),
    FieldSpec("substance_score", "Substance Score", FieldKind.NUMERIC),
    FieldSpec("tobacco_use", "Tobacco Use", FieldKind.NUMERIC),
    FieldSpec("alcohol_use", "Alcohol Use", FieldKind.NUMERIC),
    FieldSpec("marijuana_use", "Marijuana Use", FieldKind.NUMERIC),
    FieldSpec("mental_health_score", "Mental Health Score", FieldKind.NUMERIC),
    FieldSpec("gender", "Gender", FieldKind.CATEGORICAL),
    FieldSpec("region", "Region", FieldKind.CATEGORICAL),
    FieldSpec("education_level", "Education Level", FieldKind.CATEGORICAL),
]

ALL_FIELDS: Dict[str, FieldSpec] = {spec.key: spec for spec in FIELD_CATALOG}


def field_label(key: str) -> str:
    """Human readable label; unknown keys are shown as-is."""
    spec = ALL_FIELDS.get(key)
    return spec.label if spec else key


def numeric_fields() -> List[FieldSpec]:
    return [spec for spec in FIELD_CATALOG if spec.kind == FieldKind.NUMERIC]


def categorical_fields() -> List[FieldSpec]:
    return [spec for spec in FIELD_CATALOG if spec.kind == FieldKind.CATEGORICAL]
