"""
Dataset Provider
================
Produces the ordered list of Records the plot works on.

Two independent defaulting policies live here:
1. Synthetic generation (startup sample, fallback when no file is available).
2. Normalization of rows read from the CSV file (fills missing fields).
They differ: only the synthetic sample carries a
mental health score and a third gender value.
"""
from __future__ import annotations

import csv
import logging
import os
from typing import Iterable, List, Mapping, Optional, Sequence

import numpy as np

from scatterexplorer.model.coercion import to_label, to_number
from scatterexplorer.model.fields import ID_FIELD, Record

logger = logging.getLogger(__name__)

# Cycled categorical values for the synthetic sample
SAMPLE_GENDERS = ("Male", "Female", "Other")
SAMPLE_REGIONS = ("North", "South", "East", "West", "Central")
SAMPLE_EDUCATION = ("High School", "College", "University", "Vocational")

# Cycled fallbacks used when a CSV row is missing a categorical value
CSV_GENDERS = ("Male", "Female")
CSV_REGIONS = ("North", "South", "East", "West")
CSV_EDUCATION = ("High School", "College")

USAGE_FIELDS = ("tobacco_use", "alcohol_use", "marijuana_use")


class DataLoadError(Exception):
    """The external dataset could not be read or contained no rows."""


def _random_age(rng: np.random.Generator) -> int:
    return int(rng.integers(15, 25))


def _random_score(rng: np.random.Generator) -> float:
    return round(float(rng.uniform(-2.0, 6.0)), 1)


def generate_synthetic(count: int = 250, rng: Optional[np.random.Generator] = None) -> List[Record]:
    """
    Generate a sample dataset so the view is never empty.

    Args:
        count: Number of records (ids run 1..count).
        rng: Optional numpy Generator, pass a seeded one for reproducible data.

    Returns:
        List of freshly created records.
    """
    rng = rng if rng is not None else np.random.default_rng()
    records: List[Record] = []
    for i in range(count):
        records.append({
            ID_FIELD: i + 1,
            "age": _random_age(rng),
            "substance_score": _random_score(rng),
            "gender": SAMPLE_GENDERS[i % len(SAMPLE_GENDERS)],
            "region": SAMPLE_REGIONS[i % len(SAMPLE_REGIONS)],
            "education_level": SAMPLE_EDUCATION[i % len(SAMPLE_EDUCATION)],
            "tobacco_use": int(rng.integers(0, 6)),
            "alcohol_use": int(rng.integers(0, 6)),
            "marijuana_use": int(rng.integers(0, 6)),
            "mental_health_score": round(float(rng.uniform(0.0, 10.0)), 1),
        })
    logger.debug(f"Generated {count} synthetic records.")
    return records


def normalize(raw_rows: Optional[Sequence[Mapping[str, object]]],
              rng: Optional[np.random.Generator] = None) -> List[Record]:
    """
    Map raw CSV rows to Records, filling missing or malformed fields.

    Raises:
        DataLoadError: If there are no rows at all.
    """
    if not raw_rows:
        raise DataLoadError("Dataset is empty.")

    rng = rng if rng is not None else np.random.default_rng()
    records: List[Record] = []
    for i, row in enumerate(raw_rows):
        record: Record = {
            ID_FIELD: i + 1,
            "age": to_number(row.get("age"), _random_age(rng)),
            "substance_score": to_number(row.get("substance_score"), _random_score(rng)),
            "gender": to_label(row.get("gender"), CSV_GENDERS[i % len(CSV_GENDERS)]),
            "region": to_label(row.get("region"), CSV_REGIONS[i % len(CSV_REGIONS)]),
            "education_level": to_label(row.get("education_level"), CSV_EDUCATION[i % len(CSV_EDUCATION)]),
        }
        for key in USAGE_FIELDS:
            record[key] = to_number(row.get(key), int(rng.integers(0, 5)))
        records.append(record)
    return records


def read_csv_rows(path: str) -> List[dict]:
    """
    Read a header-row CSV file into a list of dicts.

    Raises:
        DataLoadError: If the file is missing or cannot be decoded.
    """
    if not os.path.isfile(path):
        raise DataLoadError(f"Dataset file not found: {path}")
    try:
        with open(path, newline="", encoding="utf-8-sig") as f:
            return list(csv.DictReader(f))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise DataLoadError(f"Could not read dataset '{path}': {e}") from e


def load_dataset(path: str, rng: Optional[np.random.Generator] = None) -> List[Record]:
    """Read and normalize the dataset at ``path``."""
    logger.info(f"Loading dataset from: {path}")
    rows = read_csv_rows(path)
    records = normalize(rows, rng=rng)
    logger.info(f"Loaded {len(records)} records.")
    return records


def record_ids(records: Iterable[Record]) -> List[object]:
    return [record[ID_FIELD] for record in records]
