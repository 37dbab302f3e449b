"""
Sample file loading for the CLI.

Reads CSV or JSON files into Sample objects. Every column other than the
timestamp and value columns is kept in a dict payload.
"""

import csv
import json
import logging
import math

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from seriestrim.models.sample import Sample

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".json")


def parse_timestamp(raw: Any) -> Any:
    """
    Interpret a raw timestamp field.

    Numbers and numeric strings are epoch milliseconds; any other string is
    left for ISO-8601 parsing by the Sample model.
    """
    if isinstance(raw, str):
        stripped = raw.strip()
        try:
            parsed = float(stripped)
        except ValueError:
            return stripped
        return parsed if math.isfinite(parsed) else stripped
    return raw


def _build_sample(
    record: dict[str, Any],
    timestamp_field: str,
    value_field: str,
    location: str,
) -> Sample[dict[str, Any]]:
    if timestamp_field not in record:
        raise ValueError(f"{location}: missing '{timestamp_field}' field")
    if value_field not in record:
        raise ValueError(f"{location}: missing '{value_field}' field")

    try:
        value = float(record[value_field])
    except (TypeError, ValueError):
        raise ValueError(
            f"{location}: invalid value {record[value_field]!r}"
        ) from None

    payload = {
        key: val
        for key, val in record.items()
        if key not in (timestamp_field, value_field)
    }

    try:
        return Sample[dict[str, Any]](
            timestamp=parse_timestamp(record[timestamp_field]),
            value=value,
            payload=payload or None,
        )
    except ValueError as e:
        raise ValueError(
            f"{location}: invalid timestamp {record[timestamp_field]!r}: {e}"
        ) from e


def _read_records(path: Path) -> list[dict[str, Any]]:
    suffix = path.suffix.lower()

    if suffix == ".csv":
        with open(path, newline="", encoding="utf-8") as f:
            return list(csv.DictReader(f))

    if suffix == ".json":
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise ValueError(f"{path}: expected a JSON array of objects")
        return data

    raise ValueError(
        f"Unsupported file type: {path.suffix or '(none)'}. "
        f"Expected one of: {', '.join(SUPPORTED_SUFFIXES)}"
    )


def load_samples(
    path: str | Path,
    timestamp_field: str = "timestamp",
    value_field: str = "value",
) -> list[Sample[dict[str, Any]]]:
    """
    Load samples from a CSV or JSON file.

    Args:
        path: File path (.csv with a header row, or .json array of objects)
        timestamp_field: Column holding the timestamp
        value_field: Column holding the numeric value

    Returns:
        Samples in file order

    Raises:
        ValueError: If the file type is unsupported or a record is invalid
    """
    path = Path(path)
    records = _read_records(path)

    samples = [
        _build_sample(record, timestamp_field, value_field, f"{path}:{index + 1}")
        for index, record in enumerate(records)
    ]
    logger.debug(f"Loaded {len(samples)} samples from {path}")
    return samples


def dump_samples(samples: Sequence[Sample]) -> str:
    """
    Serialize samples to a JSON array string.

    NaN and infinite values (kept by the propagate policy) are written as
    null so the output stays valid JSON.
    """
    records = [json.loads(sample.model_dump_json()) for sample in samples]
    return json.dumps(records, indent=2, allow_nan=False)
