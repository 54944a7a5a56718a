"""Read and write result files (CSV or JSON lines) through pandas."""

import logging
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd

from ..utils.durations import from_nanoseconds, to_nanoseconds
from .models import Result

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["timestamp", "latency", "bytes_out", "bytes_in", "code"]
OPTIONAL_COLUMNS = ["error", "url"]


class ResultsFormatError(ValueError):
    """Raised when a results file cannot be interpreted."""
    pass


def results_from_dataframe(df: pd.DataFrame) -> List[Result]:
    """Build Results from a frame with nanosecond ``timestamp``/``latency`` columns."""
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ResultsFormatError(f"Results are missing required columns: {missing}")

    df = df.copy()
    for column in OPTIONAL_COLUMNS:
        if column not in df.columns:
            logger.warning(f"Results have no '{column}' column, defaulting to empty strings")
            df[column] = ""
        df[column] = df[column].fillna("").astype(str)

    results = []
    for row in df.itertuples(index=False):
        results.append(Result(
            timestamp=from_nanoseconds(int(row.timestamp)),
            latency=from_nanoseconds(int(row.latency)),
            bytes_out=int(row.bytes_out),
            bytes_in=int(row.bytes_in),
            status_code=int(row.code),
            error=row.error,
            url=row.url,
        ))
    return results


def results_to_dataframe(results: Sequence[Result]) -> pd.DataFrame:
    """Get results as a pandas DataFrame in the on-disk column layout."""
    columns = REQUIRED_COLUMNS + OPTIONAL_COLUMNS
    if not results:
        return pd.DataFrame(columns=columns)

    return pd.DataFrame([
        {
            "timestamp": to_nanoseconds(r.timestamp),
            "latency": to_nanoseconds(r.latency),
            "bytes_out": r.bytes_out,
            "bytes_in": r.bytes_in,
            "code": r.status_code,
            "error": r.error,
            "url": r.url,
        }
        for r in results
    ], columns=columns)


def load_results(path: Union[str, Path]) -> List[Result]:
    """Load results from a ``.csv`` or JSON lines (``.jsonl``/``.json``) file."""
    path = Path(path)
    if path.suffix == ".csv":
        df = pd.read_csv(path, keep_default_na=False)
    elif path.suffix in (".jsonl", ".json"):
        df = pd.read_json(path, lines=True, dtype=False, convert_dates=False, keep_default_dates=False)
    else:
        raise ResultsFormatError(f"Unsupported results file type: {path.suffix or path.name}")

    results = results_from_dataframe(df)
    logger.info(f"Loaded {len(results)} results from {path}")
    return results
