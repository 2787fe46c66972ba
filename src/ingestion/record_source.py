"""Read uploaded sales exports into raw row dictionaries.

Uploads arrive as header-row CSV files. Every cell is kept as text so that
the validator decides what counts as a usable date, product or quantity;
nothing is coerced or dropped here apart from fully blank lines.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Dict, List, Union

import pandas as pd

logger = logging.getLogger(__name__)

RecordSource = Union[str, Path, IO[str]]


def records_from_frame(frame: pd.DataFrame) -> List[Dict[str, str]]:
    """Convert ``frame`` to a list of string-valued rows keyed by column name.

    Missing cells become empty strings and column names are stripped of
    surrounding whitespace.
    """
    working = frame.rename(columns=lambda column: str(column).strip())
    working = working.astype(object).where(working.notna(), "")
    return [
        {column: str(value) for column, value in row.items()}
        for row in working.to_dict(orient="records")
    ]


def load_records(source: RecordSource, *, encoding: str = "utf-8") -> List[Dict[str, str]]:
    """Load a CSV export with a header row from a path or open text stream."""
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Sales export not found: {path}")
        logger.info("Loading sales records from %s", path)
        source = path

    frame = pd.read_csv(
        source,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        encoding=encoding,
    )
    records = records_from_frame(frame)
    logger.info("Loaded %d raw sales rows", len(records))
    return records
