"""Filter raw sales rows into well-formed monthly observations."""

from __future__ import annotations

import logging
import math
import numbers
import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd

logger = logging.getLogger(__name__)

PERIOD_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
_NUMERIC_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class RecordFieldConfig:
    """Names of the source fields holding the date, product and quantity."""

    date_field: str = "created"
    description_field: str = "short_desc"
    quantity_field: str = "total_sold"

    @property
    def columns(self) -> tuple[str, str, str]:
        return (self.date_field, self.description_field, self.quantity_field)


@dataclass(frozen=True)
class SalesObservation:
    """One validated sale: ``period`` is ``YYYY-MM``."""

    period: str
    product: str
    quantity: float


def extract_period(value: Any) -> str:
    """Return the ``YYYY-MM`` prefix of a ``"YYYY-MM-DD hh:mm"`` style value.

    The date part is everything before the first space; the period is its
    first seven characters. Missing values yield an empty string.
    """
    text = _as_text(value)
    if not text:
        return ""
    return text.split(" ")[0][:7]


def parse_quantity(value: Any) -> float:
    """Parse a quantity leniently, returning ``nan`` when nothing numeric is found.

    Strings are read up to the longest numeric prefix after leading
    whitespace, so ``"12 units"`` gives ``12.0`` while ``"abc"`` gives ``nan``.
    """
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, numbers.Real):
        return float(value)

    match = _NUMERIC_PREFIX.match(str(value).lstrip())
    if match is None:
        return math.nan
    return float(match.group(0))


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None or pd.isna(value):
        return ""
    return str(value)


def _validate_row(
    row: Mapping[str, Any], fields: RecordFieldConfig
) -> Optional[SalesObservation]:
    period = extract_period(row.get(fields.date_field))
    if not period:
        logger.debug("Dropping row without a date: %s", row)
        return None
    if not PERIOD_PATTERN.match(period):
        logger.debug("Dropping row with unparseable period '%s': %s", period, row)
        return None

    product = _as_text(row.get(fields.description_field))
    if not product:
        logger.debug("Dropping row without a product description: %s", row)
        return None

    quantity = parse_quantity(row.get(fields.quantity_field))
    if not math.isfinite(quantity):
        logger.debug("Dropping row with non-numeric quantity: %s", row)
        return None

    return SalesObservation(period=period, product=product, quantity=quantity)


def validate_records(
    raw_rows: Iterable[Mapping[str, Any]],
    fields: RecordFieldConfig = RecordFieldConfig(),
) -> List[SalesObservation]:
    """Return one observation per well-formed row, in input order.

    Malformed rows are skipped without raising. Duplicates are kept.
    """
    observations: List[SalesObservation] = []
    total = 0
    for row in raw_rows:
        total += 1
        observation = _validate_row(row, fields)
        if observation is not None:
            observations.append(observation)

    logger.info("Validated %d of %d sales rows", len(observations), total)
    return observations


def validate_frame(
    frame: pd.DataFrame, fields: RecordFieldConfig = RecordFieldConfig()
) -> List[SalesObservation]:
    """Validate the rows of a DataFrame using the configured column names."""
    missing = [column for column in fields.columns if column not in frame.columns]
    if missing:
        logger.warning(
            "Sales frame is missing expected columns %s; affected rows will be dropped.",
            ", ".join(missing),
        )
    return validate_records(frame.to_dict(orient="records"), fields)
