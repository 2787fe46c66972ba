"""Turn validated observations into numeric model inputs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np
import pandas as pd

from src.ingestion.record_validation import SalesObservation

from .catalog import ProductCatalog

FEATURE_COLUMNS: tuple[str, ...] = ("month_index", "product_code")


@dataclass(frozen=True)
class EncodedObservation:
    month_index: int
    product_code: int
    quantity: float


def month_index(period: str) -> int:
    """Return the calendar month (1-12) of a ``YYYY-MM`` period.

    The year is discarded, so ``"2023-07"`` and ``"2024-07"`` both map to 7.
    """
    return pd.to_datetime(f"{period}-01", format="%Y-%m-%d").month


def encode_observations(
    observations: Iterable[SalesObservation], catalog: ProductCatalog
) -> List[EncodedObservation]:
    """Encode each observation as (month index, product code, quantity).

    Raises :class:`~src.forecasting.exceptions.EncodingError` when a product
    is missing from ``catalog``.
    """
    return [
        EncodedObservation(
            month_index=month_index(observation.period),
            product_code=catalog.code_for(observation.product),
            quantity=observation.quantity,
        )
        for observation in observations
    ]


def to_training_arrays(
    encoded: Sequence[EncodedObservation],
) -> Tuple[np.ndarray, np.ndarray]:
    """Stack encoded observations into an ``(n, 2)`` feature matrix and labels."""
    features = np.array(
        [(row.month_index, row.product_code) for row in encoded], dtype=float
    ).reshape(-1, len(FEATURE_COLUMNS))
    labels = np.array([row.quantity for row in encoded], dtype=float)
    return features, labels
