"""Roll a trained model forward over future month indices."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol

import numpy as np
from numpy.typing import ArrayLike

from .catalog import ProductCatalog
from .config import DEFAULT_HORIZON

logger = logging.getLogger(__name__)


class Predictor(Protocol):
    def predict(self, inputs: ArrayLike) -> np.ndarray: ...


@dataclass(frozen=True)
class ForecastResult:
    product_code: int
    predicted_quantities: tuple[float, ...]


def future_months(last_observed_month: int, horizon: int = DEFAULT_HORIZON) -> List[int]:
    """Return ``last_observed_month + 1`` through ``last_observed_month + horizon``.

    Values are not wrapped at 12; month 13 follows month 12.
    """
    if horizon < 1:
        raise ValueError("horizon must be at least one month.")
    return [last_observed_month + step for step in range(1, horizon + 1)]


def generate_forecasts(
    model: Predictor,
    last_observed_month: int,
    catalog: ProductCatalog,
    horizon: int = DEFAULT_HORIZON,
) -> List[ForecastResult]:
    """Predict ``horizon`` future quantities for every product in ``catalog``."""
    months = future_months(last_observed_month, horizon)
    results = []
    for code in catalog.codes:
        inputs = np.array([(month, code) for month in months], dtype=float)
        predicted = np.asarray(model.predict(inputs), dtype=float).ravel()
        if predicted.shape[0] != horizon:
            raise ValueError(
                f"Model returned {predicted.shape[0]} predictions for {horizon} months."
            )
        results.append(
            ForecastResult(
                product_code=code,
                predicted_quantities=tuple(float(value) for value in predicted),
            )
        )

    logger.info(
        "Generated %d-month forecasts for %d products (months %d-%d)",
        horizon,
        len(results),
        months[0],
        months[-1],
    )
    return results
