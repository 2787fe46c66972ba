"""Chart-ready series combining sales history with forecasts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from src.ingestion.record_validation import SalesObservation

from .catalog import ProductCatalog
from .generator import ForecastResult

FUTURE_LABEL_TEMPLATE = "Future Month {step}"


@dataclass
class SeriesDataset:
    label: str
    values: List[Optional[float]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "values": list(self.values)}


@dataclass
class SeriesBundle:
    """Labels for the x-axis plus one dataset per plotted line."""

    labels: List[str] = field(default_factory=list)
    datasets: List[SeriesDataset] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "labels": list(self.labels),
            "datasets": [dataset.to_dict() for dataset in self.datasets],
        }


def _history_labels(
    observations: Sequence[SalesObservation], distinct: bool
) -> List[str]:
    periods = [observation.period for observation in observations]
    if distinct:
        return list(dict.fromkeys(periods))
    return periods


def assemble_series(
    observations: Sequence[SalesObservation],
    catalog: ProductCatalog,
    results: Sequence[ForecastResult],
    *,
    distinct_labels: bool = False,
) -> SeriesBundle:
    """Build an "Actual" and a "Predicted" series for every forecast result.

    The x-axis holds one label per historical observation (or per distinct
    period with ``distinct_labels``) followed by ``Future Month 1..H``, where
    H is the longest forecast. Each predicted series starts with one ``None``
    per historical point of its product. Chart consumers should expect
    per-observation labels unless they asked for ``distinct_labels``.
    """
    horizon = max((len(result.predicted_quantities) for result in results), default=0)
    labels = _history_labels(observations, distinct_labels) + [
        FUTURE_LABEL_TEMPLATE.format(step=step) for step in range(1, horizon + 1)
    ]

    datasets: List[SeriesDataset] = []
    for result in results:
        product = catalog.product_for(result.product_code)
        actual = [
            observation.quantity
            for observation in observations
            if observation.product == product
        ]
        predicted: List[Optional[float]] = [None] * len(actual)
        predicted.extend(result.predicted_quantities)

        datasets.append(SeriesDataset(label=f"{product} - Actual", values=list(actual)))
        datasets.append(SeriesDataset(label=f"{product} - Predicted", values=predicted))

    return SeriesBundle(labels=labels, datasets=datasets)
