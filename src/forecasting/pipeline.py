"""End-to-end sales forecast: raw rows in, chart-ready series out."""

from __future__ import annotations

import argparse
import json
import logging
import threading
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from src.ingestion.record_source import load_records
from src.ingestion.record_validation import SalesObservation, validate_records

from .catalog import ProductCatalog, build_catalog
from .config import ForecastConfig
from .exceptions import EmptyDatasetError
from .features import EncodedObservation, encode_observations, to_training_arrays
from .generator import ForecastResult, generate_forecasts
from .model import ForecastModel, train_model, train_model_async
from .series import SeriesBundle, assemble_series

logger = logging.getLogger(__name__)

EMPTY_DATASET_MESSAGE = "Please upload valid sales data!"


@dataclass(frozen=True)
class PipelineResult:
    """Every intermediate value produced by one forecasting run."""

    observations: List[SalesObservation]
    catalog: ProductCatalog
    encoded: List[EncodedObservation]
    last_observed_month: int
    forecasts: List[ForecastResult]
    series: SeriesBundle


@dataclass(frozen=True)
class _PreparedRun:
    observations: List[SalesObservation]
    catalog: ProductCatalog
    encoded: List[EncodedObservation]


def _prepare(raw_rows: Iterable[Mapping[str, Any]], config: ForecastConfig) -> _PreparedRun:
    observations = validate_records(raw_rows, config.fields)
    if not observations:
        raise EmptyDatasetError(EMPTY_DATASET_MESSAGE)

    catalog = build_catalog(observations)
    encoded = encode_observations(observations, catalog)
    return _PreparedRun(observations=observations, catalog=catalog, encoded=encoded)


def _finish(
    prepared: _PreparedRun, model: ForecastModel, config: ForecastConfig
) -> PipelineResult:
    last_month = max(row.month_index for row in prepared.encoded)
    forecasts = generate_forecasts(model, last_month, prepared.catalog, config.horizon)
    series = assemble_series(
        prepared.observations,
        prepared.catalog,
        forecasts,
        distinct_labels=config.distinct_labels,
    )
    return PipelineResult(
        observations=prepared.observations,
        catalog=prepared.catalog,
        encoded=prepared.encoded,
        last_observed_month=last_month,
        forecasts=forecasts,
        series=series,
    )


def run_forecast_pipeline(
    raw_rows: Iterable[Mapping[str, Any]],
    config: ForecastConfig = ForecastConfig(),
    *,
    cancel_event: Optional[threading.Event] = None,
) -> PipelineResult:
    """Validate, encode, train and forecast in one blocking call.

    Raises :class:`EmptyDatasetError` when no row survives validation. The
    catalog and model are created for this call only.
    """
    prepared = _prepare(raw_rows, config)
    features, labels = to_training_arrays(prepared.encoded)
    model = train_model(features, labels, config.model, cancel_event=cancel_event)
    return _finish(prepared, model, config)


async def run_forecast_pipeline_async(
    raw_rows: Iterable[Mapping[str, Any]],
    config: ForecastConfig = ForecastConfig(),
) -> PipelineResult:
    """Awaitable variant of :func:`run_forecast_pipeline`.

    Training runs in a worker thread and is bounded by
    ``config.training_timeout`` when one is set.
    """
    prepared = _prepare(raw_rows, config)
    features, labels = to_training_arrays(prepared.encoded)
    model = await train_model_async(
        features, labels, config.model, timeout=config.training_timeout
    )
    return _finish(prepared, model, config)


def parse_args(args: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "sales_csv",
        type=Path,
        help="CSV export with created, short_desc and total_sold columns",
    )
    parser.add_argument(
        "--horizon",
        type=int,
        help="Number of future months to forecast (default: FORECAST_HORIZON_MONTHS or 6)",
    )
    parser.add_argument(
        "--epochs",
        type=int,
        help="Training passes over the data (default: FORECAST_EPOCHS or 100)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for repeatable training (default: FORECAST_RANDOM_STATE)",
    )
    parser.add_argument(
        "--distinct-labels",
        dest="distinct_labels",
        action="store_true",
        help="Use one x-axis label per distinct month instead of one per row",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        dest="output",
        help="Optional path where the chart series JSON should be written",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(args=args)


def build_config(args: argparse.Namespace, base: ForecastConfig) -> ForecastConfig:
    model = base.model
    if args.epochs is not None:
        model = replace(model, epochs=args.epochs)
    if args.seed is not None:
        model = replace(model, random_state=args.seed)
    return replace(
        base,
        horizon=args.horizon if args.horizon is not None else base.horizon,
        model=model,
        distinct_labels=args.distinct_labels or base.distinct_labels,
    )


def main(cli_args: Sequence[str] | None = None) -> None:
    args = parse_args(cli_args)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = build_config(args, ForecastConfig.from_env())

    records = load_records(args.sales_csv)
    result = run_forecast_pipeline(records, config)
    payload = json.dumps(result.series.to_dict(), indent=2)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload, encoding="utf-8")
        logger.info("Forecast series written to %s", args.output)
    else:
        print(payload)


if __name__ == "__main__":
    main()
