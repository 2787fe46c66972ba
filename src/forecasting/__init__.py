"""Forecasting entry points for the sales forecast project."""

from .catalog import ProductCatalog, build_catalog
from .config import ForecastConfig, ModelConfig
from .exceptions import (
    EmptyDatasetError,
    EncodingError,
    ForecastError,
    TrainingCancelledError,
    TrainingError,
)
from .features import (
    EncodedObservation,
    encode_observations,
    month_index,
    to_training_arrays,
)
from .generator import ForecastResult, future_months, generate_forecasts
from .model import ForecastModel, train_model, train_model_async
from .pipeline import PipelineResult, run_forecast_pipeline, run_forecast_pipeline_async
from .series import SeriesBundle, SeriesDataset, assemble_series

__all__ = [
    "ProductCatalog",
    "build_catalog",
    "ForecastConfig",
    "ModelConfig",
    "EmptyDatasetError",
    "EncodingError",
    "ForecastError",
    "TrainingCancelledError",
    "TrainingError",
    "EncodedObservation",
    "encode_observations",
    "month_index",
    "to_training_arrays",
    "ForecastResult",
    "future_months",
    "generate_forecasts",
    "ForecastModel",
    "train_model",
    "train_model_async",
    "PipelineResult",
    "run_forecast_pipeline",
    "run_forecast_pipeline_async",
    "SeriesBundle",
    "SeriesDataset",
    "assemble_series",
]
