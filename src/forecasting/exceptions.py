"""Error types raised by the forecasting pipeline."""

from __future__ import annotations


class ForecastError(Exception):
    """Base class for pipeline failures that stop a forecasting run."""


class EmptyDatasetError(ForecastError, ValueError):
    """No valid sales observations were available for training."""


class EncodingError(ForecastError, LookupError):
    """A product was encoded against a catalog that does not contain it."""


class TrainingError(ForecastError, ValueError):
    """Feature or label arrays cannot be used to fit the model."""


class TrainingCancelledError(TrainingError):
    """Training was stopped through its cancellation hook."""
