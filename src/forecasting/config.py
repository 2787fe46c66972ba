"""Configuration objects for the sales forecasting pipeline."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from src.ingestion.record_validation import RecordFieldConfig

DEFAULT_HORIZON = 6
DEFAULT_HIDDEN_UNITS = 64
DEFAULT_EPOCHS = 100
DEFAULT_LEARNING_RATE = 0.001
DEFAULT_BATCH_SIZE = 32

HORIZON_ENV_VAR = "FORECAST_HORIZON_MONTHS"
EPOCHS_ENV_VAR = "FORECAST_EPOCHS"
RANDOM_STATE_ENV_VAR = "FORECAST_RANDOM_STATE"
TIMEOUT_ENV_VAR = "FORECAST_TRAINING_TIMEOUT"


@dataclass(frozen=True)
class ModelConfig:
    """Hyperparameters for :class:`~src.forecasting.model.ForecastModel`.

    ``random_state`` is ``None`` by default, so weight initialisation and
    batch shuffling differ between runs. Pass an integer for repeatable fits.
    """

    hidden_units: int = DEFAULT_HIDDEN_UNITS
    epochs: int = DEFAULT_EPOCHS
    learning_rate: float = DEFAULT_LEARNING_RATE
    batch_size: int = DEFAULT_BATCH_SIZE
    shuffle: bool = True
    random_state: Optional[int] = None

    def __post_init__(self) -> None:
        if self.hidden_units < 1:
            raise ValueError("hidden_units must be a positive integer.")
        if self.epochs < 1:
            raise ValueError("epochs must be a positive integer.")
        if self.batch_size < 1:
            raise ValueError("batch_size must be a positive integer.")
        if self.learning_rate <= 0:
            raise ValueError("learning_rate must be greater than zero.")


@dataclass(frozen=True)
class ForecastConfig:
    """Settings for one end-to-end run of :func:`run_forecast_pipeline`."""

    horizon: int = DEFAULT_HORIZON
    model: ModelConfig = field(default_factory=ModelConfig)
    fields: RecordFieldConfig = field(default_factory=RecordFieldConfig)
    distinct_labels: bool = False
    training_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if self.horizon < 1:
            raise ValueError("horizon must be at least one month.")
        if self.training_timeout is not None and self.training_timeout <= 0:
            raise ValueError("training_timeout must be greater than zero when set.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ForecastConfig":
        """Build a config from ``FORECAST_*`` environment variables."""
        env = os.environ if environ is None else environ

        horizon = _read_int(env, HORIZON_ENV_VAR, DEFAULT_HORIZON)
        epochs = _read_int(env, EPOCHS_ENV_VAR, DEFAULT_EPOCHS)
        seed_raw = env.get(RANDOM_STATE_ENV_VAR, "").strip()
        timeout_raw = env.get(TIMEOUT_ENV_VAR, "").strip()

        try:
            timeout = float(timeout_raw) if timeout_raw else None
        except ValueError as exc:
            raise ValueError(
                f"{TIMEOUT_ENV_VAR} must be a number of seconds, got '{timeout_raw}'."
            ) from exc

        return cls(
            horizon=horizon,
            model=ModelConfig(
                epochs=epochs,
                random_state=_read_int(env, RANDOM_STATE_ENV_VAR, 0) if seed_raw else None,
            ),
            training_timeout=timeout,
        )


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got '{raw}'.") from exc
