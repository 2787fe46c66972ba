"""Feed-forward regressor mapping (month index, product code) to quantity."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import List, Optional

import numpy as np
from numpy.typing import ArrayLike
from sklearn.neural_network import MLPRegressor

from .config import ModelConfig
from .exceptions import TrainingCancelledError, TrainingError
from .features import FEATURE_COLUMNS

logger = logging.getLogger(__name__)


def _as_feature_matrix(values: ArrayLike, *, name: str) -> np.ndarray:
    try:
        matrix = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise TrainingError(f"{name} must be numeric.") from exc
    if matrix.size == 0:
        return matrix.reshape(0, len(FEATURE_COLUMNS))
    if matrix.ndim == 1 and matrix.size == len(FEATURE_COLUMNS):
        matrix = matrix.reshape(1, -1)
    if matrix.ndim != 2 or matrix.shape[1] != len(FEATURE_COLUMNS):
        raise TrainingError(
            f"{name} must have shape (n, {len(FEATURE_COLUMNS)}); got {matrix.shape}."
        )
    return matrix


def _validate_training_data(
    features: ArrayLike, labels: ArrayLike
) -> tuple[np.ndarray, np.ndarray]:
    try:
        y = np.asarray(labels, dtype=float).ravel()
    except (TypeError, ValueError) as exc:
        raise TrainingError("labels must be numeric.") from exc
    X = _as_feature_matrix(features, name="features")
    if y.size == 0 or X.shape[0] == 0:
        raise TrainingError("Cannot train on an empty dataset.")
    if X.shape[0] != y.shape[0]:
        raise TrainingError(
            f"features and labels differ in length ({X.shape[0]} vs {y.shape[0]})."
        )
    if not (np.isfinite(X).all() and np.isfinite(y).all()):
        raise TrainingError("features and labels must be finite.")
    return X, y


class ForecastModel:
    """A trained two-layer network; create instances with :meth:`train`.

    The network has one hidden layer of ReLU units and a single linear output,
    fitted with Adam on squared error. Inputs are used as raw numbers.
    """

    def __init__(self, regressor: MLPRegressor, config: ModelConfig) -> None:
        self._regressor = regressor
        self.config = config

    @classmethod
    def train(
        cls,
        features: ArrayLike,
        labels: ArrayLike,
        config: ModelConfig = ModelConfig(),
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> "ForecastModel":
        """Fit a fresh network for exactly ``config.epochs`` passes over the data.

        Each epoch is one ``partial_fit`` call, so there is no early stopping
        and no validation split. ``cancel_event`` is checked before every
        epoch; once set, :class:`TrainingCancelledError` is raised.
        """
        X, y = _validate_training_data(features, labels)
        regressor = MLPRegressor(
            hidden_layer_sizes=(config.hidden_units,),
            activation="relu",
            solver="adam",
            alpha=0.0,
            batch_size=min(config.batch_size, X.shape[0]),
            learning_rate_init=config.learning_rate,
            max_iter=config.epochs,
            shuffle=config.shuffle,
            random_state=config.random_state,
        )

        logger.info(
            "Training forecast model on %d samples for %d epochs", X.shape[0], config.epochs
        )
        for epoch in range(1, config.epochs + 1):
            if cancel_event is not None and cancel_event.is_set():
                raise TrainingCancelledError(
                    f"Training cancelled before epoch {epoch} of {config.epochs}."
                )
            regressor.partial_fit(X, y)
            logger.debug("Epoch %d/%d loss=%.6f", epoch, config.epochs, regressor.loss_)

        if not np.isfinite(regressor.loss_):
            raise TrainingError("Training diverged; the final loss is not finite.")

        logger.info("Training finished with loss %.6f", regressor.loss_)
        return cls(regressor, config)

    @property
    def loss_curve(self) -> List[float]:
        return list(self._regressor.loss_curve_)

    def predict(self, inputs: ArrayLike) -> np.ndarray:
        """Return one predicted quantity per (month index, product code) pair."""
        X = _as_feature_matrix(inputs, name="inputs")
        if X.shape[0] == 0:
            return np.empty(0, dtype=float)
        return np.asarray(self._regressor.predict(X), dtype=float).ravel()


def train_model(
    features: ArrayLike,
    labels: ArrayLike,
    config: ModelConfig = ModelConfig(),
    *,
    cancel_event: Optional[threading.Event] = None,
) -> ForecastModel:
    return ForecastModel.train(features, labels, config, cancel_event=cancel_event)


async def train_model_async(
    features: ArrayLike,
    labels: ArrayLike,
    config: ModelConfig = ModelConfig(),
    *,
    timeout: Optional[float] = None,
) -> ForecastModel:
    """Train in a worker thread so the event loop keeps serving other requests.

    When ``timeout`` elapses or the awaiting task is cancelled, the worker is
    told to stop at its next epoch boundary and the error is re-raised.
    """
    cancel_event = threading.Event()
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(
                ForecastModel.train, features, labels, config, cancel_event=cancel_event
            ),
            timeout=timeout,
        )
    except (asyncio.TimeoutError, asyncio.CancelledError):
        cancel_event.set()
        logger.warning("Forecast model training interrupted; stopping worker thread")
        raise
