from __future__ import annotations

import asyncio
import threading

import numpy as np

from src.forecasting import (
    ForecastModel,
    ModelConfig,
    TrainingCancelledError,
    TrainingError,
    train_model_async,
)

FAST_CONFIG = ModelConfig(epochs=10, random_state=7)


def _training_data() -> tuple[np.ndarray, np.ndarray]:
    features = np.array([[1, 0], [2, 0], [3, 0], [1, 1], [2, 1], [3, 1]], dtype=float)
    labels = np.array([5.0, 7.0, 9.0, 3.0, 4.0, 5.0])
    return features, labels


def test_predict_returns_one_finite_value_per_input() -> None:
    features, labels = _training_data()

    model = ForecastModel.train(features, labels, FAST_CONFIG)
    predictions = model.predict([[4, 0], [5, 0], [13, 1]])

    assert predictions.shape == (3,)
    assert np.isfinite(predictions).all()


def test_train_runs_every_epoch() -> None:
    features, labels = _training_data()

    model = ForecastModel.train(features, labels, FAST_CONFIG)

    assert len(model.loss_curve) == FAST_CONFIG.epochs


def test_default_training_reduces_loss() -> None:
    features, labels = _training_data()

    model = ForecastModel.train(features, labels, ModelConfig(random_state=0))

    assert len(model.loss_curve) == 100
    assert model.loss_curve[-1] < model.loss_curve[0]


def test_predict_does_not_change_model() -> None:
    features, labels = _training_data()
    model = ForecastModel.train(features, labels, FAST_CONFIG)

    first = model.predict([[7, 0], [8, 1]])
    second = model.predict([[7, 0], [8, 1]])

    np.testing.assert_array_equal(first, second)


def test_predict_with_no_inputs_returns_empty_array() -> None:
    features, labels = _training_data()
    model = ForecastModel.train(features, labels, FAST_CONFIG)

    assert model.predict([]).shape == (0,)


def test_train_rejects_bad_inputs() -> None:
    features, labels = _training_data()
    cases = [
        ([], []),
        (features, labels[:-1]),
        (features[:, :1], labels),
        ([[1, 0], [2]], [1.0, 2.0]),
        (features, np.where(labels > 8, np.nan, labels)),
    ]

    for bad_features, bad_labels in cases:
        try:
            ForecastModel.train(bad_features, bad_labels, FAST_CONFIG)
        except TrainingError:
            pass
        else:
            raise AssertionError("Expected TrainingError for malformed training data.")


def test_train_stops_when_cancelled() -> None:
    features, labels = _training_data()
    cancel = threading.Event()
    cancel.set()

    try:
        ForecastModel.train(features, labels, FAST_CONFIG, cancel_event=cancel)
    except TrainingCancelledError as exc:
        assert "epoch 1" in str(exc)
    else:
        raise AssertionError("Expected TrainingCancelledError when cancel is set.")


def test_train_model_async_returns_trained_model() -> None:
    features, labels = _training_data()

    model = asyncio.run(train_model_async(features, labels, FAST_CONFIG))

    assert model.predict([[4, 1]]).shape == (1,)


def test_train_model_async_times_out() -> None:
    rng = np.random.default_rng(0)
    features = np.column_stack([rng.integers(1, 13, 500), rng.integers(0, 5, 500)])
    labels = rng.uniform(0, 50, 500)
    slow = ModelConfig(epochs=100_000, random_state=1)

    try:
        asyncio.run(train_model_async(features, labels, slow, timeout=0.05))
    except asyncio.TimeoutError:
        pass
    else:
        raise AssertionError("Expected training to time out.")
