"""
Model Evaluation

Metrics are computed in price space: the model predicts log price, which is
exponentiated before comparing with the sale price.
"""

from typing import Callable, Sequence

import numpy as np

from pricemodel.core.models import Metrics, TrainingRecord


def compute_metrics(
    records: Sequence[TrainingRecord],
    predict_log: Callable[[TrainingRecord], float],
) -> Metrics:
    """MAE, RMSE, MAPE and R² of a log-price predictor.

    MAPE averages |error| / actual over records with a positive price,
    divided by the full record count. R² is 0 when all actual prices are
    equal. An empty record set yields all-zero metrics.
    """
    if not records:
        return Metrics()

    actual = np.array([r.price for r in records], dtype=float)
    predicted = np.exp(np.array([predict_log(r) for r in records], dtype=float))
    errors = predicted - actual
    abs_errors = np.abs(errors)

    positive = actual > 0
    mape = float(np.sum(abs_errors[positive] / actual[positive]) / len(records))

    ss_tot = float(np.sum((actual - actual.mean()) ** 2))
    ss_res = float(np.sum(errors ** 2))
    r2 = 1.0 - ss_res / ss_tot if ss_tot > 0 else 0.0

    return Metrics(
        mae=float(abs_errors.mean()),
        rmse=float(np.sqrt(np.mean(errors ** 2))),
        mape=mape,
        r2=r2,
    )
