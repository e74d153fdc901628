"""
Forecasting Calculations

Projects future values from a historical series using linear regression,
moving averages and exponential smoothing.
"""

import enum
from typing import List, Sequence

import numpy as np

# Mean period-over-period change inside this band counts as flat
TREND_DEADBAND = 0.1


class TrendDirection(str, enum.Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


def linear_forecast(series: Sequence[float], periods_ahead: int) -> List[float]:
    """
    Forecast by ordinary least squares over (index, value) pairs.

    Args:
        series: Historical values, oldest first
        periods_ahead: Number of future periods to project

    Returns:
        Projected values for the next periods_ahead periods. Empty when the
        history has fewer than two points and the line is underdetermined.
    """
    n = len(series)
    if n < 2:
        return []

    x = np.arange(n, dtype=float)
    y = np.asarray(series, dtype=float)

    x_mean = x.mean()
    y_mean = y.mean()
    denominator = np.sum((x - x_mean) ** 2)
    numerator = np.sum((x - x_mean) * (y - y_mean))

    slope = 0.0 if denominator == 0 else numerator / denominator
    intercept = y_mean - slope * x_mean

    future_x = np.arange(n, n + periods_ahead, dtype=float)
    return [float(v) for v in slope * future_x + intercept]


def moving_average_forecast(series: Sequence[float], window_size: int) -> float:
    """
    Forecast the next value as the mean of the last window_size points.

    Returns 0 when the history is shorter than the window.
    """
    if window_size <= 0 or len(series) < window_size:
        return 0.0
    return float(np.mean(series[-window_size:]))


def smoothed_series(series: Sequence[float], alpha: float) -> List[float]:
    """
    Apply S[t] = alpha * x[t] + (1 - alpha) * S[t-1], seeded with x[0].
    """
    if len(series) == 0:
        return []

    smoothed = [float(series[0])]
    for value in series[1:]:
        smoothed.append(alpha * value + (1 - alpha) * smoothed[-1])
    return smoothed


def exponential_smoothing(
    series: Sequence[float], alpha: float, periods_ahead: int
) -> List[float]:
    """
    Forecast with simple exponential smoothing.

    Simple smoothing has no trend term, so every forecast period repeats the
    last smoothed value.

    Args:
        series: Historical values, oldest first
        alpha: Smoothing factor between 0 and 1
        periods_ahead: Number of future periods to project

    Returns:
        periods_ahead copies of the final smoothed value, or [] for no history
    """
    smoothed = smoothed_series(series, alpha)
    if not smoothed:
        return []
    return [smoothed[-1]] * periods_ahead


def identify_trend(series: Sequence[float]) -> TrendDirection:
    """Classify the mean period-over-period change of a series."""
    if len(series) < 2:
        return TrendDirection.STABLE

    average_change = float(np.mean(np.diff(np.asarray(series, dtype=float))))
    if average_change > TREND_DEADBAND:
        return TrendDirection.INCREASING
    if average_change < -TREND_DEADBAND:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE
