import numpy as np


def relative_drift(series):
    """Largest deviation from the first sample, relative to it (0 when it starts at 0)."""
    series = np.asarray(series, dtype=np.float64)
    if series.size == 0 or abs(series[0]) < 1e-12:
        return 0.0
    return float(np.max(np.abs(series - series[0])) / abs(series[0]))


def corner_counts(ejection_log):
    counts = {'top_left': 0, 'top_right': 0, 'bottom_left': 0, 'bottom_right': 0}
    for e in ejection_log:
        counts[e['corner']] += 1
    return counts
