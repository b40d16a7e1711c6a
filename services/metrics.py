"""Derived progress metrics.

Pure functions over already-fetched records. Nothing here is persisted except
the calories figure computed at exercise-log write time.
"""

from typing import Iterable, List, Optional, Sequence

# Calories burned per minute of exercise
CALORIES_PER_MINUTE = 7


def calories_for_duration(duration_minutes: int) -> int:
    """Calories burned for an exercise of the given duration."""
    return int(round(duration_minutes * CALORIES_PER_MINUTE))


def total_calories_burned(exercise_logs: Iterable) -> int:
    """Sum of ``calories_burned`` over exactly the logs given."""
    return sum(log.calories_burned for log in exercise_logs)


def latest_weight(weight_logs: Sequence) -> Optional[float]:
    """Weight of the newest log. Logs are ordered newest first."""
    if not weight_logs:
        return None
    return weight_logs[0].weight_kg


def weight_change(weight_logs: Sequence) -> float:
    """Newest weight minus the one before it; 0 with fewer than two logs.

    Positive means the client gained weight.
    """
    if len(weight_logs) < 2:
        return 0.0
    return weight_logs[0].weight_kg - weight_logs[1].weight_kg


def weight_deltas(weight_logs: Sequence) -> List[Optional[float]]:
    """Per-entry delta against the next older log, ``None`` for the oldest."""
    deltas = []
    for index, log in enumerate(weight_logs):
        if index + 1 < len(weight_logs):
            deltas.append(log.weight_kg - weight_logs[index + 1].weight_kg)
        else:
            deltas.append(None)
    return deltas


def count_active(profiles: Iterable) -> int:
    """Number of profiles with ``payment_status`` set."""
    return sum(1 for profile in profiles if profile.payment_status)
