"""Decision Timing — pure computation of how long the leader took to decide.

Invariants:
    - Elapsed time is rounded half-up to whole seconds
    - Negative elapsed time (clock skew) clamps to 0
    - Display format is "{minutes}분 {seconds}초", seconds always 0-59
"""

import math
from datetime import datetime


def elapsed_whole_seconds(started_at: datetime, finished_at: datetime) -> int:
    elapsed = (finished_at - started_at).total_seconds()
    return max(0, math.floor(elapsed + 0.5))


def format_decision_speed(total_seconds: int) -> str:
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}분 {seconds}초"
