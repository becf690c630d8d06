"""Line-of-sight evaluation, elevation lookup and calculation history."""

from .evaluator import evaluate
from .service import LineOfSightReport, calculate_line_of_sight, get_history, list_calculations

__all__ = [
    "evaluate",
    "calculate_line_of_sight",
    "get_history",
    "list_calculations",
    "LineOfSightReport",
]
