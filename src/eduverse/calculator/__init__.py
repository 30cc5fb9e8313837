"""Scientific calculator."""

from .evaluator import FUNCTIONS, UNDEFINED, Evaluator, format_result

__all__ = ["Evaluator", "FUNCTIONS", "UNDEFINED", "format_result"]
