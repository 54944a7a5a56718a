"""Load-test result records and their file formats."""

from .loader import ResultsFormatError, load_results, results_from_dataframe, results_to_dataframe
from .models import Result, Results

__all__ = [
    "Result",
    "Results",
    "ResultsFormatError",
    "load_results",
    "results_from_dataframe",
    "results_to_dataframe",
]
