"""
Ядро: метод Брента, прості методи одномірного пошуку, движок і зведення.
"""

from .brent import BrentOptions, BrentResult, SearchState, brents_method, minimize
from .engine import CountingFunction, LineSearchEngine, LineSearchRunResult
from .exceptions import (
    InvalidInterval,
    InvalidTolerance,
    LineSearchError,
    NonFiniteEvaluation,
)
from .functions import FUNCTIONS, TargetFunction
from .iteration_result import BrentIteration, StepKind, history_to_array
from .line_search import (
    ALL_LINE_SEARCH_METHODS,
    LINE_SEARCH_BRENT,
    LINE_SEARCH_DEFAULT,
    LINE_SEARCH_DICHOTOMY,
    LINE_SEARCH_GOLDEN_SECTION,
    LINE_SEARCH_QUADRATIC_FIT,
    LineSearchResult,
    line_search_1d,
)
from .results_summary import ResultsSummary

__all__ = [
    "BrentOptions",
    "BrentResult",
    "SearchState",
    "brents_method",
    "minimize",
    "CountingFunction",
    "LineSearchEngine",
    "LineSearchRunResult",
    "LineSearchError",
    "InvalidInterval",
    "InvalidTolerance",
    "NonFiniteEvaluation",
    "FUNCTIONS",
    "TargetFunction",
    "BrentIteration",
    "StepKind",
    "history_to_array",
    "ALL_LINE_SEARCH_METHODS",
    "LINE_SEARCH_BRENT",
    "LINE_SEARCH_DEFAULT",
    "LINE_SEARCH_DICHOTOMY",
    "LINE_SEARCH_GOLDEN_SECTION",
    "LINE_SEARCH_QUADRATIC_FIT",
    "LineSearchResult",
    "line_search_1d",
    "ResultsSummary",
]
