"""
engine.py

Двигун для запуску методів одномірного пошуку.

Функціонал:
    - виконує обраний метод line_search_1d(...) на цільовій функції;
    - рахує кількість викликів цільової функції (незалежно від того,
      що повідомляє сам метод);
    - фіксує причину зупинки ("tol", "max_iter", "invalid_step", ...);
    - підтримує callback для кожного проходу методу Брента;
    - порівнює кілька методів на одній функції (ResultsSummary).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

from .brent import IterationCallback
from .functions import Scalar1DFunction
from .line_search import ALL_LINE_SEARCH_METHODS, LineSearchMethod, line_search_1d
from .results_summary import ResultsSummary

logger = logging.getLogger(__name__)


class CountingFunction:
    """
    Обгортка над цільовою функцією з лічильником викликів.

    Використання:
        f = CountingFunction(math.cos)
        f(1.0); f(2.0)
        f.evals  # 2
    """

    def __init__(self, func: Scalar1DFunction) -> None:
        self.func = func
        self.evals: int = 0

    def __call__(self, x: float) -> float:
        self.evals += 1
        return self.func(x)

    def reset(self) -> None:
        self.evals = 0


@dataclass
class LineSearchRunResult:
    """
    Підсумок одного запуску методу одномірного пошуку.

    Атрибути:
        method_name   - назва методу ("brent", "golden_section", ...).
        x_star        - знайдена точка мінімуму.
        f_star        - значення f(x_star).
        n_iter        - кількість ітерацій методу.
        func_evals    - фактична кількість викликів цільової функції.
        stopped_by    - причина зупинки.
        interval      - кінцевий інтервал пошуку.
        meta          - службова інформація методу (історія тощо).
    """
    method_name: str
    x_star: float
    f_star: float
    n_iter: int
    func_evals: int
    stopped_by: str
    interval: Tuple[float, float]
    meta: Dict[str, Any] = field(default_factory=dict)


class LineSearchEngine:
    """
    Движок, який запускає методи одномірного пошуку.

    Налаштування за замовчуванням (можуть бути переозначені у run()):
        tol       : точність за x (default: 1e-6)
        max_iter  : максимальна кількість ітерацій (default: 100)
    """

    def __init__(self, tol: float = 1e-6, max_iter: int = 100) -> None:
        self.tol_default = tol
        self.max_iter_default = max_iter

    def run(
        self,
        method: LineSearchMethod,
        func: Scalar1DFunction,
        a: float,
        b: float,
        tol: Optional[float] = None,
        max_iter: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
        callback: Optional[IterationCallback] = None,
    ) -> LineSearchRunResult:
        """
        Запустити один метод на [a, b].
        """
        tol = tol if tol is not None else self.tol_default
        max_iter = max_iter if max_iter is not None else self.max_iter_default

        options = dict(options or {})
        if callback is not None:
            options["callback"] = callback

        counted = CountingFunction(func)
        logger.info("Запуск методу %s на [%g, %g], tol=%g", method, a, b, tol)

        res = line_search_1d(
            counted, a, b, method=method, tol=tol, max_iter=max_iter, options=options
        )

        meta = dict(res.meta)
        result = LineSearchRunResult(
            method_name=str(meta.get("method", method)),
            x_star=res.alpha,
            f_star=res.phi_value,
            n_iter=res.iterations,
            func_evals=counted.evals,
            stopped_by=str(meta.get("stopped_by", "unknown")),
            interval=tuple(meta.get("interval", (a, b))),
            meta=meta,
        )

        logger.info(
            "Метод %s: x*=%.10g f*=%.10g, ітерацій %d, викликів f %d (%s)",
            result.method_name, result.x_star, result.f_star,
            result.n_iter, result.func_evals, result.stopped_by,
        )
        return result

    def compare(
        self,
        func: Scalar1DFunction,
        a: float,
        b: float,
        methods: Iterable[LineSearchMethod] = ALL_LINE_SEARCH_METHODS,
        tol: Optional[float] = None,
        max_iter: Optional[int] = None,
    ) -> ResultsSummary:
        """
        Запустити кілька методів на одній функції та зібрати зведення.
        """
        summary = ResultsSummary()
        for method in methods:
            summary.add_run(self.run(method, func, a, b, tol=tol, max_iter=max_iter))
        return summary


__all__ = [
    "CountingFunction",
    "LineSearchRunResult",
    "LineSearchEngine",
]
