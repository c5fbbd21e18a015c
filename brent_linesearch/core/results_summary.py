"""
results_summary.py

Зведена таблиця результатів роботи різних методів одномірного пошуку
для однієї цільової функції.

Працює поверх об'єктів, які мають інтерфейс як LineSearchRunResult:
    - method_name
    - x_star
    - f_star
    - n_iter
    - func_evals
    - stopped_by
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ResultsSummary:
    """
    Зведення результатів роботи кількох методів.

    Приклад використання:
        summary = ResultsSummary()
        summary.add_run(run_golden)
        summary.add_run(run_brent)
        rows = summary.as_rows()  # для pandas / CSV
    """
    runs: List[Any] = field(default_factory=list)

    def add_run(self, run: Any) -> None:
        """Додати результат одного методу до зведення."""
        self.runs.append(run)

    # ------------------------------------------------------------------
    # Перетворення в "табличний" вигляд
    # ------------------------------------------------------------------

    def as_rows(self) -> List[Dict[str, Any]]:
        """
        Повернути список dict-рядків з полями:
            method, x_star, f_star, n_iter, func_evals, stopped_by
        """
        rows: List[Dict[str, Any]] = []

        for run in self.runs:
            x_star = getattr(run, "x_star", None)
            f_star = getattr(run, "f_star", None)
            n_iter = getattr(run, "n_iter", None)
            func_evals = getattr(run, "func_evals", None)

            rows.append(
                {
                    "method": getattr(run, "method_name", "<unknown>"),
                    "x_star": float(x_star) if x_star is not None else None,
                    "f_star": float(f_star) if f_star is not None else None,
                    "n_iter": int(n_iter) if n_iter is not None else None,
                    "func_evals": int(func_evals) if func_evals is not None else None,
                    "stopped_by": getattr(run, "stopped_by", None),
                }
            )

        return rows

    # ------------------------------------------------------------------
    # Вибір "найкращого" методу
    # ------------------------------------------------------------------

    def best_by_f(self) -> Optional[Any]:
        """
        Повернути run з найменшим значенням f_star.
        Якщо список порожній або f_star не визначені, повертає None.
        """
        candidates = [r for r in self.runs if getattr(r, "f_star", None) is not None]
        if not candidates:
            return None
        return min(candidates, key=lambda r: float(r.f_star))

    def fewest_evals(self) -> Optional[Any]:
        """Повернути run з найменшою кількістю викликів функції."""
        candidates = [r for r in self.runs if getattr(r, "func_evals", None) is not None]
        if not candidates:
            return None
        return min(candidates, key=lambda r: int(r.func_evals))

    # ------------------------------------------------------------------
    # Опційно: повернути pandas.DataFrame
    # ------------------------------------------------------------------

    def to_dataframe(self):
        """
        Повернути pandas.DataFrame зі зведеною таблицею.

        Вимога: встановлений пакет pandas (extra "dataframe").
        """
        try:
            import pandas as pd  # type: ignore
        except ImportError as exc:  # pragma: no cover
            raise RuntimeError(
                "Для використання ResultsSummary.to_dataframe() "
                "потрібно встановити пакет 'pandas'."
            ) from exc

        return pd.DataFrame(self.as_rows())


__all__ = ["ResultsSummary"]
