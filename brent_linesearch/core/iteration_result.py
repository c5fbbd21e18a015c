"""
iteration_result.py

Структури даних для представлення окремих проходів методу Брента.
Використовуються як у самому алгоритмі, так і в побудові графіків.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np


class StepKind(enum.Enum):
    """Тип кроку, зробленого на проході методу Брента."""

    GOLDEN_SECTION = "golden_section"
    PARABOLIC = "parabolic"


@dataclass(frozen=True)
class BrentIteration:
    """
    Знімок стану пошуку на початку одного проходу.

    Атрибути:
        index      - номер проходу (0, 1, 2, ...)
        a, b       - поточна дужка
        x, w, v    - найкраща, друга та попередня друга точки
        fx         - значення f(x)
        u, fu      - пробна точка цього проходу та f(u)
                     (None для останнього запису, коли спрацював критерій зупинки)
        step_kind  - тип кроку (None для останнього запису)
    """
    index: int
    a: float
    b: float
    x: float
    w: float
    v: float
    fx: float
    u: Optional[float] = None
    fu: Optional[float] = None
    step_kind: Optional[StepKind] = None

    @property
    def width(self) -> float:
        return self.b - self.a

    @property
    def is_final(self) -> bool:
        return self.step_kind is None


HISTORY_COLUMNS = ("a", "b", "x", "w", "v", "fx", "u", "fu")


def history_to_array(history: Sequence[BrentIteration]) -> np.ndarray:
    """
    Перетворити історію у масив форми (n, 8) зі стовпцями HISTORY_COLUMNS.
    Відсутні u / fu (останній запис) заповнюються NaN.
    """
    rows = [
        [
            rec.a, rec.b, rec.x, rec.w, rec.v, rec.fx,
            np.nan if rec.u is None else rec.u,
            np.nan if rec.fu is None else rec.fu,
        ]
        for rec in history
    ]
    return np.array(rows, dtype=float).reshape(len(rows), len(HISTORY_COLUMNS))


__all__ = [
    "StepKind",
    "BrentIteration",
    "HISTORY_COLUMNS",
    "history_to_array",
]
