"""
brent.py

Метод Брента для пошуку мінімуму функції однієї змінної без похідних.

Ідея:
    - тримаємо дужку [a, b], що містить мінімум, та три найкращі точки:
        x – найменше значення f, w – друге, v – попереднє значення w;
    - на кожному проході пробуємо параболічну інтерполяцію через
      (x, fx), (w, fw), (v, fv);
    - якщо парабола "не заслуговує довіри" (крок завеликий, вершина поза
      дужкою або недостатньо прогресу), робимо крок золотого перерізу
      в бік більшої половини дужки;
    - крок ніколи не буває меншим за tol, тому дужка гарантовано звужується.

Публічний інтерфейс:
    minimize(f, a, b, rel_tol, abs_tol=1e-8, max_iterations=100) -> BrentResult
    brents_method(f, a, b, options) -> BrentResult
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from math import sqrt
from typing import Callable, Optional, Tuple

import numpy as np

from .exceptions import InvalidTolerance
from .functions import Scalar1DFunction, check_interval, check_max_iterations, evaluate
from .iteration_result import BrentIteration, StepKind

logger = logging.getLogger(__name__)

# Квадрат оберненого числа золотого перерізу, (3 - sqrt(5)) / 2 ≈ 0.381966
GOLDEN_K = (3.0 - sqrt(5.0)) / 2.0

IterationCallback = Callable[[BrentIteration], None]


# ---------------------------------------------------------------------------
# Налаштування методу
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BrentOptions:
    """
    Налаштування методу Брента.

    Атрибути:
        rel_tol         - відносна точність за x (tol = rel_tol*|x| + abs_tol)
        abs_tol         - абсолютна точність за x
        max_iterations  - максимальна кількість кроків
        record_history  - чи зберігати знімки проходів (BrentIteration)
    """
    rel_tol: float
    abs_tol: float = 1e-8
    max_iterations: int = 100
    record_history: bool = True

    def validate(self) -> None:
        if not (np.isfinite(self.rel_tol) and self.rel_tol >= 0.0):
            raise InvalidTolerance("rel_tol", self.rel_tol, "скінченне число >= 0")
        if not (np.isfinite(self.abs_tol) and self.abs_tol > 0.0):
            raise InvalidTolerance("abs_tol", self.abs_tol, "скінченне число > 0")
        check_max_iterations("max_iterations", self.max_iterations)


# ---------------------------------------------------------------------------
# Стан пошуку
# ---------------------------------------------------------------------------

@dataclass
class SearchState:
    """
    Змінний стан одного запуску методу Брента.

    Інваріанти:
        a < b, довжина b - a не зростає;
        fx – найменше серед fx, fw, fv.
    """
    a: float
    b: float
    x: float
    w: float
    v: float
    fx: float
    fw: float
    fv: float
    d: float = 0.0
    e: float = 0.0
    iterations: int = 0

    @classmethod
    def start(cls, a: float, b: float, fx: float, x: float) -> "SearchState":
        return cls(a=a, b=b, x=x, w=x, v=x, fx=fx, fw=fx, fv=fx)

    @property
    def midpoint(self) -> float:
        return 0.5 * (self.a + self.b)

    def tolerance(self, rel_tol: float, abs_tol: float) -> float:
        return rel_tol * abs(self.x) + abs_tol

    def is_converged(self, tol: float) -> bool:
        """Дужка настільки вузька, що крок уже не покращить оцінку."""
        return abs(self.x - self.midpoint) <= 2.0 * tol - 0.5 * (self.b - self.a)

    def snapshot(
        self,
        index: int,
        u: Optional[float] = None,
        fu: Optional[float] = None,
        step_kind: Optional[StepKind] = None,
    ) -> BrentIteration:
        return BrentIteration(
            index=index,
            a=self.a,
            b=self.b,
            x=self.x,
            w=self.w,
            v=self.v,
            fx=self.fx,
            u=u,
            fu=fu,
            step_kind=step_kind,
        )


# ---------------------------------------------------------------------------
# Результат
# ---------------------------------------------------------------------------

@dataclass
class BrentResult:
    """
    Результат роботи методу Брента.

    Атрибути:
        x_min       - знайдена точка мінімуму
        f_min       - f(x_min)
        iterations  - кількість зроблених кроків (пробних точок)
        func_evals  - кількість викликів f (iterations + 1)
        history     - знімки проходів (порожньо, якщо record_history=False)
        stopped_by  - "tol" або "max_iter"
        interval    - кінцева дужка (a, b)
    """
    x_min: float
    f_min: float
    iterations: int
    func_evals: int
    history: Tuple[BrentIteration, ...] = field(default_factory=tuple)
    stopped_by: str = "tol"
    interval: Tuple[float, float] = (0.0, 0.0)

    @property
    def converged(self) -> bool:
        return self.stopped_by == "tol"


# ---------------------------------------------------------------------------
# Кроки алгоритму
# ---------------------------------------------------------------------------

def _parabolic_step(state: SearchState, tol: float) -> Optional[float]:
    """
    Спроба параболічної інтерполяції через (x, fx), (w, fw), (v, fv).

    Повертає крок d або None, якщо парабола відхилена.
    Завжди зсуває e (e <- d), як і класична схема.
    """
    x, w, v = state.x, state.w, state.v
    fx, fw, fv = state.fx, state.fw, state.fv

    r = (x - w) * (fx - fv)
    q = (x - v) * (fx - fw)
    p = (x - v) * q - (x - w) * r
    q = 2.0 * (q - r)
    if q > 0.0:
        p = -p
    else:
        q = -q

    e_prev = state.e
    state.e = state.d

    # Крок має бути меншим за половину позаминулого і лишатися в (a, b)
    if not (abs(p) < abs(0.5 * q * e_prev)
            and p > q * (state.a - x)
            and p < q * (state.b - x)):
        return None

    d = p / q
    u = x + d
    tol2 = 2.0 * tol
    if (u - state.a) < tol2 or (state.b - u) < tol2:
        d = tol if x < state.midpoint else -tol
    return d


def _golden_section_step(state: SearchState) -> float:
    """Крок золотого перерізу в бік більшої частини дужки."""
    if state.x >= state.midpoint:
        state.e = state.a - state.x
    else:
        state.e = state.b - state.x
    return GOLDEN_K * state.e


def _update(state: SearchState, u: float, fu: float) -> None:
    """Звузити дужку та оновити x, w, v за значенням f(u)."""
    if fu <= state.fx:
        if u < state.x:
            state.b = state.x
        else:
            state.a = state.x
        state.v, state.fv = state.w, state.fw
        state.w, state.fw = state.x, state.fx
        state.x, state.fx = u, fu
        return

    if u < state.x:
        state.a = u
    else:
        state.b = u

    if fu <= state.fw or state.w == state.x:
        state.v, state.fv = state.w, state.fw
        state.w, state.fw = u, fu
    elif fu <= state.fv or state.v == state.x or state.v == state.w:
        state.v, state.fv = u, fu


# ---------------------------------------------------------------------------
# Публічний інтерфейс
# ---------------------------------------------------------------------------

def brents_method(
    func: Scalar1DFunction,
    a: float,
    b: float,
    options: BrentOptions,
    callback: Optional[IterationCallback] = None,
) -> BrentResult:
    """
    Знайти локальний мінімум func на [a, b] методом Брента.

    Parameters
    ----------
    func : Callable[[float], float]
        Цільова функція. Має бути скінченною на всьому [a, b].
    a, b : float
        Початкова дужка, a < b.
    options : BrentOptions
        Точність, ліміт кроків, запис історії.
    callback : Optional[Callable[[BrentIteration], None]]
        Викликається з кожним знімком проходу (для логів / GUI).

    Returns
    -------
    BrentResult

    Raises
    ------
    InvalidInterval, InvalidTolerance
        До першого виклику func.
    NonFiniteEvaluation
        Якщо func повернула NaN/inf; частковий результат не повертається.
    """
    left, right = check_interval(a, b)
    options.validate()

    x0 = left + GOLDEN_K * (right - left)
    state = SearchState.start(left, right, evaluate(func, x0), x0)

    history = []
    stopped_by = "max_iter"

    def emit(record: BrentIteration) -> None:
        if options.record_history:
            history.append(record)
        if callback is not None:
            callback(record)

    for index in range(options.max_iterations + 1):
        tol = state.tolerance(options.rel_tol, options.abs_tol)

        if state.is_converged(tol):
            emit(state.snapshot(index))
            stopped_by = "tol"
            break

        if state.iterations >= options.max_iterations:
            emit(state.snapshot(index))
            break

        step_kind = StepKind.GOLDEN_SECTION
        d = None
        if abs(state.e) > tol:
            d = _parabolic_step(state, tol)
            if d is not None:
                step_kind = StepKind.PARABOLIC
        if d is None:
            d = _golden_section_step(state)
        state.d = d

        if abs(d) >= tol:
            u = state.x + d
        else:
            u = state.x + (tol if d > 0.0 else -tol)

        fu = evaluate(func, u)
        state.iterations += 1

        emit(state.snapshot(index, u=u, fu=fu, step_kind=step_kind))
        logger.debug(
            "brent pass %d: %s step u=%.12g f(u)=%.12g width=%.3e",
            index, step_kind.value, u, fu, state.b - state.a,
        )

        _update(state, u, fu)

    if stopped_by == "max_iter":
        logger.warning(
            "Метод Брента не збігся за %d кроків: x=%.12g, ширина дужки %.3e",
            options.max_iterations, state.x, state.b - state.a,
        )

    return BrentResult(
        x_min=state.x,
        f_min=state.fx,
        iterations=state.iterations,
        func_evals=state.iterations + 1,
        history=tuple(history),
        stopped_by=stopped_by,
        interval=(state.a, state.b),
    )


def minimize(
    func: Scalar1DFunction,
    a: float,
    b: float,
    rel_tol: float,
    abs_tol: float = 1e-8,
    max_iterations: int = 100,
    *,
    record_history: bool = True,
    callback: Optional[IterationCallback] = None,
) -> BrentResult:
    """
    Зручна обгортка над brents_method(...) з параметрами у вигляді аргументів.

    Приклад:
        res = minimize(lambda x: (x - 2.0) ** 2, 0.0, 5.0, rel_tol=1e-8)
        res.x_min, res.f_min, res.iterations, res.history
    """
    options = BrentOptions(
        rel_tol=rel_tol,
        abs_tol=abs_tol,
        max_iterations=max_iterations,
        record_history=record_history,
    )
    return brents_method(func, a, b, options, callback=callback)


__all__ = [
    "GOLDEN_K",
    "BrentOptions",
    "SearchState",
    "BrentResult",
    "IterationCallback",
    "brents_method",
    "minimize",
]
