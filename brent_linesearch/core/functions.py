"""
functions.py

Тестові цільові функції однієї змінної та допоміжні засоби для їх обчислення.

Формат:
    - усі функції приймають скаляр x і повертають float;
    - evaluate(...) обчислює f(x) і перевіряє, що значення скінченне;
    - є реєстр FUNCTIONS для зручного вибору функції в движку / тестах.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .exceptions import InvalidInterval, InvalidTolerance, NonFiniteEvaluation

Scalar1DFunction = Callable[[float], float]


# ---------------------------------------------------------------------------
# Обчислення з перевіркою скінченності
# ---------------------------------------------------------------------------

def evaluate(func: Scalar1DFunction, x: float) -> float:
    """
    Обчислити f(x) та переконатися, що результат скінченний.

    Raises
    ------
    NonFiniteEvaluation
        Якщо f(x) є NaN або ±inf.
    """
    value = float(func(x))
    if not np.isfinite(value):
        raise NonFiniteEvaluation(x, value)
    return value


def check_interval(a: float, b: float) -> Tuple[float, float]:
    """Перевірити a < b (обидві межі скінченні) та повернути їх як float."""
    left = float(a)
    right = float(b)
    if not (np.isfinite(left) and np.isfinite(right) and left < right):
        raise InvalidInterval(a, b)
    return left, right


def check_max_iterations(name: str, value: int) -> int:
    """Перевірити, що ліміт ітерацій - ціле число >= 1 (bool не приймається)."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise InvalidTolerance(name, value, "ціле число >= 1")
    return int(value)


# ---------------------------------------------------------------------------
# Цільові функції
# ---------------------------------------------------------------------------

def square(x: float) -> float:
    """f(x) = x^2"""
    return x ** 2


def quartic(x: float) -> float:
    """
    f(x) = (x - 2)^4
    (пласке дно: друга похідна в мінімумі дорівнює нулю)
    """
    return (x - 2.0) ** 4


def x_cos_x(x: float) -> float:
    """f(x) = x * cos(x)"""
    return float(x * np.cos(x))


def shifted_parabola(x: float) -> float:
    """f(x) = (x - 2)^2 + 1"""
    return (x - 2.0) ** 2 + 1.0


def perfect_square(x: float) -> float:
    """f(x) = x^2 + 2x + 1"""
    return x ** 2 + 2.0 * x + 1.0


def absolute(x: float) -> float:
    """
    f(x) = |x|
    (негладка функція, параболічні кроки часто відхиляються)
    """
    return abs(x)


def cosine(x: float) -> float:
    """f(x) = cos(x)"""
    return float(np.cos(x))


def exp_minus_linear(x: float) -> float:
    """f(x) = exp(x) - 2x"""
    return float(np.exp(x) - 2.0 * x)


# ---------------------------------------------------------------------------
# Реєстр функцій для вибору в движку / тестах
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TargetFunction:
    key: str
    name: str
    func: Scalar1DFunction
    interval: Tuple[float, float]
    x_star: Optional[float] = None


FUNCTIONS: Dict[str, TargetFunction] = {
    "square": TargetFunction(
        key="square",
        name="f(x) = x^2",
        func=square,
        interval=(-1.0, 1.0),
        x_star=0.0,
    ),
    "quartic": TargetFunction(
        key="quartic",
        name="f(x) = (x - 2)^4",
        func=quartic,
        interval=(0.0, 4.0),
        x_star=2.0,
    ),
    "x_cos_x": TargetFunction(
        key="x_cos_x",
        name="f(x) = x * cos(x)",
        func=x_cos_x,
        interval=(0.0, 5.0),
        # корінь рівняння cos(x) - x sin(x) = 0 на (π/2, 3π/2)
        x_star=3.425618459481728,
    ),
    "shifted_parabola": TargetFunction(
        key="shifted_parabola",
        name="f(x) = (x - 2)^2 + 1",
        func=shifted_parabola,
        interval=(0.0, 5.0),
        x_star=2.0,
    ),
    "perfect_square": TargetFunction(
        key="perfect_square",
        name="f(x) = x^2 + 2x + 1",
        func=perfect_square,
        interval=(-5.0, 5.0),
        x_star=-1.0,
    ),
    "absolute": TargetFunction(
        key="absolute",
        name="f(x) = |x|",
        func=absolute,
        interval=(-1.0, 1.0),
        x_star=0.0,
    ),
    "cosine": TargetFunction(
        key="cosine",
        name="f(x) = cos(x)",
        func=cosine,
        interval=(0.0, 2.0 * np.pi),
        x_star=float(np.pi),
    ),
    "exp_minus_linear": TargetFunction(
        key="exp_minus_linear",
        name="f(x) = exp(x) - 2x",
        func=exp_minus_linear,
        interval=(-1.0, 2.0),
        x_star=float(np.log(2.0)),
    ),
}

__all__ = [
    "Scalar1DFunction",
    "evaluate",
    "check_interval",
    "check_max_iterations",
    "square",
    "quartic",
    "x_cos_x",
    "shifted_parabola",
    "perfect_square",
    "absolute",
    "cosine",
    "exp_minus_linear",
    "TargetFunction",
    "FUNCTIONS",
]
