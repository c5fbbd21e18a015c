"""
exceptions.py

Помилки одномірного пошуку мінімуму.

Усі помилки виявляються одразу в місці виникнення і ніколи не
замінюються "частковим" результатом: зіпсована дужка гірша за явну відмову.
"""

from __future__ import annotations


class LineSearchError(Exception):
    """Базовий клас для помилок одномірного пошуку."""


class InvalidInterval(LineSearchError, ValueError):
    """
    Некоректний початковий інтервал [a, b]:
    a >= b або одна з меж не є скінченним числом.

    Перевіряється до першого виклику цільової функції.
    """

    def __init__(self, a: float, b: float) -> None:
        self.a = a
        self.b = b
        super().__init__(
            f"Ліва межа інтервалу повинна бути меншою за праву (a < b), "
            f"обидві межі скінченні; отримано a={a!r}, b={b!r}."
        )


class InvalidTolerance(LineSearchError, ValueError):
    """
    Некоректний параметр точності або ліміт ітерацій
    (rel_tol, abs_tol, max_iterations, delta, ...).
    """

    def __init__(self, name: str, value: object, requirement: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Параметр {name}={value!r}: очікується {requirement}.")


class NonFiniteEvaluation(LineSearchError, ArithmeticError):
    """
    Цільова функція повернула NaN або ±inf.

    Атрибути:
        x     - точка, в якій обчислювали функцію;
        value - отримане значення.
    """

    def __init__(self, x: float, value: float) -> None:
        self.x = x
        self.value = value
        super().__init__(
            f"Цільова функція повернула нескінченне/невизначене значення "
            f"f({x!r}) = {value!r}."
        )


__all__ = [
    "LineSearchError",
    "InvalidInterval",
    "InvalidTolerance",
    "NonFiniteEvaluation",
]
