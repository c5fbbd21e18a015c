"""
line_search.py

Модуль одномірного пошуку мінімуму функції φ: float -> float на відрізку [a, b].

Підтримувані методи:

    1) метод дихотомії;
    2) метод золотого перерізу;
    3) метод квадратичної апроксимації (quadratic fit search);
    4) метод Брента (золотий переріз + параболічна інтерполяція).

Єдиний публічний інтерфейс:
    - LineSearchResult        – результат 1D-пошуку;
    - line_search_1d(...)     – виклик конкретного методу;
    - константи LINE_SEARCH_* – імена методів.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from math import sqrt
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .brent import BrentOptions, IterationCallback, brents_method
from .exceptions import InvalidTolerance
from .functions import Scalar1DFunction, check_interval, check_max_iterations, evaluate


# ---------------------------------------------------------------------------
# Константи / "enum" для типів методів лінійного пошуку
# ---------------------------------------------------------------------------

LINE_SEARCH_DEFAULT = "default"  # "за замовчуванням" – метод Брента
LINE_SEARCH_DICHOTOMY = "dichotomy"
LINE_SEARCH_GOLDEN_SECTION = "golden_section"
LINE_SEARCH_QUADRATIC_FIT = "quadratic_fit"
LINE_SEARCH_BRENT = "brent"

ALL_LINE_SEARCH_METHODS = (
    LINE_SEARCH_DICHOTOMY,
    LINE_SEARCH_GOLDEN_SECTION,
    LINE_SEARCH_QUADRATIC_FIT,
    LINE_SEARCH_BRENT,
)

# Для типізації (можна використовувати в сигнатурах)
LineSearchMethod = str

# Відносна точність за замовчуванням для методу Брента
DEFAULT_REL_TOL = sqrt(float(np.finfo(float).eps))


# ---------------------------------------------------------------------------
# Результат одномірного пошуку
# ---------------------------------------------------------------------------

@dataclass
class LineSearchResult:
    """
    Результат роботи процедури одномірного пошуку.

    Атрибути:
        alpha       - знайдена точка мінімуму α*;
        phi_value   - значення φ(α*) у цій точці;
        iterations  - кількість ітерацій 1D-алгоритму;
        func_evals  - кількість викликів φ під час пошуку;
        meta        - довільна службова інформація
                      (кінцевий інтервал, причина зупинки, історія, тощо).
    """
    alpha: float
    phi_value: float
    iterations: int
    func_evals: int
    meta: Dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Публічний інтерфейс line search
# ---------------------------------------------------------------------------

def line_search_1d(
    phi: Scalar1DFunction,
    a: float,
    b: float,
    method: LineSearchMethod = LINE_SEARCH_DEFAULT,
    tol: float = 1e-6,
    max_iter: int = 100,
    options: Optional[Dict[str, Any]] = None,
) -> LineSearchResult:
    """
    Виконати одномірний пошук мінімуму функції φ(α) на відрізку [a, b].

    Parameters
    ----------
    phi : Callable[[float], float]
        Цільова скалярна функція одного аргументу.

    a, b : float
        Початковий інтервал пошуку [a, b], де a < b.

    method : LineSearchMethod
        Обраний метод. Доступні варіанти (див. константи LINE_SEARCH_*):
            - "default" (= "brent")
            - "dichotomy"
            - "golden_section"
            - "quadratic_fit"
            - "brent"

    tol : float
        Бажана точність за α (довжина інтервалу; для Брента – abs_tol).

    max_iter : int
        Максимальна кількість ітерацій одномірного алгоритму.

    options : Optional[Dict[str, Any]]
        Додаткові параметри для конкретних методів:
            delta          – зсув від середини для дихотомії;
            rel_tol        – відносна точність для Брента;
            record_history – чи зберігати історію Брента (default: True);
            callback       – callback Брента для кожного проходу.

    Returns
    -------
    LineSearchResult

    Raises
    ------
    InvalidInterval, InvalidTolerance, NonFiniteEvaluation
    """
    left, right = check_interval(a, b)
    if not (np.isfinite(tol) and tol > 0.0):
        raise InvalidTolerance("tol", tol, "скінченне число > 0")
    max_iter = check_max_iterations("max_iter", max_iter)

    options = options or {}

    if method == LINE_SEARCH_DICHOTOMY:
        return _line_search_dichotomy(phi, left, right, tol, max_iter, options)

    if method == LINE_SEARCH_GOLDEN_SECTION:
        return _line_search_golden_section(phi, left, right, tol, max_iter, options)

    if method == LINE_SEARCH_QUADRATIC_FIT:
        return _line_search_quadratic_fit(phi, left, right, tol, max_iter, options)

    if method in (LINE_SEARCH_BRENT, LINE_SEARCH_DEFAULT):
        return _line_search_brent(phi, left, right, tol, max_iter, options)

    raise ValueError(f"Невідомий метод лінійного пошуку: '{method}'.")


# ---------------------------------------------------------------------------
# Внутрішні реалізації конкретних методів
# ---------------------------------------------------------------------------

def _line_search_dichotomy(
    phi: Scalar1DFunction,
    a: float,
    b: float,
    tol: float,
    max_iter: int,
    options: Dict[str, Any],
) -> LineSearchResult:
    """
    Метод дихотомії для пошуку мінімуму φ(α) на [a, b].

    Ідея:
        - на кожній ітерації беремо середину m = (a + b) / 2;
        - обчислюємо φ у точках m - δ та m + δ;
        - звужуємо інтервал залежно від того, в якій половині менше значення.

    Параметри з options:
        delta : float (optional)
            Малий зсув δ, 0 < δ < tol / 2. Якщо не задано, береться δ = 0.25 * tol.
    """
    left = a
    right = b

    delta = float(options.get("delta", 0.25 * tol))
    if not (0.0 < delta < 0.5 * tol):
        raise InvalidTolerance("delta", delta, "0 < delta < tol / 2")

    iterations = 0
    func_evals = 0

    # (a, b, x₋, x₊, f₋, f₊) на кожній ітерації, до звуження
    history: List[Tuple[float, float, float, float, float, float]] = []

    while (right - left) > tol and iterations < max_iter:
        iterations += 1

        mid = 0.5 * (left + right)
        x1 = mid - delta
        x2 = mid + delta

        f1 = evaluate(phi, x1)
        f2 = evaluate(phi, x2)
        func_evals += 2
        history.append((left, right, x1, x2, f1, f2))

        if f1 < f2:
            right = x2
        else:
            left = x1

    alpha_star = 0.5 * (left + right)
    phi_star = evaluate(phi, alpha_star)
    func_evals += 1

    meta = {
        "method": LINE_SEARCH_DICHOTOMY,
        "interval": (left, right),
        "stopped_by": "tol" if (right - left) <= tol else "max_iter",
        "delta": delta,
        "history": history,
    }

    return LineSearchResult(
        alpha=alpha_star,
        phi_value=phi_star,
        iterations=iterations,
        func_evals=func_evals,
        meta=meta,
    )


def _line_search_golden_section(
    phi: Scalar1DFunction,
    a: float,
    b: float,
    tol: float,
    max_iter: int,
    options: Dict[str, Any],
) -> LineSearchResult:
    """
    Метод золотого перерізу для пошуку мінімуму φ(α) на [a, b].

    Ідея:
        - тримаємо два внутрішні пункти
              c = a + (b - a) / τ^2,
              d = a + (b - a) / τ,
          де τ = (1 + sqrt(5)) / 2;
        - порівнюємо φ(c) і φ(d) та звужуємо інтервал, зберігаючи одну
          з внутрішніх точок, тож на ітерацію припадає один виклик φ.
    """
    left = a
    right = b

    inv_phi = (sqrt(5.0) - 1.0) / 2.0      # ≈ 0.618..., 1/τ
    inv_phi_sq = (3.0 - sqrt(5.0)) / 2.0   # ≈ 0.382..., 1/τ^2

    h = right - left
    if h <= tol:
        alpha_star = 0.5 * (left + right)
        phi_star = evaluate(phi, alpha_star)
        return LineSearchResult(
            alpha=alpha_star,
            phi_value=phi_star,
            iterations=0,
            func_evals=1,
            meta={
                "method": LINE_SEARCH_GOLDEN_SECTION,
                "interval": (left, right),
                "stopped_by": "initial_tol",
                "history": [],
            },
        )

    c = left + inv_phi_sq * h
    d = left + inv_phi * h

    fc = evaluate(phi, c)
    fd = evaluate(phi, d)
    func_evals = 2
    iterations = 0

    # (a, b, c, d, f(c), f(d)) на початку кожної ітерації
    history: List[Tuple[float, float, float, float, float, float]] = []

    while h > tol and iterations < max_iter:
        iterations += 1
        history.append((left, right, c, d, fc, fd))

        if fc >= fd:
            # Мінімум у [c, right]
            left = c
            c = d
            fc = fd
            h = right - left
            d = left + inv_phi * h
            fd = evaluate(phi, d)
        else:
            # Мінімум у [left, d]
            right = d
            d = c
            fd = fc
            h = right - left
            c = left + inv_phi_sq * h
            fc = evaluate(phi, c)
        func_evals += 1

    alpha_star = 0.5 * (left + right)
    phi_star = evaluate(phi, alpha_star)
    func_evals += 1

    meta = {
        "method": LINE_SEARCH_GOLDEN_SECTION,
        "interval": (left, right),
        "stopped_by": "tol" if h <= tol else "max_iter",
        "history": history,
    }

    return LineSearchResult(
        alpha=alpha_star,
        phi_value=phi_star,
        iterations=iterations,
        func_evals=func_evals,
        meta=meta,
    )


def quadratic_fit_vertex(
    a: float,
    gamma: float,
    b: float,
    y_a: float,
    y_gamma: float,
    y_b: float,
) -> Tuple[float, float]:
    """
    Вершина параболи через (a, y_a), (γ, y_γ), (b, y_b).

    Повертає (x̄, D), де x̄ = N / (2 D); при |D| < 1e-12 (точки майже
    на прямій) x̄ – середина [a, b].
    """
    denom = y_a * (gamma - b) + y_gamma * (b - a) + y_b * (a - gamma)
    numer = (
        y_a * (gamma ** 2 - b ** 2)
        + y_gamma * (b ** 2 - a ** 2)
        + y_b * (a ** 2 - gamma ** 2)
    )
    if abs(denom) < 1e-12:
        return 0.5 * (a + b), denom
    return 0.5 * numer / denom, denom


def _line_search_quadratic_fit(
    phi: Scalar1DFunction,
    a: float,
    b: float,
    tol: float,
    max_iter: int,
    options: Dict[str, Any],
) -> LineSearchResult:
    """
    Метод квадратичної апроксимації (quadratic fit search).

    Ідея:
        - тримаємо трійку a < γ < b, де φ(γ) не більше значень на кінцях;
        - будуємо параболу через три точки і беремо її вершину x̄;
        - залежно від положення x̄ відносно γ та значення φ(x̄)
          відкидаємо частину дужки.

    Зупинка:
        - довжина дужки < tol;
        - вершина параболи вироджена або поза (a, b) ("invalid_step");
        - max_iter.
    """
    gamma = 0.5 * (a + b)
    y_a = evaluate(phi, a)
    y_gamma = evaluate(phi, gamma)
    y_b = evaluate(phi, b)
    func_evals = 3
    iterations = 0
    stopped_by = "max_iter"

    history: List[Tuple[float, float, float, float]] = []

    while iterations < max_iter:
        if (b - a) < tol:
            stopped_by = "tol"
            break

        x_est, denom = quadratic_fit_vertex(a, gamma, b, y_a, y_gamma, y_b)
        if abs(denom) < 1e-12 or x_est <= a or x_est >= b:
            stopped_by = "invalid_step"
            break

        iterations += 1
        y_est = evaluate(phi, x_est)
        func_evals += 1
        history.append((a, gamma, b, x_est))

        if x_est > gamma:
            if y_est >= y_gamma:
                b, y_b = x_est, y_est
            else:
                a, y_a = gamma, y_gamma
                gamma, y_gamma = x_est, y_est
        else:
            if y_est >= y_gamma:
                a, y_a = x_est, y_est
            else:
                b, y_b = gamma, y_gamma
                gamma, y_gamma = x_est, y_est

    # Найкраща з відомих точок
    xs = np.array([a, gamma, b], dtype=float)
    ys = np.array([y_a, y_gamma, y_b], dtype=float)
    best_idx = int(np.argmin(ys))

    meta = {
        "method": LINE_SEARCH_QUADRATIC_FIT,
        "interval": (a, b),
        "stopped_by": stopped_by,
        "history": history,
    }

    return LineSearchResult(
        alpha=float(xs[best_idx]),
        phi_value=float(ys[best_idx]),
        iterations=iterations,
        func_evals=func_evals,
        meta=meta,
    )


def _line_search_brent(
    phi: Scalar1DFunction,
    a: float,
    b: float,
    tol: float,
    max_iter: int,
    options: Dict[str, Any],
) -> LineSearchResult:
    """
    Метод Брента (див. core.brent) у форматі LineSearchResult.

    tol використовується як abs_tol, rel_tol береться з options
    (за замовчуванням sqrt(машинного епсилон)).
    """
    callback: Optional[IterationCallback] = options.get("callback")
    brent_options = BrentOptions(
        rel_tol=float(options.get("rel_tol", DEFAULT_REL_TOL)),
        abs_tol=tol,
        max_iterations=max_iter,
        record_history=bool(options.get("record_history", True)),
    )
    res = brents_method(phi, a, b, brent_options, callback=callback)

    meta = {
        "method": LINE_SEARCH_BRENT,
        "interval": res.interval,
        "stopped_by": res.stopped_by,
        "converged": res.converged,
        "history": res.history,
    }

    return LineSearchResult(
        alpha=res.x_min,
        phi_value=res.f_min,
        iterations=res.iterations,
        func_evals=res.func_evals,
        meta=meta,
    )


__all__ = [
    "LineSearchResult",
    "LineSearchMethod",
    "LINE_SEARCH_DEFAULT",
    "LINE_SEARCH_DICHOTOMY",
    "LINE_SEARCH_GOLDEN_SECTION",
    "LINE_SEARCH_QUADRATIC_FIT",
    "LINE_SEARCH_BRENT",
    "ALL_LINE_SEARCH_METHODS",
    "DEFAULT_REL_TOL",
    "quadratic_fit_vertex",
    "line_search_1d",
]
