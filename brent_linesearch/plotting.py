"""
plotting.py

Графіки процесу мінімізації методом Брента (matplotlib, без pyplot).

Показує:
    - графік f(x) на початковій дужці, історію дужок [a, b] по проходах,
      пробні точки (золотий переріз / парабола) та знайдений мінімум;
    - довжину дужки b - a по проходах у логарифмічній шкалі.

Обидві функції повертають matplotlib.figure.Figure; збереження у файл –
fig.savefig(...) на боці користувача.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
from matplotlib.figure import Figure

from .core.brent import BrentResult
from .core.functions import Scalar1DFunction
from .core.iteration_result import BrentIteration, StepKind, history_to_array

_CURVE = "royalblue"
_BRACKET = "tab:red"
_KIND_COLORS = {
    StepKind.GOLDEN_SECTION: "goldenrod",
    StepKind.PARABOLIC: "tab:green",
}


def _style_axes(ax) -> None:
    ax.grid(True, linestyle="--", linewidth=0.5, alpha=0.6)
    ax.tick_params(labelsize=9)


def _sample_curve(func: Scalar1DFunction, xs: np.ndarray) -> np.ndarray:
    """
    Значення func на сітці xs; точки поза областю визначення
    (виняток або NaN) стають np.nan і на графіку просто пропускаються.
    """
    ys = np.empty_like(xs, dtype=float)
    with np.errstate(all="ignore"):
        for i, x in enumerate(xs):
            try:
                ys[i] = float(func(float(x)))
            except (ValueError, ArithmeticError):
                ys[i] = np.nan
    return ys


def plot_brent_history(
    func: Scalar1DFunction,
    result: BrentResult,
    fig: Optional[Figure] = None,
    num: int = 300,
    margin: float = 0.1,
) -> Figure:
    """
    Побудувати f(x), дужки кожного проходу та пробні точки.

    Дужки малюються горизонтальними відрізками під кривою, по одному
    на прохід (перший – найнижче).
    """
    history = result.history
    if not history:
        raise ValueError("Історія порожня: запустіть метод з record_history=True.")

    data = history_to_array(history)
    a0, b0 = data[0, 0], data[0, 1]
    pad = margin * (b0 - a0)
    xs = np.linspace(a0 - pad, b0 + pad, num)
    ys = _sample_curve(func, xs)

    finite = ys[np.isfinite(ys)]
    y_min, y_max = (finite.min(), finite.max()) if finite.size else (0.0, 1.0)
    y_span = (y_max - y_min) or 1.0

    if fig is None:
        fig = Figure(figsize=(8, 6))
    ax = fig.add_subplot(111)
    _style_axes(ax)

    ax.plot(xs, ys, linewidth=2, color=_CURVE, label="f(x)")

    # Дужки: від y_min - 0.05*span вниз
    levels = y_min - y_span * (0.05 + 0.3 * np.arange(len(history)) / max(len(history), 1))
    ax.hlines(levels, data[:, 0], data[:, 1], colors=_BRACKET, linewidth=2, label="[a, b]")

    for kind, color in _KIND_COLORS.items():
        trials = [rec for rec in history if rec.step_kind is kind]
        if trials:
            ax.scatter(
                [rec.u for rec in trials],
                [rec.fu for rec in trials],
                marker="*", s=70, color=color, edgecolors="black", linewidths=0.5,
                zorder=5, label=f"u ({kind.value})",
            )

    ax.scatter([result.x_min], [result.f_min], s=60, color=_BRACKET, zorder=6, label="x*")

    ax.set_xlabel("x")
    ax.set_ylabel("f(x)")
    ax.set_title(f"Метод Брента: {result.iterations} кроків, {result.stopped_by}")
    ax.legend(loc="best", fontsize=8)
    fig.tight_layout()
    return fig


def plot_bracket_width(
    history: Sequence[BrentIteration],
    fig: Optional[Figure] = None,
) -> Figure:
    """Довжина дужки b - a по проходах (semilog)."""
    if not history:
        raise ValueError("Історія порожня: немає що малювати.")

    data = history_to_array(history)
    widths = data[:, 1] - data[:, 0]

    if fig is None:
        fig = Figure(figsize=(6, 4))
    ax = fig.add_subplot(111)
    _style_axes(ax)

    ax.semilogy(np.arange(len(widths)), widths, marker="o", markersize=4, linewidth=1.5)
    ax.set_xlabel("k (номер проходу)")
    ax.set_ylabel("b - a")
    ax.set_title("Довжина дужки")
    fig.tight_layout()
    return fig


__all__ = [
    "plot_brent_history",
    "plot_bracket_width",
]
