import math

import pytest

pytest.importorskip("matplotlib")

import numpy as np
from matplotlib.figure import Figure

from brent_linesearch.core.brent import minimize
from brent_linesearch.core.functions import shifted_parabola, x_cos_x
from brent_linesearch.plotting import plot_bracket_width, plot_brent_history


def test_plot_brent_history(tmp_path):
    res = minimize(x_cos_x, 0.0, 5.0, rel_tol=1e-8)
    fig = plot_brent_history(x_cos_x, res)
    assert isinstance(fig, Figure)
    (ax,) = fig.axes
    assert len(ax.lines) >= 1
    assert ax.get_xlabel() == "x"

    path = tmp_path / "brent.png"
    fig.savefig(path)
    assert path.exists() and path.stat().st_size > 0


def test_plot_brent_history_into_existing_figure():
    res = minimize(shifted_parabola, 0.0, 5.0, rel_tol=1e-8)
    fig = Figure()
    assert plot_brent_history(shifted_parabola, res, fig=fig) is fig


def test_plot_brent_history_requires_history():
    res = minimize(shifted_parabola, 0.0, 5.0, rel_tol=1e-8, record_history=False)
    with pytest.raises(ValueError):
        plot_brent_history(shifted_parabola, res)


def test_plot_bracket_width_is_semilog():
    res = minimize(x_cos_x, 0.0, 5.0, rel_tol=1e-8)
    fig = plot_bracket_width(res.history)
    (ax,) = fig.axes
    assert ax.get_yscale() == "log"
    (line,) = ax.lines
    assert len(line.get_xdata()) == len(res.history)


def test_plot_bracket_width_rejects_empty_history():
    with pytest.raises(ValueError):
        plot_bracket_width(())


def test_plot_brent_history_objective_undefined_outside_interval():
    def sqrt_bowl(x):
        return (math.sqrt(x) - 1.0) ** 2

    res = minimize(sqrt_bowl, 0.0, 4.0, rel_tol=1e-8)
    assert res.x_min == pytest.approx(1.0, abs=1e-6)

    fig = plot_brent_history(sqrt_bowl, res)
    curve = fig.axes[0].lines[0]
    xs = np.asarray(curve.get_xdata())
    ys = np.asarray(curve.get_ydata())
    assert np.all(np.isnan(ys[xs < 0.0]))
    assert np.all(np.isfinite(ys[xs >= 0.0]))
