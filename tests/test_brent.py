import dataclasses
import logging
import math

import pytest

from brent_linesearch.core.brent import (
    GOLDEN_K,
    BrentOptions,
    SearchState,
    _golden_section_step,
    _parabolic_step,
    _update,
    brents_method,
    minimize,
)
from brent_linesearch.core.exceptions import (
    InvalidInterval,
    InvalidTolerance,
    NonFiniteEvaluation,
)
from brent_linesearch.core.functions import FUNCTIONS, quartic, shifted_parabola, square, x_cos_x
from brent_linesearch.core.iteration_result import BrentIteration, StepKind


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

def test_square_on_symmetric_interval():
    res = minimize(square, -1.0, 1.0, rel_tol=0.0, abs_tol=1e-10)
    assert res.converged
    assert res.x_min == pytest.approx(0.0, abs=1e-8)
    assert res.f_min == pytest.approx(0.0, abs=1e-16)


def test_flat_quartic_minimum():
    res = minimize(quartic, 0.0, 4.0, rel_tol=1e-8, max_iterations=200)
    assert abs(res.x_min - 2.0) <= 1e-3


def test_x_cos_x_finds_interior_minimum():
    res = minimize(x_cos_x, 0.0, 5.0, rel_tol=1e-8)
    assert res.converged
    assert 0.0 < res.x_min < 5.0
    assert res.x_min == pytest.approx(FUNCTIONS["x_cos_x"].x_star, abs=1e-5)
    assert res.f_min < 0.0


def test_nan_at_initial_probe_fails(recording):
    f = recording(lambda x: float("nan"))
    with pytest.raises(NonFiniteEvaluation) as excinfo:
        minimize(f, 0.0, 1.0, rel_tol=1e-8)
    assert excinfo.value.x == pytest.approx(GOLDEN_K)
    assert math.isnan(excinfo.value.value)
    assert len(f.points) == 1


def test_non_finite_trial_point_aborts_run():
    def f(x):
        return float("inf") if x > 2.2 else (x - 2.0) ** 2

    with pytest.raises(NonFiniteEvaluation) as excinfo:
        minimize(f, 0.0, 4.0, rel_tol=1e-8)
    assert excinfo.value.x > 2.2
    assert excinfo.value.value == float("inf")


def test_reversed_interval_rejected_before_evaluation(recording):
    f = recording(square)
    with pytest.raises(InvalidInterval):
        minimize(f, 1.0, 0.5, rel_tol=1e-8)
    assert f.points == []


@pytest.mark.parametrize("a, b", [(0.0, 0.0), (float("-inf"), 1.0), (0.0, float("nan"))])
def test_degenerate_intervals_rejected(recording, a, b):
    f = recording(square)
    with pytest.raises(InvalidInterval):
        minimize(f, a, b, rel_tol=1e-8)
    assert f.points == []


@pytest.mark.parametrize(
    "kwargs",
    [
        {"rel_tol": -1e-8},
        {"rel_tol": float("nan")},
        {"rel_tol": 1e-8, "abs_tol": 0.0},
        {"rel_tol": 1e-8, "abs_tol": -1.0},
        {"rel_tol": 1e-8, "max_iterations": 0},
        {"rel_tol": 1e-8, "max_iterations": 2.5},
    ],
)
def test_invalid_tolerances_rejected_before_evaluation(recording, kwargs):
    f = recording(square)
    with pytest.raises(InvalidTolerance):
        minimize(f, -1.0, 1.0, **kwargs)
    assert f.points == []


def test_invalid_interval_is_value_error():
    with pytest.raises(ValueError):
        minimize(square, 2.0, 1.0, rel_tol=1e-8)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "key", ["square", "shifted_parabola", "perfect_square", "exp_minus_linear", "cosine"]
)
def test_converges_within_tolerance(key):
    target = FUNCTIONS[key]
    rel_tol, abs_tol = 1e-8, 1e-6
    res = minimize(target.func, *target.interval, rel_tol=rel_tol, abs_tol=abs_tol)
    assert res.converged
    tol = rel_tol * abs(res.x_min) + abs_tol
    assert abs(res.x_min - target.x_star) <= 2.0 * tol
    a, b = res.interval
    assert a <= target.x_star <= b


@pytest.mark.parametrize("key", sorted(FUNCTIONS))
def test_registry_minimizers_found(key):
    target = FUNCTIONS[key]
    res = minimize(target.func, *target.interval, rel_tol=1e-10, abs_tol=1e-7, max_iterations=500)
    assert res.x_min == pytest.approx(target.x_star, abs=1e-4)


def test_best_value_never_regresses():
    res = minimize(x_cos_x, 0.0, 5.0, rel_tol=1e-10, abs_tol=1e-10)
    values = [rec.fx for rec in res.history]
    assert all(later <= earlier for earlier, later in zip(values, values[1:]))
    assert res.f_min == values[-1]


def test_bracket_shrinks_on_every_step():
    res = minimize(x_cos_x, 0.0, 5.0, rel_tol=1e-10, abs_tol=1e-10)
    widths = [rec.width for rec in res.history]
    assert all(later < earlier for earlier, later in zip(widths, widths[1:]))
    for rec in res.history:
        assert rec.a < rec.x < rec.b


def test_stopping_test_is_idempotent():
    options = BrentOptions(rel_tol=1e-8, abs_tol=1e-8)
    res = brents_method(shifted_parabola, 0.0, 5.0, options)
    final = res.history[-1]
    assert final.is_final

    state = SearchState(
        a=final.a, b=final.b, x=final.x, w=final.w, v=final.v,
        fx=final.fx, fw=final.fx, fv=final.fx,
    )
    tol = state.tolerance(options.rel_tol, options.abs_tol)
    assert state.is_converged(tol)
    assert state.is_converged(tol)


def test_trial_points_stay_inside_bracket():
    res = minimize(x_cos_x, 0.0, 5.0, rel_tol=1e-10, abs_tol=1e-10)
    for rec in res.history[:-1]:
        assert rec.a < rec.u < rec.b


# ---------------------------------------------------------------------------
# History, options, callback
# ---------------------------------------------------------------------------

def test_history_layout():
    res = minimize(shifted_parabola, 0.0, 5.0, rel_tol=1e-8)
    history = res.history

    assert isinstance(history, tuple)
    assert len(history) == res.iterations + 1
    assert res.func_evals == res.iterations + 1
    assert [rec.index for rec in history] == list(range(len(history)))

    first = history[0]
    assert (first.a, first.b) == (0.0, 5.0)
    assert first.x == first.w == first.v == pytest.approx(GOLDEN_K * 5.0)
    assert first.step_kind is StepKind.GOLDEN_SECTION

    for rec in history[:-1]:
        assert rec.step_kind in (StepKind.GOLDEN_SECTION, StepKind.PARABOLIC)
        assert rec.fu == pytest.approx(shifted_parabola(rec.u))

    last = history[-1]
    assert last.is_final
    assert last.u is None and last.fu is None
    assert last.x == res.x_min


def test_parabolic_steps_taken_on_smooth_function():
    res = minimize(shifted_parabola, 0.0, 5.0, rel_tol=1e-8)
    kinds = {rec.step_kind for rec in res.history}
    assert StepKind.PARABOLIC in kinds


def test_history_records_are_immutable():
    res = minimize(square, -1.0, 1.0, rel_tol=1e-8)
    with pytest.raises(dataclasses.FrozenInstanceError):
        res.history[0].x = 10.0


def test_history_capture_can_be_disabled():
    with_history = minimize(x_cos_x, 0.0, 5.0, rel_tol=1e-8)
    without = minimize(x_cos_x, 0.0, 5.0, rel_tol=1e-8, record_history=False)
    assert without.history == ()
    assert without.x_min == with_history.x_min
    assert without.iterations == with_history.iterations


def test_callback_receives_every_record():
    seen = []
    res = minimize(shifted_parabola, 0.0, 5.0, rel_tol=1e-8, callback=seen.append)
    assert tuple(seen) == res.history
    assert all(isinstance(rec, BrentIteration) for rec in seen)


class Cancelled(Exception):
    pass


def test_callback_exception_propagates():
    def stop(rec):
        if rec.index == 2:
            raise Cancelled

    with pytest.raises(Cancelled):
        minimize(shifted_parabola, 0.0, 5.0, rel_tol=1e-8, callback=stop)


def test_max_iterations_is_not_an_error(caplog):
    with caplog.at_level(logging.WARNING, logger="brent_linesearch.core.brent"):
        res = minimize(shifted_parabola, 0.0, 5.0, rel_tol=1e-12, abs_tol=1e-12, max_iterations=3)
    assert res.stopped_by == "max_iter"
    assert not res.converged
    assert res.iterations == 3
    assert res.func_evals == 4
    assert len(res.history) == 4
    assert res.history[-1].is_final
    assert "не збігся" in caplog.text


def test_func_evals_match_actual_calls(recording):
    f = recording(x_cos_x)
    res = minimize(f, 0.0, 5.0, rel_tol=1e-8)
    assert len(f.points) == res.func_evals


# ---------------------------------------------------------------------------
# Individual steps
# ---------------------------------------------------------------------------

def _state(**overrides):
    values = dict(a=0.0, b=1.0, x=0.5, w=0.3, v=0.2, fx=1.0, fw=2.0, fv=3.0)
    values.update(overrides)
    return SearchState(**values)


def test_golden_step_goes_into_larger_half():
    state = _state(x=0.3)
    d = _golden_section_step(state)
    assert state.e == pytest.approx(0.7)
    assert d == pytest.approx(GOLDEN_K * 0.7)

    state = _state(x=0.8)
    d = _golden_section_step(state)
    assert state.e == pytest.approx(-0.8)
    assert d < 0.0


def test_parabolic_step_hits_vertex():
    f = lambda t: (t - 0.4) ** 2
    state = _state(x=0.5, w=0.3, v=0.6, fx=f(0.5), fw=f(0.3), fv=f(0.6), d=0.1, e=1.0)
    d = _parabolic_step(state, tol=1e-3)
    assert d == pytest.approx(-0.1)
    assert state.e == 0.1


def test_parabolic_step_rejected_when_not_shrinking_fast_enough():
    f = lambda t: (t - 0.4) ** 2
    state = _state(x=0.5, w=0.3, v=0.6, fx=f(0.5), fw=f(0.3), fv=f(0.6), d=0.1, e=0.1)
    assert _parabolic_step(state, tol=1e-3) is None
    assert state.e == 0.1


def test_parabolic_step_near_edge_is_clamped():
    # вершина в 0.0005, ближче за 2*tol до a = 0
    f = lambda t: (t - 0.0005) ** 2
    state = _state(a=0.0, b=1.0, x=0.01, w=0.02, v=0.03,
                   fx=f(0.01), fw=f(0.02), fv=f(0.03), d=0.1, e=1.0)
    d = _parabolic_step(state, tol=1e-3)
    assert d == pytest.approx(1e-3)


def test_update_with_improvement_moves_best_point():
    state = _state()
    _update(state, 0.6, 0.5)
    assert (state.a, state.b) == (0.5, 1.0)
    assert (state.x, state.w, state.v) == (0.6, 0.5, 0.3)
    assert (state.fx, state.fw, state.fv) == (0.5, 1.0, 2.0)


def test_update_with_second_best_replaces_w():
    state = _state()
    _update(state, 0.6, 1.5)
    assert (state.a, state.b) == (0.0, 0.6)
    assert (state.x, state.w, state.v) == (0.5, 0.6, 0.3)


def test_update_with_third_best_replaces_v():
    state = _state()
    _update(state, 0.4, 2.5)
    assert (state.a, state.b) == (0.4, 1.0)
    assert (state.x, state.w, state.v) == (0.5, 0.3, 0.4)


def test_update_with_worst_point_only_shrinks_bracket():
    state = _state()
    _update(state, 0.4, 5.0)
    assert (state.a, state.b) == (0.4, 1.0)
    assert (state.x, state.w, state.v) == (0.5, 0.3, 0.2)


def test_update_replaces_w_when_it_coincides_with_x():
    state = _state(w=0.5, v=0.5, fw=1.0, fv=1.0)
    _update(state, 0.7, 9.0)
    assert (state.w, state.fw) == (0.7, 9.0)
    assert (state.v, state.fv) == (0.5, 1.0)
