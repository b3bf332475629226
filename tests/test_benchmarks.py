import json
import math

import numpy as np
import pytest

from benchmarks.metrics.error_analysis import compute_error_statistics, plot_error_distribution
from benchmarks.metrics.step_response import compute_step_metrics, plot_step_response
from benchmarks.systems.pendulum import PendulumBenchmark, PendulumSimulator, run_pendulum_benchmark


def test_step_metrics_first_order():
    t = np.linspace(0, 5, 501)
    y = 1 - np.exp(-t / 0.5)

    m = compute_step_metrics(t, y, target=1.0)

    assert m["overshoot_percent"] == 0
    # 2% band is reached after about four time constants.
    assert m["settling_time"] == pytest.approx(0.5 * math.log(50), abs=0.02)
    assert m["iae"] == pytest.approx(0.5, abs=0.01)


def test_step_metrics_overshoot_and_never_settling():
    t = np.array([0.0, 1.0, 2.0, 3.0])
    y = np.array([0.0, 1.5, 0.5, 1.2])

    m = compute_step_metrics(t, y, target=1.0)

    assert m["overshoot_percent"] == pytest.approx(50.0)
    assert m["settling_time"] == math.inf
    assert m["steady_state_error"] == pytest.approx(-0.2)


def test_step_metrics_rejects_bad_input():
    with pytest.raises(ValueError):
        compute_step_metrics([0.0, 1.0], [0.0], target=1.0)
    with pytest.raises(ValueError):
        compute_step_metrics([0.0, 1.0], [0.0, 0.0], target=0.0)


def test_error_statistics():
    s = compute_error_statistics([1.0, -1.0, 1.0, -1.0])

    assert s["mean"] == 0
    assert s["rms"] == pytest.approx(1.0)
    assert s["max_abs"] == 1.0
    assert compute_error_statistics([]) == {}


def test_plots_are_written(tmp_path):
    t = np.linspace(0, 1, 11)
    plot_step_response(t, {"a": t}, 1.0, save_path=str(tmp_path / "step.png"))
    plot_error_distribution(np.sin(t), save_path=str(tmp_path / "err.png"))

    assert (tmp_path / "step.png").exists()
    assert (tmp_path / "err.png").exists()


def test_simulator_rests_at_bottom():
    sim = PendulumSimulator()

    state = sim.simulate(0.0, np.array([0.0, 0.0]), 0.01)

    assert np.allclose(state, [0.0, 0.0])
    assert sim.gravity_torque(np.pi / 2) == pytest.approx(9.81)


def test_benchmark_rejects_bad_setup():
    with pytest.raises(ValueError):
        PendulumBenchmark(torque_limit=0.0)
    with pytest.raises(ValueError):
        PendulumBenchmark(dt=1.0, duration=0.5)


def test_tracking_trial_respects_torque_limit():
    bench = PendulumBenchmark(duration=1.0)

    result = bench.run_tracking_trial({"proportional_gain": 40.0, "integral_gain": 20.0, "derivative_gain": 8.0,
                                       "anti_windup_gain": 1.0, "low_pass_time_constant": 0.02})

    assert len(result["theta"]) == len(result["control"]) + 1
    assert max(abs(u) for u in result["control"]) <= bench.torque_limit
    assert result["theta"][-1] > 0


def test_anti_windup_limits_integral_growth():
    bench = PendulumBenchmark(duration=2.0, torque_limit=10.0)
    gains = {"proportional_gain": 40.0, "integral_gain": 20.0, "derivative_gain": 8.0,
             "low_pass_time_constant": 0.02}

    with_tracking = bench.run_tracking_trial(dict(gains, anti_windup_gain=1.0))
    without_tracking = bench.run_tracking_trial(dict(gains, anti_windup_gain=0.0))

    assert max(with_tracking["integral"]) < max(without_tracking["integral"])


def test_basic_trial_uses_simulated_time():
    bench = PendulumBenchmark(duration=1.0)

    result = bench.run_basic_trial({"proportional_gain": 40.0, "integral_gain": 20.0, "derivative_gain": 8.0,
                                    "timeout": 0.1})

    assert len(result["integral"]) == 100
    assert result["integral"][0] == 0
    assert result["integral"][-1] > 0


def test_run_pendulum_benchmark(tmp_path):
    figures = tmp_path / "figures"
    results = tmp_path / "results"

    summary = run_pendulum_benchmark(str(figures), str(results))

    assert set(summary) == {"PIDT1 anti-windup", "PIDT1 no anti-windup", "PID"}
    assert (figures / "pendulum_step_response.png").exists()
    with open(results / "pendulum_benchmark.json") as f:
        assert set(json.load(f)) == set(summary)
