import numpy as np
import matplotlib.pyplot as plt
from scipy.integrate import solve_ivp
from pidctl import Controller, ControllerConfig, ManualClock, TrackingConfig, TrackingController
from benchmarks.metrics.step_response import compute_step_metrics, plot_step_response
from benchmarks.metrics.error_analysis import compute_error_statistics
import os
import json
from typing import Dict, List, Optional


class PendulumSimulator:
    def __init__(self, m: float = 1.0, l: float = 1.0, g: float = 9.81, b: float = 0.1, noise_level: float = 0.0,
                 seed: Optional[int] = None):
        self.m = m
        self.l = l
        self.g = g
        self.b = b
        self.noise_level = noise_level
        self.rng = np.random.default_rng(seed)

    def dynamics(self, state: np.ndarray, u: float, noise: float = 0.0) -> np.ndarray:
        if not np.isscalar(u):
            raise ValueError(f"Control input must be scalar, got shape {np.shape(u)}")
        theta, dtheta = state
        inertia = self.m * self.l ** 2
        ddtheta = -self.g / self.l * np.sin(theta) - self.b / inertia * dtheta + u / inertia + noise
        return np.array([dtheta, ddtheta])

    def gravity_torque(self, theta: float) -> float:
        return float(self.m * self.g * self.l * np.sin(theta))

    def simulate(self, u: float, state: np.ndarray, dt: float) -> np.ndarray:
        # Disturbance is held constant over one sampling period.
        noise = self.rng.normal(0, self.noise_level) if self.noise_level > 0 else 0.0
        sol = solve_ivp(lambda t, y: self.dynamics(y, u, noise), [0, dt], state, method="RK45", t_eval=[dt])
        return sol.y[:, -1]


class PendulumBenchmark:
    """Swings a damped pendulum from rest to a target angle under a torque limit."""

    def __init__(self, target: float = np.pi / 2, torque_limit: float = 12.0, dt: float = 0.01, duration: float = 5.0,
                 noise_level: float = 0.0, seed: int = 42):
        if torque_limit <= 0:
            raise ValueError("Torque limit must be positive")
        if dt <= 0 or duration <= dt:
            raise ValueError("Need 0 < dt < duration")
        self.target = target
        self.torque_limit = torque_limit
        self.dt = dt
        self.duration = duration
        self.noise_level = noise_level
        self.seed = seed

    def _simulator(self) -> PendulumSimulator:
        return PendulumSimulator(noise_level=self.noise_level, seed=self.seed)

    def run_tracking_trial(self, config: Dict, use_feed_forward: bool = True) -> Dict:
        simulator = self._simulator()
        controller = TrackingController(TrackingConfig(max_output=self.torque_limit, min_output=-self.torque_limit,
                                                       **config))
        feed_forward = simulator.gravity_torque(self.target) if use_feed_forward else 0.0

        state = np.array([0.0, 0.0])
        applied = 0.0
        n_steps = int(round(self.duration / self.dt))
        theta_history = [state[0]]
        control_history = []
        integral_history = []

        for _ in range(n_steps):
            applied = controller.update(self.target, state[0], feed_forward, applied, self.dt)
            state = simulator.simulate(applied, state, self.dt)
            theta_history.append(state[0])
            control_history.append(applied)
            integral_history.append(controller.get_state().u_i)

        return self._summarize(theta_history, control_history, integral_history=integral_history)

    def run_basic_trial(self, config: Dict) -> Dict:
        simulator = self._simulator()
        clock = ManualClock()
        controller = Controller(ControllerConfig(**config), clock=clock)

        state = np.array([0.0, 0.0])
        n_steps = int(round(self.duration / self.dt))
        theta_history = [state[0]]
        control_history = []
        integral_history = []

        for _ in range(n_steps):
            clock.advance(self.dt)
            controller.update(self.target, state[0])
            applied = float(np.clip(controller.control_signal, -self.torque_limit, self.torque_limit))
            state = simulator.simulate(applied, state, self.dt)
            theta_history.append(state[0])
            control_history.append(applied)
            integral_history.append(controller.state.control_error_integral)

        return self._summarize(theta_history, control_history, integral_history=integral_history)

    def _summarize(self, theta_history: List[float], control_history: List[float],
                   integral_history: List[float]) -> Dict:
        time = np.arange(len(theta_history)) * self.dt
        theta = np.asarray(theta_history, dtype=float)
        return {
            'time': time.tolist(),
            'theta': theta.tolist(),
            'control': [float(u) for u in control_history],
            'integral': [float(i) for i in integral_history],
            'step_metrics': compute_step_metrics(time, theta, self.target),
            'error_statistics': compute_error_statistics(self.target - theta),
            'saturated_fraction': float(np.mean(np.abs(control_history) >= self.torque_limit)),
        }

    def compare_controllers(self, tracking_configs: Dict[str, Dict], basic_configs: Dict[str, Dict]) -> Dict:
        results = {}
        for name, config in tracking_configs.items():
            print(f"Running tracking controller '{name}'...")
            results[name] = self.run_tracking_trial(config)
        for name, config in basic_configs.items():
            print(f"Running basic controller '{name}'...")
            results[name] = self.run_basic_trial(config)
        return results


def run_pendulum_benchmark(figures_dir: str = "docs/figures", results_dir: str = "benchmarks/results") -> Dict:
    os.makedirs(figures_dir, exist_ok=True)
    os.makedirs(results_dir, exist_ok=True)

    benchmark = PendulumBenchmark()
    tracking_gains = {
        'proportional_gain': 40.0,
        'integral_gain': 20.0,
        'derivative_gain': 8.0,
        'low_pass_time_constant': 0.02,
    }
    tracking_configs = {
        'PIDT1 anti-windup': dict(tracking_gains, anti_windup_gain=1.0),
        'PIDT1 no anti-windup': dict(tracking_gains, anti_windup_gain=0.0),
    }
    basic_configs = {
        'PID': {'proportional_gain': 40.0, 'integral_gain': 20.0, 'derivative_gain': 8.0, 'timeout': 0.1},
    }

    results = benchmark.compare_controllers(tracking_configs, basic_configs)

    time = results['PID']['time']
    plot_step_response(time, {name: r['theta'] for name, r in results.items()}, benchmark.target,
                       save_path=os.path.join(figures_dir, "pendulum_step_response.png"),
                       title="Pendulum Swing-Up Under Torque Limit")

    plt.figure(figsize=(8, 4))
    for name, r in results.items():
        plt.plot(time[1:], r['integral'], label=name)
    plt.xlabel("Time (s)")
    plt.ylabel("Integral state")
    plt.title("Integrator Windup")
    plt.grid(True)
    plt.legend()
    plt.savefig(os.path.join(figures_dir, "pendulum_integral_state.png"), dpi=300, bbox_inches="tight")
    plt.close()

    summary = {name: {'step_metrics': r['step_metrics'], 'error_statistics': r['error_statistics'],
                      'saturated_fraction': r['saturated_fraction']} for name, r in results.items()}
    with open(os.path.join(results_dir, "pendulum_benchmark.json"), "w") as f:
        json.dump(summary, f, indent=2)

    for name, s in summary.items():
        m = s['step_metrics']
        print(f"{name}: overshoot {m['overshoot_percent']:.1f}%, settling {m['settling_time']:.2f}s, "
              f"IAE {m['iae']:.3f}")
    return summary


if __name__ == "__main__":
    run_pendulum_benchmark()
