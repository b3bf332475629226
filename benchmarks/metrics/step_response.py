# benchmarks/metrics/step_response.py
import numpy as np
import matplotlib.pyplot as plt
from scipy.integrate import trapezoid
from typing import Dict, Sequence


def compute_step_metrics(time: Sequence[float], response: Sequence[float], target: float, initial: float = 0.0,
                         tolerance: float = 0.02) -> Dict[str, float]:
    t = np.asarray(time, dtype=float)
    y = np.asarray(response, dtype=float)
    if t.shape != y.shape or t.size < 2:
        raise ValueError("time and response must be equally long with at least two samples")

    step = target - initial
    if step == 0:
        raise ValueError("Step size must be non-zero")

    error = target - y
    # Overshoot is measured past the target in the direction of the step.
    peak = np.max((y - target) * np.sign(step))
    overshoot = max(0.0, float(peak)) / abs(step) * 100.0

    band = tolerance * abs(step)
    outside = np.nonzero(np.abs(error) > band)[0]
    if outside.size == 0:
        settling_time = 0.0
    elif outside[-1] == y.size - 1:
        settling_time = float("inf")
    else:
        settling_time = float(t[outside[-1] + 1] - t[0])

    return {
        "overshoot_percent": overshoot,
        "settling_time": settling_time,
        "iae": float(trapezoid(np.abs(error), t)),
        "ise": float(trapezoid(error ** 2, t)),
        "steady_state_error": float(error[-1]),
    }


def plot_step_response(time: Sequence[float], responses: Dict[str, Sequence[float]], target: float,
                       save_path: str = None, title: str = "Step Response"):
    plt.figure(figsize=(8, 4))
    for label, response in responses.items():
        plt.plot(time, response, label=label)
    plt.axhline(target, color="k", linestyle="--", label="Target")
    plt.xlabel("Time (s)")
    plt.ylabel("Output")
    plt.title(title)
    plt.grid(True)
    plt.legend()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches="tight")
    else:
        plt.show()
    plt.close()
