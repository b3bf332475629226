# benchmarks/metrics/error_analysis.py
import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, Sequence


def compute_error_statistics(errors: Sequence[float]) -> Dict[str, float]:
    arr = np.asarray(errors, dtype=float)
    if arr.size == 0:
        return {}
    q25, q75 = np.percentile(arr, [25, 75])
    return {
        "mean": float(np.mean(arr)),
        "std": float(np.std(arr)),
        "rms": float(np.sqrt(np.mean(arr ** 2))),
        "max_abs": float(np.max(np.abs(arr))),
        "median": float(np.median(arr)),
        "q25": float(q25),
        "q75": float(q75),
        "iqr": float(q75 - q25),
    }


def plot_error_distribution(errors: Sequence[float], save_path: str = None, label: str = ""):
    arr = np.asarray(errors, dtype=float)
    stats = compute_error_statistics(arr)

    plt.figure(figsize=(6, 4))
    plt.hist(arr, bins=30, alpha=0.7, color="skyblue", edgecolor="black")
    plt.axvline(stats["mean"], color="red", linestyle="--", label=f"Mean = {stats['mean']:.4f}")
    plt.axvline(stats["rms"], color="green", linestyle=":", label=f"RMS = {stats['rms']:.4f}")
    plt.title(f"Tracking Error Distribution {label}")
    plt.xlabel("Control error")
    plt.ylabel("Samples")
    plt.grid(True)
    plt.legend()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches="tight")
    else:
        plt.show()
    plt.close()
