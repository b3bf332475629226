import os
from benchmarks.systems.pendulum import run_pendulum_benchmark


def main():
    print("Starting PID Controller Experiments")
    os.makedirs("docs/figures", exist_ok=True)
    os.makedirs("benchmarks/results", exist_ok=True)

    print("\nRunning Pendulum Benchmark...")
    run_pendulum_benchmark()

    print("\nExperiments completed. Results saved in benchmarks/results/ and plots in docs/figures/.")

if __name__ == "__main__":
    main()
