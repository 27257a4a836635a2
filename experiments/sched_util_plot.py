"""Feasibility vs Utilisation Experiment.

Generates random task sets at various utilisation levels using UUniFast,
simulates each under every policy, and plots the fraction of task sets each
policy schedules without a deadline miss.
"""

from pathlib import Path

try:
    import matplotlib
    matplotlib.use('Agg')  # Non-interactive backend
    import matplotlib.pyplot as plt
    MATPLOTLIB_AVAILABLE = True
except ImportError:
    MATPLOTLIB_AVAILABLE = False

from rtsched.generators import generate_taskset
from rtsched.policies import POLICIES
from rtsched.simulator import run_all


def run_schedulability_experiment(
    utilisation_points: list,
    num_task_sets_per_point: int = 100,
    num_tasks: int = 4,
    seed: int = 42,
) -> dict:
    """Run feasibility experiment across utilisation levels.

    Args:
        utilisation_points: List of utilisation values to test (e.g. [0.1, 0.2, ..., 1.0]).
        num_task_sets_per_point: Number of random task sets to generate per utilisation.
        num_tasks: Number of tasks per task set.
        seed: Base random seed (will be varied per task set).

    Returns:
        Dictionary mapping policy name -> {utilisation -> feasibility ratio}.
    """
    results = {name: {} for name in POLICIES}

    for u_total in utilisation_points:
        feasible_count = {name: 0 for name in POLICIES}

        for i in range(num_task_sets_per_point):
            task_set_seed = seed + int(u_total * 1000) + i
            taskset = generate_taskset(n=num_tasks, target_utilization=u_total, seed=task_set_seed)

            for name, result in run_all(taskset).items():
                if result.feasible:
                    feasible_count[name] += 1

        for name in POLICIES:
            results[name][u_total] = feasible_count[name] / num_task_sets_per_point

    return results


def plot_schedulability_vs_utilisation(
    results: dict,
    output_path: str = "results/feasibility_vs_utilisation.png",
) -> None:
    """Plot feasibility ratio vs utilisation, one line per policy.

    Args:
        results: Dictionary mapping policy name -> {utilisation -> ratio}.
        output_path: Path to save the plot.
    """
    if not MATPLOTLIB_AVAILABLE:
        raise ImportError("matplotlib is required for plotting")

    output_dir = Path(output_path).parent
    output_dir.mkdir(parents=True, exist_ok=True)

    plt.figure(figsize=(10, 6))
    for name, points in results.items():
        utilisations = sorted(points.keys())
        ratios = [points[u] for u in utilisations]
        plt.plot(utilisations, ratios, 'o-', linewidth=2, markersize=6, label=name)
    plt.xlabel('Total Utilisation', fontsize=12)
    plt.ylabel('Feasible Ratio', fontsize=12)
    plt.title('Simulated Feasibility vs Utilisation', fontsize=14)
    plt.grid(True, alpha=0.3)
    plt.legend()
    plt.xlim(0, 1.1)
    plt.ylim(0, 1.05)

    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close()

    print(f"Plot saved to {output_path}")


def main():
    """Run the full feasibility vs utilisation experiment."""
    print("Running feasibility vs utilisation experiment...")

    utilisation_points = [u / 10.0 for u in range(1, 11)]  # 0.1, 0.2, ..., 1.0

    results = run_schedulability_experiment(
        utilisation_points=utilisation_points,
        num_task_sets_per_point=100,
        num_tasks=4,
        seed=42,
    )

    print("\nResults:")
    for u in utilisation_points:
        ratios = "  ".join(f"{name}={results[name][u]:.2f}" for name in results)
        print(f"  U = {u:.1f}: {ratios}")

    plot_schedulability_vs_utilisation(results)

    print("\nExperiment complete!")


if __name__ == "__main__":
    main()
