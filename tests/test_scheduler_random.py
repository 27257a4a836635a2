"""UUniFast-based random tests for simulator robustness."""

import unittest
from rtsched.generators import DEFAULT_PERIODS, generate_taskset, uunifast
from rtsched.policies import EDF, POLICIES
from rtsched.simulator import busy_ticks, consolidate, run_all, run_policy, simulate
from rtsched.timing import generate_jobs, hyperperiod


def _total_work(taskset):
    """Executed ticks needed over one hyperperiod."""
    h = hyperperiod(taskset.periods)
    return sum(t.execution_time * (h // t.period) for t in taskset)


class TestUUniFast(unittest.TestCase):
    """Test UUniFast utilization generation."""

    def test_uunifast_sum(self):
        """Test that UUniFast generates utilizations summing to target."""
        utilizations = uunifast(5, 0.7, seed=42)
        self.assertEqual(len(utilizations), 5)
        self.assertAlmostEqual(sum(utilizations), 0.7, places=6)

    def test_uunifast_all_positive(self):
        for u in uunifast(10, 0.8, seed=123):
            self.assertGreaterEqual(u, 0.0)

    def test_uunifast_reproducibility(self):
        self.assertEqual(uunifast(5, 0.6, seed=999), uunifast(5, 0.6, seed=999))

    def test_uunifast_invalid(self):
        with self.assertRaises(ValueError):
            uunifast(0, 0.5)
        with self.assertRaises(ValueError):
            uunifast(5, -0.1)


class TestTaskSetGenerator(unittest.TestCase):
    """Test random task set generation."""

    def test_generate_taskset_count(self):
        self.assertEqual(len(generate_taskset(7, 0.6, seed=42)), 7)

    def test_generate_taskset_integer_tasks(self):
        for task in generate_taskset(8, 0.8, seed=789):
            self.assertIn(task.period, DEFAULT_PERIODS)
            self.assertIsInstance(task.execution_time, int)
            self.assertGreaterEqual(task.execution_time, 1)
            self.assertLessEqual(task.execution_time, task.period)
            self.assertEqual(task.deadline, task.period)

    def test_generate_taskset_bounded_hyperperiod(self):
        for i in range(10):
            self.assertLessEqual(hyperperiod(generate_taskset(6, 0.7, seed=i).periods), 120)

    def test_generate_taskset_reproducibility(self):
        ts1 = generate_taskset(5, 0.6, seed=111)
        ts2 = generate_taskset(5, 0.6, seed=111)
        self.assertEqual(ts1.tasks, ts2.tasks)

    def test_generate_taskset_invalid_periods(self):
        with self.assertRaises(ValueError):
            generate_taskset(3, 0.5, periods=[4, 2.5])
        with self.assertRaises(ValueError):
            generate_taskset(3, 0.5, periods=[])


class TestRandomSchedules(unittest.TestCase):
    """Properties that must hold for any task set and any policy."""

    SEEDS = range(1000, 1025)

    def test_hyperperiod_divisible_by_periods(self):
        for seed in self.SEEDS:
            taskset = generate_taskset(5, 0.7, seed=seed)
            for task in taskset:
                self.assertEqual(hyperperiod(taskset.periods) % task.period, 0)

    def test_raw_timeline_length(self):
        for seed in self.SEEDS:
            taskset = generate_taskset(4, 0.9, seed=seed)
            h = hyperperiod(taskset.periods)
            for policy in POLICIES.values():
                raw = simulate(generate_jobs(taskset.tasks, h), policy, h)
                self.assertEqual(len(raw), h)

    def test_work_conservation(self):
        """Every feasible schedule executes each job for exactly its execution time."""
        for seed in self.SEEDS:
            taskset = generate_taskset(4, 0.8, seed=seed)
            expected = {
                j.name: j.execution_time
                for j in generate_jobs(taskset.tasks, hyperperiod(taskset.periods))
            }
            for name, result in run_all(taskset).items():
                if result.feasible:
                    self.assertEqual(busy_ticks(result.timeline), expected, (seed, name))

    def test_raw_work_never_exceeds_demand(self):
        for seed in self.SEEDS:
            taskset = generate_taskset(4, 1.1, seed=seed)
            h = hyperperiod(taskset.periods)
            for policy in POLICIES.values():
                jobs = generate_jobs(taskset.tasks, h)
                executed = busy_ticks(simulate(jobs, policy, h))
                for job in jobs:
                    self.assertEqual(
                        executed.get(job.name, 0), job.execution_time - job.remaining_time
                    )
                    self.assertGreaterEqual(job.remaining_time, 0)

    def test_edf_feasible_when_not_overloaded(self):
        for seed in self.SEEDS:
            taskset = generate_taskset(4, 0.8, seed=seed)
            if _total_work(taskset) <= hyperperiod(taskset.periods):
                self.assertTrue(run_policy(taskset, EDF).feasible, seed)

    def test_overload_always_misses(self):
        for seed in self.SEEDS:
            taskset = generate_taskset(4, 1.3, seed=seed)
            if _total_work(taskset) > hyperperiod(taskset.periods):
                for name, result in run_all(taskset).items():
                    self.assertFalse(result.feasible, (seed, name))
                    self.assertEqual(result.timeline, [])

    def test_consolidation_idempotent(self):
        for seed in self.SEEDS:
            taskset = generate_taskset(5, 0.6, seed=seed)
            for result in run_all(taskset).values():
                self.assertEqual(consolidate(result.timeline), result.timeline)

    def test_consolidated_timeline_is_contiguous(self):
        for seed in self.SEEDS:
            taskset = generate_taskset(3, 0.5, seed=seed)
            for result in run_all(taskset).values():
                if not result.feasible:
                    continue
                self.assertEqual(result.timeline[0].start, 0)
                self.assertEqual(result.timeline[-1].end, result.hyperperiod)
                for prev, nxt in zip(result.timeline, result.timeline[1:]):
                    self.assertEqual(prev.end, nxt.start)
                    self.assertNotEqual(prev.label, nxt.label)

    def test_deterministic(self):
        for seed in self.SEEDS:
            taskset = generate_taskset(4, 0.9, seed=seed)
            self.assertEqual(run_all(taskset), run_all(taskset))


class TestSchedulabilityExperiment(unittest.TestCase):
    """Test the feasibility vs utilisation experiment."""

    def test_experiment_smoke(self):
        """Smoke test: verify the experiment runs with a reduced configuration."""
        try:
            from experiments.sched_util_plot import run_schedulability_experiment
        except ImportError:
            self.skipTest("experiments.sched_util_plot not available")

        utilisation_points = [0.3, 0.6, 0.9]
        results = run_schedulability_experiment(
            utilisation_points=utilisation_points,
            num_task_sets_per_point=5,
            num_tasks=3,
            seed=12345,
        )

        self.assertEqual(set(results), set(POLICIES))
        for name, points in results.items():
            self.assertEqual(set(points), set(utilisation_points))
            for u, ratio in points.items():
                self.assertGreaterEqual(ratio, 0.0, f"Invalid ratio {ratio} for {name} at U={u}")
                self.assertLessEqual(ratio, 1.0, f"Invalid ratio {ratio} for {name} at U={u}")


if __name__ == "__main__":
    unittest.main()
