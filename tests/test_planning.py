"""Tests for WalkConfig and WalkPlan."""

import sys
import unittest
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from accutree import (
    CapabilityMismatchError,
    FrozenPath,
    PathView,
    StalePathError,
    WalkConfig,
    WalkPlan,
)
from accutree.core.walker import DEFAULT_DEPTH_HINT
from accutree.testing import VisitLog, build_chain, build_tree


class TestWalkConfig(unittest.TestCase):
    """Test configuration defaults, factories and validation."""

    def test_defaults_are_valid(self):
        config = WalkConfig()
        self.assertEqual(config.depth_hint, DEFAULT_DEPTH_HINT)
        self.assertIsNone(config.max_nodes)
        self.assertTrue(config.check_stale_paths)
        self.assertEqual(config.validate(), [])

    def test_factories(self):
        self.assertEqual(WalkConfig.for_depth(7).depth_hint, 7)

        safe = WalkConfig.safe()
        self.assertTrue(safe.snapshot_paths)
        self.assertTrue(safe.check_stale_paths)
        self.assertFalse(safe.skip_errors)

        fast = WalkConfig.fast(depth_hint=4)
        self.assertFalse(fast.check_stale_paths)
        self.assertFalse(fast.snapshot_paths)
        self.assertEqual(fast.depth_hint, 4)

    def test_validation_errors(self):
        config = WalkConfig(depth_hint=0, max_nodes=0, progress_interval=0)
        errors = config.validate()
        self.assertEqual(len(errors), 3)
        self.assertIn("depth_hint must be positive", errors)
        self.assertIn("max_nodes must be positive", errors)

    def test_on_error_requires_skip_errors(self):
        config = WalkConfig(on_error=lambda node, error: None)
        self.assertEqual(config.validate(), ["on_error requires skip_errors=True"])

    def test_node_limit(self):
        self.assertTrue(WalkConfig().check_node_limit(10 ** 6))
        limited = WalkConfig(max_nodes=2)
        self.assertTrue(limited.check_node_limit(1))
        self.assertFalse(limited.check_node_limit(2))

    def test_should_report(self):
        self.assertFalse(WalkConfig().should_report(100))
        config = WalkConfig(progress_callback=print, progress_interval=10)
        self.assertTrue(config.should_report(20))
        self.assertFalse(config.should_report(21))


class TestWalkPlanValidation(unittest.TestCase):
    """Plans refuse to run what they can't walk."""

    def test_invalid_config_rejected(self):
        with self.assertRaises(CapabilityMismatchError) as ctx:
            WalkPlan(WalkConfig(max_nodes=-1), build_tree(1))
        self.assertIn("Invalid configuration", str(ctx.exception))

    def test_root_without_methods(self):
        with self.assertRaises(CapabilityMismatchError) as ctx:
            WalkPlan(WalkConfig(), object())
        message = str(ctx.exception)
        self.assertIn("children()", message)
        self.assertIn("accumulate()", message)

    def test_callables_replace_methods(self):
        plan = WalkPlan(WalkConfig(), 1,
                        get_children=lambda node: [],
                        accumulate=lambda node, acc, p: acc + node)
        self.assertEqual(plan.execute(on_visit=lambda path, payload: None), 1)

    def test_unaccumulable_type(self):
        with self.assertRaises(CapabilityMismatchError) as ctx:
            WalkPlan(WalkConfig(), build_tree(1), accumulator_type=object)
        self.assertIn("neutral element", str(ctx.exception))

    def test_explicit_neutral_accepts_any_type(self):
        plan = WalkPlan(WalkConfig(), build_tree(1), accumulator_type=object, neutral=10)
        self.assertEqual([path.accumulator for path in plan.iter_paths()], [11])

    def test_summary(self):
        plan = WalkPlan(WalkConfig(depth_hint=5), build_tree(1))
        summary = plan.get_summary()
        self.assertEqual(summary['root'], 'RecordingNode')
        self.assertEqual(summary['depth_hint'], 5)
        self.assertEqual(summary['accumulator_type'], 'int')
        self.assertFalse(summary['custom_children'])
        self.assertFalse(summary['skip_errors'])


class TestWalkPlanExecution(unittest.TestCase):
    """Running plans."""

    def setUp(self):
        self.tree = build_tree((1, [(2, [4, 5]), 3]))

    def test_execute_notifies_nodes(self):
        plan = WalkPlan(WalkConfig(), self.tree)
        log = VisitLog()
        self.assertEqual(plan.execute(payload=log), 5)
        self.assertEqual(plan.nodes_processed, 5)
        self.assertEqual(log.accumulators, [1, 3, 7, 8, 4])

    def test_execute_twice_restarts(self):
        plan = WalkPlan(WalkConfig(), self.tree)
        self.assertEqual(plan.execute(on_visit=VisitLog()), 5)
        self.assertEqual(plan.execute(on_visit=VisitLog()), 5)

    def test_max_nodes(self):
        plan = WalkPlan(WalkConfig(max_nodes=3), self.tree)
        log = VisitLog()
        self.assertEqual(plan.execute(on_visit=log), 3)
        self.assertEqual(log.accumulators, [1, 3, 7])

    def test_live_views_go_stale(self):
        kept = []
        WalkPlan(WalkConfig(), self.tree).execute(payload=kept,
                                                  on_visit=lambda path, out: out.append(path))
        self.assertIsInstance(kept[0], PathView)
        with self.assertRaises(StalePathError):
            kept[0].accumulator

    def test_snapshot_paths(self):
        kept = []
        WalkPlan(WalkConfig.safe(), self.tree).execute(payload=kept,
                                                       on_visit=lambda path, out: out.append(path))
        self.assertTrue(all(isinstance(path, FrozenPath) for path in kept))
        self.assertEqual([path.accumulator for path in kept], [1, 3, 7, 8, 4])

    def test_errors_propagate_by_default(self):
        def explode(path, payload):
            if path.node.value == 4:
                raise KeyError("four")

        plan = WalkPlan(WalkConfig(), self.tree)
        with self.assertRaises(KeyError):
            plan.execute(on_visit=explode)
        self.assertEqual(plan.nodes_processed, 2)

    def test_skip_errors(self):
        def explode(path, payload):
            if path.node.value in (2, 5):
                raise ValueError(path.node.value)

        handled = []
        config = WalkConfig(skip_errors=True,
                            on_error=lambda node, error: handled.append(node.value))
        plan = WalkPlan(config, self.tree)

        with self.assertLogs('accutree.planning', level='WARNING'):
            count = plan.execute(on_visit=explode)

        self.assertEqual(count, 5)
        self.assertEqual(handled, [2, 5])
        self.assertEqual([node.value for node, _ in plan.errors_encountered], [2, 5])
        self.assertIsInstance(plan.errors_encountered[0][1], ValueError)

    def test_walker_errors_are_never_skipped(self):
        """skip_errors only covers visits, not child enumeration."""
        def broken_children(node):
            raise OSError("unreadable")

        plan = WalkPlan(WalkConfig(skip_errors=True), 1,
                        get_children=broken_children,
                        accumulate=lambda node, acc, p: acc + node)
        with self.assertRaises(OSError):
            plan.execute(on_visit=lambda path, payload: None)

    def test_progress_reporting(self):
        reports = []
        config = WalkConfig(progress_callback=reports.append, progress_interval=3)
        plan = WalkPlan(config, build_chain(10))
        plan.execute(on_visit=VisitLog())
        self.assertEqual(reports, [3, 6, 9])

    def test_iter_paths(self):
        plan = WalkPlan(WalkConfig(max_nodes=4), self.tree)
        paths = list(plan.iter_paths([1, 1]))
        self.assertEqual([path.accumulator for path in paths], [1, 3, 7, 8])
        self.assertEqual(plan.nodes_processed, 4)

    def test_iter_paths_stops_before_next_node(self):
        """Reaching max_nodes does not enter one more node."""
        entered = []

        def accumulate(node, acc, parameter):
            entered.append(node.value)
            return acc + node.value

        plan = WalkPlan(WalkConfig(max_nodes=2), self.tree, accumulate=accumulate)
        parameters = iter([1, 1, 1, 1])
        paths = list(plan.iter_paths(parameters))

        self.assertEqual(len(paths), 2)
        self.assertEqual(entered, [1, 2])
        self.assertTrue(plan.limit_reached)
        self.assertEqual(len(list(parameters)), 2)

    def test_limit_reached_flag(self):
        plan = WalkPlan(WalkConfig(), self.tree)
        list(plan.iter_paths())
        self.assertFalse(plan.limit_reached)

        plan = WalkPlan(WalkConfig(max_nodes=3), self.tree)
        plan.execute(on_visit=VisitLog())
        self.assertTrue(plan.limit_reached)

    def test_has_children(self):
        plan = WalkPlan(WalkConfig(), self.tree)
        self.assertTrue(plan.has_children(self.tree))
        self.assertFalse(plan.has_children(build_tree(9)))

    def test_explicit_none_neutral(self):
        plan = WalkPlan(WalkConfig(), 1,
                        get_children=lambda node: [],
                        accumulate=lambda node, acc, p: (acc, node),
                        accumulator_type=object, neutral=None)
        self.assertEqual([path.accumulator for path in plan.iter_paths()], [(None, 1)])

    def test_deep_tree_with_small_hint(self):
        plan = WalkPlan(WalkConfig.for_depth(2), build_chain(5000))
        self.assertEqual(plan.execute(on_visit=VisitLog()), 5000)


if __name__ == "__main__":
    unittest.main()
