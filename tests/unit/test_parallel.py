"""
Unit tests for token_lineage.utils.parallel module.
"""

from token_lineage.utils.parallel import Outcome, execute_parallel
from token_lineage.utils.stats import ExecutionStats


class TestExecuteParallel:
    """Test execute_parallel function."""

    def test_results_in_input_order(self):
        """Outcomes line up with the input even though workers finish out of order."""
        words = ["pepe", "wif", "bonk", "doge", "shib"]

        outcomes = execute_parallel(words, str.upper, max_workers=3, show_progress=False)

        assert [o.item for o in outcomes] == words
        assert [o.result for o in outcomes] == ["PEPE", "WIF", "BONK", "DOGE", "SHIB"]
        assert all(o.ok for o in outcomes)

    def test_error_captured_per_item(self):
        """One failing item does not stop the others."""

        def fail_on_2(x: int) -> int:
            if x == 2:
                raise ValueError(f"Failed on {x}")
            return x * x

        outcomes = execute_parallel([1, 2, 3], fail_on_2, max_workers=2, show_progress=False)

        assert [o.ok for o in outcomes] == [True, False, True]
        assert isinstance(outcomes[1].error, ValueError)
        assert outcomes[1].result is None
        assert outcomes[2].result == 9

    def test_stats_tracking(self):
        stats = ExecutionStats()

        def fail_on_odd(x: int) -> int:
            if x % 2:
                raise RuntimeError("odd")
            return x

        execute_parallel(
            [1, 2, 3, 4, 5], fail_on_odd, max_workers=2, show_progress=False, stats=stats
        )

        assert stats.get("processed") == 2
        assert stats.get("failed") == 3

    def test_empty_items(self):
        assert execute_parallel([], lambda x: x, show_progress=False) == []

    def test_progress_bar(self):
        """Progress output goes through tqdm without affecting results."""
        outcomes = execute_parallel([1, 2], lambda x: x + 1, max_workers=2, show_progress=True)
        assert [o.result for o in outcomes] == [2, 3]


class TestOutcome:
    """Tests for the Outcome record."""

    def test_ok(self):
        assert Outcome("a", result=1).ok
        assert not Outcome("a", error=RuntimeError("x")).ok
