# tests/test_formulas/test_cycle_detector.py

"""
Validation suite for pre-commit cycle detection.

The detector must find a pre-existing path from each parameter referenced by
the proposed formula back to the target, and report that path in order
(direct reference first, target last).
"""

import pytest

from formula_guard import Parameter, ParameterSet
from formula_guard.formulas import CycleDetector, CycleResult


@pytest.fixture
def detector():
    return CycleDetector()


# =========================================================================
# === Group 1: Detection and Path Reporting
# =========================================================================

def test_existing_chain_back_to_target_is_a_cycle(detector, params_factory):
    params = params_factory(("A", None), ("B", "C"), ("C", "A"))
    result = detector.detect_cycle(params.get_by_name("A"), "B", params)
    assert result.would_cycle
    assert result.direct_reference.name == "B"
    assert result.path_names == ["B", "C", "A"]
    assert result.format_path() == "B -> C -> A"


def test_width_offset_scenario(detector, width_params):
    width = width_params.get_by_name("Width")
    result = detector.detect_cycle(width, "Width Offset", width_params)
    assert result.would_cycle
    assert result.path_names == ["Width Offset", "Width"]


def test_self_reference(detector, params_factory):
    params = params_factory(("A", None))
    result = detector.detect_cycle(params.get_by_name("A"), "A + 1", params)
    assert result.would_cycle
    assert result.path_names == ["A"]


def test_no_path_back_is_not_a_cycle(detector, chain_params):
    result = detector.detect_cycle(chain_params.get_by_name("C"), "A * 3", chain_params)
    assert result == CycleResult.no_cycle()
    assert result.format_path() == ""


@pytest.mark.parametrize("formula", ["", "   ", None])
def test_clearing_never_cycles(detector, chain_params, formula):
    assert not detector.detect_cycle(chain_params.get_by_name("A"), formula, chain_params).would_cycle


def test_target_compared_by_identity(detector, params_factory):
    """A stale copy of the target (old formula) must still be recognized."""
    params = params_factory(("A", None), ("B", "A"))
    stale_a = Parameter(id=1, name="A", formula="42")
    assert detector.detect_cycle(stale_a, "B", params).path_names == ["B", "A"]


def test_failed_branch_is_removed_from_path(detector):
    params = ParameterSet([
        Parameter(id=1, name="T"),
        Parameter(id=2, name="D", formula="E + F"),
        Parameter(id=3, name="E", formula="G"),
        Parameter(id=4, name="F", formula="T"),
        Parameter(id=5, name="G"),
    ])
    result = detector.detect_cycle(params.get_by_name("T"), "D", params)
    assert result.path_names == ["D", "F", "T"]


def test_first_root_in_snapshot_order_wins(detector):
    params = ParameterSet([
        Parameter(id=1, name="T"),
        Parameter(id=2, name="R1", formula="T"),
        Parameter(id=3, name="R2", formula="T"),
    ])
    result = detector.detect_cycle(params.get_by_name("T"), "R2 + R1", params)
    assert result.direct_reference.name == "R1"


def test_existing_unrelated_cycle_terminates(detector):
    """Pre-existing loops that do not touch the target must not hang the search."""
    params = ParameterSet([
        Parameter(id=1, name="T"),
        Parameter(id=2, name="X", formula="Y"),
        Parameter(id=3, name="Y", formula="X"),
    ])
    assert not detector.detect_cycle(params.get_by_name("T"), "X", params).would_cycle


# =========================================================================
# === Group 2: Traversal Strategy
# =========================================================================

def test_long_chain_does_not_exhaust_the_stack(detector):
    """A chain longer than the default recursion limit."""
    count = 1100
    params = ParameterSet(
        Parameter(id=i, name=f"P{i}", formula=f"P{i + 1}" if i < count - 1 else None)
        for i in range(count)
    )
    result = detector.detect_cycle(params.get_by_id(count - 1), "P0", params)
    assert result.would_cycle
    assert len(result.path) == count
    assert result.path[0].name == "P0"
    assert result.path[-1].name == f"P{count - 1}"


def test_shared_and_per_root_visited_sets_agree():
    """
    Two roots share an intermediate node. The first root's failed branch
    visits M; with a shared set the second root skips M but still finds T via N.
    """
    params = ParameterSet([
        Parameter(id=1, name="T"),
        Parameter(id=2, name="R1", formula="M"),
        Parameter(id=3, name="R2", formula="M + N"),
        Parameter(id=4, name="M", formula="X"),
        Parameter(id=5, name="X"),
        Parameter(id=6, name="N", formula="T"),
    ])
    target = params.get_by_name("T")
    per_root = CycleDetector().detect_cycle(target, "R1 + R2", params)
    shared = CycleDetector(share_visited=True).detect_cycle(target, "R1 + R2", params)
    assert per_root == shared
    assert per_root.path_names == ["R2", "N", "T"]


def test_independent_paths_agree_between_strategies():
    params = ParameterSet([
        Parameter(id=1, name="T"),
        Parameter(id=2, name="R1", formula="U"),
        Parameter(id=3, name="U", formula="T"),
        Parameter(id=4, name="R2", formula="V"),
        Parameter(id=5, name="V", formula="T"),
    ])
    target = params.get_by_name("T")
    for formula in ("R1 + R2", "R2 + R1", "R2"):
        per_root = CycleDetector().detect_cycle(target, formula, params)
        shared = CycleDetector(share_visited=True).detect_cycle(target, formula, params)
        assert per_root == shared
        assert per_root.would_cycle
