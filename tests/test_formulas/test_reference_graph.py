# tests/test_formulas/test_reference_graph.py
import pytest

from formula_guard.formulas import CircularReferenceError, ReferenceGraph


def names(params):
    return [p.name for p in params]


def test_graph_edges_follow_references(chain_params):
    graph = ReferenceGraph(chain_params).graph
    assert set(graph.edges()) == {(2, 3), (3, 1)}


def test_acyclic_snapshot(chain_params):
    ref_graph = ReferenceGraph(chain_params)
    assert ref_graph.find_cycles() == []
    ref_graph.check_acyclic()


def test_dependency_order_puts_sources_first(chain_params):
    assert names(ReferenceGraph(chain_params).dependency_order()) == ["A", "C", "B"]


def test_transitive_queries(chain_params):
    ref_graph = ReferenceGraph(chain_params)
    assert names(ref_graph.get_all_dependents(chain_params.get_by_name("A"))) == ["B", "C"]
    assert names(ref_graph.get_all_dependencies(chain_params.get_by_name("B"))) == ["A", "C"]


def test_existing_cycle_is_reported(params_factory):
    params = params_factory(("A", "B"), ("B", "A"), ("C", "A"))
    ref_graph = ReferenceGraph(params)
    cycles = ref_graph.find_cycles()
    assert len(cycles) == 1
    assert sorted(cycles[0]) == ["A", "B"]
    with pytest.raises(CircularReferenceError):
        ref_graph.check_acyclic()
    with pytest.raises(CircularReferenceError):
        ref_graph.dependency_order()
