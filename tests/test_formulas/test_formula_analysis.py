# tests/test_formulas/test_formula_analysis.py
import pytest

from formula_guard.formulas import CircularReferenceError, FormulaAnalyzer


@pytest.fixture
def analyzer():
    return FormulaAnalyzer()


@pytest.mark.parametrize("formula, expected", [
    ("20", True),
    ("2 + 5", True),
    ('"text"', True),
    ("Width * 2", False),
    ("", False),
    (None, False),
])
def test_is_constant(analyzer, width_params, formula, expected):
    assert analyzer.is_constant(width_params, formula) is expected


def test_single_reference(analyzer, width_params):
    assert analyzer.try_get_single_reference(width_params, "  Width ").name == "Width"
    assert analyzer.try_get_single_reference(width_params, "Width Offset").name == "Width Offset"


@pytest.mark.parametrize("formula", ["Width * 2", "Width + Height", "20", "", None])
def test_not_a_single_reference(analyzer, width_params, formula):
    assert analyzer.try_get_single_reference(width_params, formula) is None


def test_chain_to_constant_source(analyzer, params_factory):
    params = params_factory(("A", "B"), ("B", "C"), ("C", "10"))
    result = analyzer.resolve_chain(params.get_by_name("A"), params)
    assert result.ultimate_source.name == "C"
    assert [p.name for p in result.intermediates] == ["A", "B"]
    assert result.source_has_constant_formula


def test_chain_to_plain_value(analyzer, params_factory):
    params = params_factory(("A", "B"), ("B", None))
    result = analyzer.resolve_chain(params.get_by_name("A"), params)
    assert result.ultimate_source.name == "B"
    assert [p.name for p in result.intermediates] == ["A"]
    assert not result.source_has_constant_formula


def test_chain_stops_at_complex_formula(analyzer, params_factory):
    params = params_factory(("A", "B"), ("B", "C + D"), ("C",), ("D",))
    result = analyzer.resolve_chain(params.get_by_name("A"), params)
    assert result.ultimate_source.name == "B"
    assert not result.source_has_constant_formula


def test_parameter_without_formula_is_its_own_source(analyzer, params_factory):
    params = params_factory(("A",))
    result = analyzer.resolve_chain(params.get_by_name("A"), params)
    assert result.ultimate_source.name == "A"
    assert result.intermediates == ()


def test_looping_chain_raises(analyzer, params_factory):
    params = params_factory(("Start", "A"), ("A", "B"), ("B", "A"))
    with pytest.raises(CircularReferenceError) as exc_info:
        analyzer.resolve_chain(params.get_by_name("Start"), params)
    assert exc_info.value.cycle == ["A", "B", "A"]
    assert "A -> B -> A" in str(exc_info.value)
