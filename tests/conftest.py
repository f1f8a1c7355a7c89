# tests/conftest.py
import pytest

from formula_guard import Parameter, ParameterSet


class RecordingStore:
    """
    A minimal in-memory host store. `commit` replaces the snapshot, mirroring a
    host that applies the formula inside its own transaction.
    """
    def __init__(self, parameters: ParameterSet, fail_with: Exception = None):
        self.parameters = parameters
        self.fail_with = fail_with
        self.calls = []

    def commit(self, parameter, formula):
        self.calls.append((parameter.name, formula))
        if self.fail_with is not None:
            raise self.fail_with
        self.parameters = self.parameters.with_formula(parameter, formula)

    def get(self, name):
        return self.parameters.get_by_name(name)


def make_params(*entries) -> ParameterSet:
    """
    Builds a snapshot from (name, formula, is_instance) tuples; ids are the
    1-based positions.
    """
    params = []
    for i, entry in enumerate(entries, start=1):
        name, formula, is_instance = tuple(entry) + (None, False)[len(entry) - 1:]
        params.append(Parameter(id=i, name=name, formula=formula, is_instance=is_instance, data_type="length"))
    return ParameterSet(params)


@pytest.fixture
def width_params() -> ParameterSet:
    """Width (type), Width Offset (type, 'Width * 2'), Height (instance)."""
    return ParameterSet([
        Parameter(id=1, name="Width", data_type="length"),
        Parameter(id=2, name="Width Offset", formula="Width * 2", data_type="length"),
        Parameter(id=3, name="Height", is_instance=True, data_type="length"),
    ])


@pytest.fixture
def chain_params() -> ParameterSet:
    """A (no formula), B = 'C', C = 'A + 1'."""
    return make_params(("A", None), ("B", "C"), ("C", "A + 1"))


@pytest.fixture
def params_factory():
    return make_params


@pytest.fixture
def store_factory():
    return RecordingStore
