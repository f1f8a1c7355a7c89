# tests/test_data_structures.py
import io
import logging

import pytest

from formula_guard import Parameter, ParameterLike, ParameterSet, ParameterSetError
from formula_guard.log_config import setup_logging


# --- Parameter snapshots ---

def test_parameter_satisfies_protocol():
    assert isinstance(Parameter(id=1, name="Width"), ParameterLike)


def test_host_objects_satisfy_protocol():
    class HostParameter:
        def __init__(self):
            self.id = "guid-1"
            self.name = "Width"
            self.is_instance = False
            self.data_type = "length"
            self.formula = None
            self.is_built_in = False

    host = HostParameter()
    assert isinstance(host, ParameterLike)
    assert ParameterSet([host]).get_by_name("Width") is host


def test_lookup_and_order(width_params):
    assert width_params.names() == ["Width", "Width Offset", "Height"]
    assert width_params.get_by_id(2).name == "Width Offset"
    assert width_params.get_by_name("Nope") is None
    assert Parameter(id=3, name="Height") in width_params
    assert len(width_params) == 3


@pytest.mark.parametrize("params", [
    [Parameter(id=1, name="A"), Parameter(id=1, name="B")],
    [Parameter(id=1, name="A"), Parameter(id=2, name="A")],
])
def test_duplicates_are_rejected(params):
    with pytest.raises(ParameterSetError):
        ParameterSet(params)


def test_with_formula_returns_new_snapshot(width_params):
    width = width_params.get_by_name("Width")
    updated = width_params.with_formula(width, "10")
    assert updated.get_by_name("Width").formula == "10"
    assert width_params.get_by_name("Width").formula is None
    assert updated.names() == width_params.names()


def test_with_blank_formula_clears(width_params):
    offset = width_params.get_by_name("Width Offset")
    assert width_params.with_formula(offset, "  ").get_by_name("Width Offset").formula is None


def test_with_formula_for_foreign_parameter(width_params):
    with pytest.raises(ParameterSetError):
        width_params.with_formula(Parameter(id=99, name="Ghost"), "1")


def test_has_formula():
    assert Parameter(id=1, name="A", formula="B").has_formula
    assert not Parameter(id=1, name="A", formula=" ").has_formula
    assert str(Parameter(id=1, name="A", is_instance=True)) == "A (instance)"


# --- Logging ---

@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_setup_logging_accepts_level_names(restore_root_logger):
    stream = io.StringIO()
    setup_logging("debug", stream=stream)
    logging.getLogger("formula_guard.test").debug("hello from the test")
    assert logging.getLogger().level == logging.DEBUG
    assert "[formula_guard.test] hello from the test" in stream.getvalue()


def test_setup_logging_rejects_unknown_level(restore_root_logger):
    with pytest.raises(ValueError):
        setup_logging("chatty")
