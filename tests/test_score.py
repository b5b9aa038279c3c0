# tests/test_score.py
import pytest

from atlas_search.exceptions import (
    ArgumentOutOfRangeError,
    InvalidArgumentError,
    SchemaMismatchError,
)
from atlas_search.query.score import (
    AddFunction,
    add,
    boost,
    boost_path,
    constant,
    constant_fn,
    function,
    gauss,
    log,
    log1p,
    multiply,
    path_fn,
    relevance,
)
from atlas_search.schema import fields_of
from tests.models import Person

F = fields_of(Person)


class TestScore:
    def test_boost(self):
        assert boost(1).render() == {"boost": {"value": 1}}

    def test_boost_path(self):
        assert boost_path("x").render() == {"boost": {"path": "x"}}
        assert boost_path("x", 1).render() == {"boost": {"path": "x", "undefined": 1}}

    def test_boost_path_typed(self):
        assert boost_path(F.age).render(Person) == {"boost": {"path": "age"}}
        assert boost_path("birthday", 1).render(Person) == {
            "boost": {"path": "dob", "undefined": 1}
        }

    def test_constant(self):
        assert constant(1).render() == {"constant": {"value": 1}}

    @pytest.mark.parametrize("value", [0, -1])
    def test_constant_must_be_positive(self, value):
        with pytest.raises(ArgumentOutOfRangeError):
            constant(value)

    @pytest.mark.parametrize("value", [0, -1.5])
    def test_boost_must_be_positive(self, value):
        with pytest.raises(ArgumentOutOfRangeError):
            boost(value)

    def test_boost_rejects_bool(self):
        with pytest.raises(InvalidArgumentError):
            boost(True)

    def test_function(self):
        assert function(relevance()).render() == {"function": {"score": "relevance"}}

    def test_function_requires_a_score_function(self):
        with pytest.raises(InvalidArgumentError):
            function(boost(2))


class TestScoreFunction:
    def test_path(self):
        assert path_fn("x").render() == {"path": "x"}
        assert path_fn("x", 1).render() == {"path": {"value": "x", "undefined": 1}}

    def test_path_typed(self):
        assert path_fn(F.age).render(Person) == {"path": "age"}
        assert path_fn("retired", 1).render(Person) == {"path": {"value": "ret", "undefined": 1}}

    def test_relevance(self):
        assert relevance().render() == {"score": "relevance"}

    def test_constant(self):
        assert constant_fn(1).render() == {"constant": 1}

    def test_add(self):
        assert add(constant_fn(1), constant_fn(2)).render() == {
            "add": [{"constant": 1}, {"constant": 2}]
        }

    def test_multiply(self):
        assert multiply(constant_fn(1), constant_fn(2)).render() == {
            "multiply": [{"constant": 1}, {"constant": 2}]
        }

    @pytest.mark.parametrize("builder", [add, multiply])
    def test_arithmetic_needs_two_expressions(self, builder):
        with pytest.raises(InvalidArgumentError):
            builder(constant_fn(1))

    def test_arithmetic_children_must_be_functions(self):
        with pytest.raises(InvalidArgumentError):
            AddFunction((constant_fn(1), 2))

    def test_gauss(self):
        assert gauss("x", 100, 1).render() == {"gauss": {"path": "x", "origin": 100, "scale": 1}}
        assert gauss("x", 100, 1, 0.1, 1).render() == {
            "gauss": {"path": "x", "origin": 100, "scale": 1, "decay": 0.1, "offset": 1}
        }

    def test_gauss_typed(self):
        assert gauss(F.age, 100, 1).render(Person) == {
            "gauss": {"path": "age", "origin": 100, "scale": 1}
        }

    @pytest.mark.parametrize("decay", [0, 1, 1.5, -0.1])
    def test_gauss_decay_is_exclusive(self, decay):
        with pytest.raises(ArgumentOutOfRangeError):
            gauss("x", 100, 1, decay)

    def test_gauss_scale_must_be_positive(self):
        with pytest.raises(ArgumentOutOfRangeError):
            gauss("x", 100, 0)

    def test_log(self):
        assert log(constant_fn(1)).render() == {"log": {"constant": 1}}

    def test_log1p(self):
        assert log1p(constant_fn(1)).render() == {"log1p": {"constant": 1}}

    def test_nested_expression_resolves_every_path(self):
        expression = multiply(
            relevance(),
            log1p(path_fn(F.age)),
            add(path_fn("retired"), constant_fn(2)),
        )
        assert expression.render(Person) == {
            "multiply": [
                {"score": "relevance"},
                {"log1p": {"path": "age"}},
                {"add": [{"path": "ret"}, {"constant": 2}]},
            ]
        }

    def test_nested_expression_propagates_schema_errors(self):
        expression = add(relevance(), path_fn("nickname"))
        with pytest.raises(SchemaMismatchError):
            expression.render(Person)
