import pyarrow as pa
import pyarrow.compute as pc
import pytest

from tidyground.compute import col, lit, true_divide
from tidyground.compute.base import ColumnRef
from tidyground.compute.expressions import FunctionCallExpression
from tidyground.dataframe import is_na


@pytest.fixture
def sample_batch():
    return pa.RecordBatch.from_arrays(
        [
            pa.array([2, 4, None, -1, 0]),
            pa.array([11, 20, None, -18, -25]),
            pa.array([227, 227, 160, 183, 116]),
            pa.array(["UA", "UA", "AA", "B6", "DL"]),
        ],
        names=["dep_delay", "arr_delay", "air_time", "carrier"],
    )


def test_function_call_expression_init():
    expr = FunctionCallExpression(pc.add, ColumnRef("dep_delay"), 1)
    assert expr.func == pc.add
    assert len(expr.args) == 2
    assert isinstance(expr.args[0], ColumnRef)
    assert expr.args[1] == 1


def test_function_call_expression_str():
    expr = FunctionCallExpression(pc.add, ColumnRef("dep_delay"), 1)
    assert str(expr) == "pyarrow.compute.add(ColumnRef(dep_delay),1)"


def test_function_call_expression_apply_nested(sample_batch):
    inner_expr = FunctionCallExpression(pc.multiply, ColumnRef("air_time"), 2)
    outer_expr = FunctionCallExpression(pc.add, inner_expr, 1)
    result = outer_expr.apply(sample_batch)
    assert result.equals(pa.array([455, 455, 321, 367, 233]))


def test_function_call_expression_apply_string_ops(sample_batch):
    expr = FunctionCallExpression(pc.utf8_lower, ColumnRef("carrier"))
    assert expr.apply(sample_batch).equals(pa.array(["ua", "ua", "aa", "b6", "dl"]))


def test_function_call_expression_apply_null_handling(sample_batch):
    expr = FunctionCallExpression(pc.add, ColumnRef("dep_delay"), 1)
    assert expr.apply(sample_batch).equals(pa.array([3, 5, None, 0, 1]))


def test_function_call_expression_apply_invalid_column(sample_batch):
    expr = FunctionCallExpression(pc.add, ColumnRef("non_existent"), 1)
    with pytest.raises(KeyError):
        expr.apply(sample_batch)


def test_function_call_expression_apply_type_mismatch(sample_batch):
    expr = FunctionCallExpression(pc.add, ColumnRef("carrier"), 1)
    with pytest.raises(pa.ArrowNotImplementedError):
        expr.apply(sample_batch)


def test_arithmetic_operators(sample_batch):
    gain = col("dep_delay") - col("arr_delay")
    assert gain.apply(sample_batch).to_pylist() == [-9, -16, None, 17, 25]
    assert (col("dep_delay") + 1).apply(sample_batch).to_pylist() == [3, 5, None, 0, 1]
    assert (2 * col("dep_delay")).apply(sample_batch).to_pylist() == [4, 8, None, -2, 0]
    assert (-col("dep_delay")).apply(sample_batch).to_pylist() == [-2, -4, None, 1, 0]
    assert (10 - col("dep_delay")).apply(sample_batch).to_pylist() == [8, 6, None, 11, 10]


def test_division_is_never_integer(sample_batch):
    hours = col("air_time") / 60
    result = hours.apply(sample_batch)
    assert result.type == pa.float64()
    assert result.to_pylist()[2] == pytest.approx(160 / 60)

    assert (120 / col("air_time")).apply(sample_batch).to_pylist()[0] == pytest.approx(
        120 / 227
    )


def test_true_divide_keeps_floats():
    result = true_divide(pa.array([1.5, 3.0]), 2)
    assert result.to_pylist() == [0.75, 1.5]


def test_comparison_operators(sample_batch):
    assert (col("dep_delay") > 0).apply(sample_batch).to_pylist() == [
        True,
        True,
        None,
        False,
        False,
    ]
    assert (col("carrier") == "UA").apply(sample_batch).to_pylist() == [
        True,
        True,
        False,
        False,
        False,
    ]
    assert (col("carrier") != "UA").apply(sample_batch).to_pylist() == [
        False,
        False,
        True,
        True,
        True,
    ]
    assert (col("dep_delay") <= 0).apply(sample_batch).to_pylist() == [
        False,
        False,
        None,
        True,
        True,
    ]


def test_boolean_operators_use_kleene_logic(sample_batch):
    late = col("dep_delay") > 0
    united = col("carrier") == "UA"
    assert (late & united).apply(sample_batch).to_pylist() == [
        True,
        True,
        False,
        False,
        False,
    ]
    assert (late | united).apply(sample_batch).to_pylist() == [
        True,
        True,
        None,
        False,
        False,
    ]
    assert (~united).apply(sample_batch).to_pylist() == [False, False, True, True, True]


def test_expressions_have_no_truth_value():
    with pytest.raises(TypeError):
        bool(col("dep_delay") > 0)


def test_is_na():
    batch = pa.record_batch({"delay": pa.array([1.0, None, float("nan")])})
    assert is_na(col("delay")).apply(batch).to_pylist() == [False, True, True]
    assert (~is_na(col("delay"))).apply(batch).to_pylist() == [True, False, False]


def test_literal(sample_batch):
    assert str(lit(60)) == "Literal(60)"
    assert (col("air_time") - lit(60)).apply(sample_batch).to_pylist() == [
        167,
        167,
        100,
        123,
        56,
    ]
