import pyarrow as pa
import pyarrow.compute as pc
import pytest

from tidyground.compute import (
    FunctionCallExpression,
    PyArrowTableDataSource,
    col,
    lit,
)
from tidyground.compute.selection import ProjectNode, RenameNode


@pytest.fixture
def mock_data():
    """A few flights, with the columns used to compute the gain."""
    data = {
        "dep_delay": [2, 4, 2],
        "arr_delay": [11, 20, 33],
        "air_time": [227, 227, 160],
    }
    table = pa.table(data)
    return table


def test_init_and_str(mock_data):
    """Test the initialization and string representation of ProjectNode."""
    expressions = {
        "gain": FunctionCallExpression(pc.subtract, col("dep_delay"), col("arr_delay"))
    }
    project_node = ProjectNode(
        ["dep_delay", "arr_delay"], expressions, PyArrowTableDataSource(mock_data)
    )
    assert (
        str(project_node)
        == "ProjectNode(select=['dep_delay', 'arr_delay'], project={'gain': pyarrow.compute.subtract(ColumnRef(dep_delay),ColumnRef(arr_delay))}, child=PyArrowTableDataSource(columns=['dep_delay', 'arr_delay', 'air_time'], rows=3))"
    )


def test_select_columns(mock_data):
    """Test selecting specific columns."""
    project_node = ProjectNode(["dep_delay", "air_time"], {}, PyArrowTableDataSource(mock_data))
    batches = list(project_node.batches())
    assert len(batches) == 1
    batch = batches[0]
    assert batch.column_names == ["dep_delay", "air_time"]
    assert batch.column("air_time").to_pylist() == [227, 227, 160]


def test_project_columns(mock_data):
    """Projected columns are appended at the end."""
    project_node = ProjectNode(
        None,
        {"gain": col("dep_delay") - col("arr_delay")},
        PyArrowTableDataSource(mock_data),
    )
    batch = next(project_node.batches())
    assert batch.column_names == ["dep_delay", "arr_delay", "air_time", "gain"]
    assert batch.column("gain").to_pylist() == [-9, -16, -31]


def test_project_refers_previous_columns(mock_data):
    """Each expression can use the columns projected before it."""
    project_node = ProjectNode(
        None,
        {
            "gain": col("dep_delay") - col("arr_delay"),
            "hours": col("air_time") / 60,
            "gain_per_hour": col("gain") / col("hours"),
        },
        PyArrowTableDataSource(mock_data),
    )
    batch = next(project_node.batches())
    assert batch.column_names[-3:] == ["gain", "hours", "gain_per_hour"]
    assert batch.column("gain_per_hour").to_pylist() == pytest.approx(
        [-9 / (227 / 60), -16 / (227 / 60), -31 / (160 / 60)]
    )


def test_select_only_projected_columns(mock_data):
    """An empty selection keeps only the projected columns."""
    project_node = ProjectNode(
        [],
        {"gain": col("dep_delay") - col("arr_delay"), "hours": col("air_time") / 60},
        PyArrowTableDataSource(mock_data),
    )
    batch = next(project_node.batches())
    assert batch.column_names == ["gain", "hours"]


def test_project_replaces_existing_column(mock_data):
    project_node = ProjectNode(
        None, {"air_time": col("air_time") / 60}, PyArrowTableDataSource(mock_data)
    )
    batch = next(project_node.batches())
    assert batch.column_names == ["dep_delay", "arr_delay", "air_time"]
    assert batch.column("air_time").type == pa.float64()


def test_project_literal_is_broadcast(mock_data):
    project_node = ProjectNode(
        ["dep_delay"], {"year": lit(2013)}, PyArrowTableDataSource(mock_data)
    )
    batch = next(project_node.batches())
    assert batch.column("year").to_pylist() == [2013, 2013, 2013]


def test_rename(mock_data):
    rename_node = RenameNode({"air_time": "flight_time"}, PyArrowTableDataSource(mock_data))
    batch = next(rename_node.batches())
    assert batch.column_names == ["dep_delay", "arr_delay", "flight_time"]
    assert batch.column("flight_time").to_pylist() == [227, 227, 160]
    assert str(rename_node).startswith("RenameNode(mapping={'air_time': 'flight_time'}")


def test_rename_missing_column(mock_data):
    rename_node = RenameNode({"tailnum": "tail_num"}, PyArrowTableDataSource(mock_data))
    with pytest.raises(KeyError):
        next(rename_node.batches())
