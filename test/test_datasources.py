import os
import tempfile

import pyarrow as pa
import pyarrow.csv as csv
import pytest

from tidyground.compute import collect_table
from tidyground.compute.datasources import (
    CSVDataSource,
    PyArrowTableDataSource,
)

# Mock data for testing
MOCK_PYARROW_TABLE = pa.table(
    {"year": [2013, 2013, 2013], "month": [1, 1, 2], "dep_delay": [2, 4, -1]}
)
# R exports the row names as the first column
MOCK_R_EXPORT = pa.table(
    {"rownames": [1, 2, 3], "displ": [1.8, 2.0, 2.8], "class": ["compact"] * 3}
)

MOCK_CSV_FILE = tempfile.NamedTemporaryFile(delete=False, mode="w+", suffix=".csv")
MOCK_R_CSV_FILE = tempfile.NamedTemporaryFile(delete=False, mode="w+", suffix=".csv")


def setup_module():
    csv.write_csv(MOCK_PYARROW_TABLE, MOCK_CSV_FILE.name)
    MOCK_CSV_FILE.close()
    csv.write_csv(MOCK_R_EXPORT, MOCK_R_CSV_FILE.name)
    MOCK_R_CSV_FILE.close()


def teardown_module():
    os.unlink(MOCK_CSV_FILE.name)
    os.unlink(MOCK_R_CSV_FILE.name)


@pytest.mark.parametrize(
    "data_source_class, init_args, expected_str",
    [
        (
            CSVDataSource,
            (MOCK_CSV_FILE.name, None),
            f"CSVDataSource({MOCK_CSV_FILE.name}, block_size=None)",
        ),
        (
            PyArrowTableDataSource,
            (MOCK_PYARROW_TABLE,),
            "PyArrowTableDataSource(columns=['year', 'month', 'dep_delay'], rows=3)",
        ),
        (
            PyArrowTableDataSource,
            (MOCK_PYARROW_TABLE.to_batches()[0],),
            "PyArrowTableDataSource(columns=['year', 'month', 'dep_delay'], rows=3)",
        ),
    ],
)
def test_init_and_str(data_source_class, init_args, expected_str):
    data_source = data_source_class(*init_args)
    assert str(data_source) == expected_str


@pytest.mark.parametrize(
    "data_source_class, init_args, expected_batches",
    [
        (CSVDataSource, (MOCK_CSV_FILE.name, None), MOCK_PYARROW_TABLE.to_batches()),
        (
            PyArrowTableDataSource,
            (MOCK_PYARROW_TABLE,),
            MOCK_PYARROW_TABLE.to_batches(),
        ),
        (
            PyArrowTableDataSource,
            (MOCK_PYARROW_TABLE.to_batches()[0],),
            MOCK_PYARROW_TABLE.to_batches(),
        ),
    ],
)
def test_batches(data_source_class, init_args, expected_batches):
    data_source = data_source_class(*init_args)
    batches = list(data_source.batches())
    assert len(batches) == len(expected_batches)
    for batch, expected_batch in zip(batches, expected_batches):
        assert batch.equals(expected_batch)


@pytest.mark.parametrize(
    "data_source_class, init_args",
    [
        (CSVDataSource, (MOCK_CSV_FILE.name,)),
        (PyArrowTableDataSource, (MOCK_PYARROW_TABLE,)),
    ],
)
def test_poll_schema(data_source_class, init_args):
    data_source = data_source_class(*init_args)
    assert data_source.poll_schema().names == ["year", "month", "dep_delay"]


def test_csv_drop_columns():
    data_source = CSVDataSource(MOCK_R_CSV_FILE.name, drop_columns=("rownames", ""))
    assert data_source.poll_schema().names == ["displ", "class"]

    table = collect_table(data_source)
    assert table.column_names == ["displ", "class"]
    assert table.column("displ").to_pylist() == [1.8, 2.0, 2.8]


def test_csv_drop_missing_columns_is_noop():
    data_source = CSVDataSource(MOCK_CSV_FILE.name, drop_columns=("rownames",))
    assert collect_table(data_source).equals(MOCK_PYARROW_TABLE)


def test_empty_table_emits_schema():
    empty = pa.Table.from_batches([], schema=MOCK_PYARROW_TABLE.schema)
    batches = list(PyArrowTableDataSource(empty).batches())
    assert len(batches) == 1
    assert batches[0].num_rows == 0
    assert batches[0].schema == MOCK_PYARROW_TABLE.schema


def test_csv_header_only_emits_schema(tmp_path):
    path = tmp_path / "flights.csv"
    path.write_text('"rownames","dep_delay"\n')
    data_source = CSVDataSource(str(path), drop_columns=("rownames",))

    batches = list(data_source.batches())
    assert len(batches) == 1
    assert batches[0].num_rows == 0
    assert batches[0].schema.names == ["dep_delay"]
    assert collect_table(data_source).column_names == ["dep_delay"]
