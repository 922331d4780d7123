"""Query Plan nodes that load data

The datasource nodes are expected to fetch the data from some source,
convert it into the format accepted by the compute engine and forward it
to the next node in the plan.

They are used to do things like loading the tutorial
datasets from CSV files or wrapping tables that are
already in memory.
"""

from abc import abstractmethod
from typing import Sequence

import pyarrow as pa
import pyarrow.csv

from .base import QueryPlanNode


class DataSourceNode(QueryPlanNode):
    """Base class for nodes that load data from a source."""

    @abstractmethod
    def poll_schema(self) -> pa.Schema:
        """Poll the schema of the data source without loading its content."""
        ...


class CSVDataSource(DataSourceNode):
    """Load data from a CSV file.

    Given a local CSV file path, load the content,
    convert it into Arrow format, and emit it
    for the next nodes of the query plan to consume.

    CSV exports of R datasets frequently carry an unnamed
    or ``rownames`` leading column with the row numbers,
    ``drop_columns`` allows to discard it while loading.
    """

    def __init__(
        self,
        filename: str,
        block_size: int | None = None,
        drop_columns: Sequence[str] = (),
    ) -> None:
        """
        :param filename: The path of the local CSV file.
        :param block_size: How big to make batches of data,
                           Influences how many batches will be produced
        :param drop_columns: Columns of the file that should not be emitted.
        """
        self.filename = filename
        self.block_size = block_size
        self.drop_columns = tuple(drop_columns)

    def __str__(self) -> str:
        return f"CSVDataSource({self.filename}, block_size={self.block_size})"

    def batches(self) -> QueryPlanNode.RecordBatchesGenerator:
        """Open CSV file and emit the batches.

        A file with only the header emits one empty batch.
        """
        with pa.csv.open_csv(
            self.filename, read_options=pa.csv.ReadOptions(block_size=self.block_size)
        ) as reader:
            emitted = False
            for batch in reader:
                emitted = True
                yield self._drop(batch)
            if not emitted:
                yield self._drop(pa.RecordBatch.from_pylist([], schema=reader.schema))

    def poll_schema(self) -> pa.Schema:
        """Poll the schema of the CSV file."""
        with pa.csv.open_csv(self.filename) as reader:
            schema = reader.schema
        for name in self.drop_columns:
            if name in schema.names:
                schema = schema.remove(schema.get_field_index(name))
        return schema

    def _drop(self, batch: pa.RecordBatch) -> pa.RecordBatch:
        if not self.drop_columns:
            return batch
        return batch.select(
            [name for name in batch.schema.names if name not in self.drop_columns]
        )


class PyArrowTableDataSource(DataSourceNode):
    """Load data from an in-memory pyarrow.Table or pyarrow.RecordBatch.

    Given a :class:`pyarrow.Table` or `pyarrow.RecordBatch` object,
    allow to use its data in a query plan.

    A table without rows still emits one empty batch,
    so that the nodes downstream always know the schema
    of the data they are working on.
    """

    def __init__(self, table: pa.Table | pa.RecordBatch) -> None:
        """
        :param table: The table or recordbatch with the data to read.
        """
        self.table = table
        self.is_recordbatch = isinstance(table, pa.RecordBatch)

    def __str__(self) -> str:
        return f"PyArrowTableDataSource(columns={self.table.column_names}, rows={self.table.num_rows})"

    def batches(self) -> QueryPlanNode.RecordBatchesGenerator:
        """Emit the data contained in the Table for consumption by other node."""
        if self.is_recordbatch:
            yield self.table
            return

        batches = self.table.to_batches()
        if not batches:
            yield pa.RecordBatch.from_pylist([], schema=self.table.schema)
        else:
            yield from batches

    def poll_schema(self) -> pa.Schema:
        """Poll the schema of the Table."""
        return self.table.schema
