import pyarrow as pa
import pytest

from tidyground.compute import FilterNode, col
from tidyground.compute.base import QueryPlanNode
from tidyground.compute.pagination import PaginateNode
from tidyground.compute.sorting import SortNode


class MockQueryPlanNode(QueryPlanNode):
    def __init__(self, batches):
        self._batches = batches

    def batches(self):
        for batch in self._batches:
            yield batch

    def __str__(self):
        return "MockQueryPlanNode"


def test_sort_node_single_batch():
    data = pa.record_batch({"values": [5, 3, 1, 4, 2]})
    sort_node = SortNode(["values"], [False], MockQueryPlanNode([data]))

    batches = list(sort_node.batches())
    assert len(batches) == 1
    assert batches[0].column(0).to_pylist() == [1, 2, 3, 4, 5]


def test_sort_node_multiple_batches():
    data1 = pa.record_batch({"values": [5, 3]})
    data2 = pa.record_batch({"values": [1, 4, 2]})
    sort_node = SortNode(["values"], [False], MockQueryPlanNode([data1, data2]))

    result = pa.Table.from_batches(list(sort_node.batches()))
    assert result.column(0).to_pylist() == [1, 2, 3, 4, 5]


def test_sort_node_descending():
    data = pa.record_batch({"values": [5, 3, 1, 4, 2]})
    sort_node = SortNode(["values"], [True], MockQueryPlanNode([data]))

    sorted_batch = next(sort_node.batches())
    assert sorted_batch.column(0).to_pylist() == [5, 4, 3, 2, 1]


@pytest.mark.filterwarnings("error::FutureWarning")
@pytest.mark.parametrize("descending", [False, True])
def test_sort_node_missing_values_last(descending):
    data1 = pa.record_batch({"dep_delay": [None, 3]})
    data2 = pa.record_batch({"dep_delay": [-1, None, 10]})
    sort_node = SortNode(["dep_delay"], [descending], MockQueryPlanNode([data1, data2]))

    result = pa.Table.from_batches(list(sort_node.batches()))
    values = result.column(0).to_pylist()
    assert values[-2:] == [None, None]
    assert values[:3] == ([10, 3, -1] if descending else [-1, 3, 10])


def test_sort_node_multiple_keys_break_ties():
    data = pa.record_batch(
        {
            "month": [2, 1, 1, 2],
            "day": [1, 2, 1, 1],
            "flight": [1, 2, 3, 4],
        }
    )
    sort_node = SortNode(["month", "day"], [False, False], MockQueryPlanNode([data]))

    sorted_batch = next(sort_node.batches())
    assert sorted_batch.column("flight").to_pylist() == [3, 2, 1, 4]


def test_sort_node_invalid_keys_and_descending_length():
    with pytest.raises(ValueError):
        SortNode(["values"], [True, False], MockQueryPlanNode([]))


def test_sort_node_empty_batches_keep_schema():
    data1 = pa.record_batch({"month": [1, 2], "dep_delay": [4, -1]})
    data2 = pa.record_batch({"month": [1], "dep_delay": [7]})
    no_may = FilterNode(col("month") == 5, MockQueryPlanNode([data1, data2]))
    sort_node = SortNode(["dep_delay"], [False], no_may)

    batches = list(sort_node.batches())
    assert len(batches) == 1
    assert batches[0].num_rows == 0
    assert batches[0].schema.names == ["month", "dep_delay"]


def test_sort_node_with_paginate_node():
    data1 = pa.record_batch({"values": [5, 3, 9]})
    data2 = pa.record_batch({"values": [1, 4, 2]})
    sort_node = SortNode(["values"], [False], MockQueryPlanNode([data1, data2]))
    paginate_node = PaginateNode(offset=1, length=3, child=sort_node)

    result = pa.Table.from_batches(list(paginate_node.batches()))
    assert result.column(0).to_pylist() == [2, 3, 4]


def test_paginate_across_batches():
    data1 = pa.record_batch({"values": [1, 2]})
    data2 = pa.record_batch({"values": [3, 4]})
    data3 = pa.record_batch({"values": [5, 6]})
    paginate_node = PaginateNode(1, 4, MockQueryPlanNode([data1, data2, data3]))

    result = pa.Table.from_batches(list(paginate_node.batches()))
    assert result.column(0).to_pylist() == [2, 3, 4, 5]
    assert str(paginate_node) == "PaginateNode(1:5, MockQueryPlanNode)"


def test_paginate_past_the_end_keeps_schema():
    data = pa.record_batch({"values": [1, 2]})
    batches = list(PaginateNode(5, 2, MockQueryPlanNode([data])).batches())
    assert len(batches) == 1
    assert batches[0].num_rows == 0
    assert batches[0].schema == data.schema


def test_filter_drops_missing_predicates():
    data = pa.record_batch({"month": [1, None, 2, 1], "day": [1, 1, 1, None]})
    filter_node = FilterNode(
        (col("month") == 1) & (col("day") == 1), MockQueryPlanNode([data])
    )

    result = next(filter_node.batches())
    assert result.to_pydict() == {"month": [1], "day": [1]}
