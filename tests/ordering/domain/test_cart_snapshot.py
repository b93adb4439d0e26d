"""Tests for converting between nested cart snapshots and flat lines."""

from ordering.cart.snapshot import DEFAULT_SIZE, MAX_SIZE_LENGTH, SnapshotLine, flatten, nest, sizes_for


class TestFlatten:
    def test_flattens_every_size(self):
        lines = flatten({"1": {"S": 2, "M": 1}, "2": {"L": 3}})
        assert sorted(lines) == [
            SnapshotLine("1", "M", 1),
            SnapshotLine("1", "S", 2),
            SnapshotLine("2", "L", 3),
        ]

    def test_drops_non_positive_quantities(self):
        assert flatten({"1": {"S": 0, "M": -2, "L": 1}}) == [SnapshotLine("1", "L", 1)]

    def test_drops_non_integer_quantities(self):
        assert flatten({"1": {"S": "2", "M": 1.5, "L": True, "XL": None}}) == []

    def test_skips_products_whose_sizes_are_not_a_mapping(self):
        assert flatten({"1": [1, 2], "2": 5, "3": {"S": 1}}) == [SnapshotLine("3", "S", 1)]

    def test_blank_size_becomes_default(self):
        assert flatten({"1": {"": 2}}) == [SnapshotLine("1", DEFAULT_SIZE, 2)]

    def test_product_ids_are_strings(self):
        assert flatten({7: {"S": 1}}) == [SnapshotLine("7", "S", 1)]


class TestSizesFor:
    def test_valid_pairs(self):
        assert sizes_for({"S": 1, "M": 0}) == [("S", 1)]

    def test_non_mapping_yields_nothing(self):
        assert sizes_for("S") == []
        assert sizes_for(None) == []


class TestNest:
    def test_nests_lines_by_product(self):
        lines = [SnapshotLine("1", "S", 2), SnapshotLine("1", "M", 1), SnapshotLine("2", "default", 4)]
        assert nest(lines) == {"1": {"S": 2, "M": 1}, "2": {"default": 4}}

    def test_empty(self):
        assert nest([]) == {}

    def test_flatten_then_nest_keeps_valid_entries(self):
        snapshot = {"1": {"S": 2, "M": 0}, "2": {"L": 1}}
        assert nest(flatten(snapshot)) == {"1": {"S": 2}, "2": {"L": 1}}


class TestSizeLabels:
    def test_blank_and_default_collapse_to_one_line(self):
        assert flatten({"1": {"": 2, "default": 3}}) == [SnapshotLine("1", DEFAULT_SIZE, 3)]

    def test_collapsed_sizes_keep_larger_quantity(self):
        assert sizes_for({"default": 4, None: 1}) == [(DEFAULT_SIZE, 4)]

    def test_overlong_size_is_dropped(self):
        assert flatten({"1": {"S": 1, "X" * (MAX_SIZE_LENGTH + 1): 1}}) == [SnapshotLine("1", "S", 1)]

    def test_size_at_limit_is_kept(self):
        label = "X" * MAX_SIZE_LENGTH
        assert sizes_for({label: 2}) == [(label, 2)]
