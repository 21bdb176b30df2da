"""
Unit tests for bracket-notation parameter serialization.

Tests cover:
- Flat, nested and array parameters
- Scalar formatting (dates, booleans, None, numbers)
- Empty containers
- Cycle and unsupported-type rejection
- Optional percent-encoding
"""

from datetime import date, datetime

import pytest

from api_resource.exceptions import SerializationError
from api_resource.serialization import (
    ParamSerializer,
    format_date,
    format_key,
    format_scalar,
    serialize,
)


class TestSerialize:
    """Tests for the default serializer."""

    def test_flat_mapping(self):
        """Flat keys are joined with &."""
        assert serialize({"a": 1, "b": "x"}) == "a=1&b=x"

    def test_nested_mapping_and_array(self):
        """Nested mappings use brackets, arrays the [] marker."""
        assert serialize({"a": {"b": 1, "c": [2, 3]}}) == "a[b]=1&a[c][]=2&a[c][]=3"

    def test_top_level_array(self):
        """A top-level array repeats its key."""
        assert serialize({"tags": ["x", "y"]}) == "tags[]=x&tags[]=y"

    def test_mapping_inside_array(self):
        """A mapping inside an array continues after the marker."""
        assert serialize({"items": [{"id": 1}, {"id": 2}]}) == (
            "items[][id]=1&items[][id]=2"
        )

    def test_tuple_is_an_array(self):
        """Tuples serialize like lists."""
        assert serialize({"t": (1, 2)}) == "t[]=1&t[]=2"

    def test_date_is_unpadded(self):
        """Dates render as YEAR-MONTH-DAY with a 1-based, unpadded month."""
        assert serialize({"d": date(2024, 3, 5)}) == "d=2024-3-5"

    def test_datetime_renders_date_part(self):
        """Datetimes render only their date."""
        assert serialize({"d": datetime(2024, 12, 31, 23, 59)}) == "d=2024-12-31"

    def test_booleans_and_none(self):
        """Booleans render lower-case and None as an empty value."""
        assert serialize({"t": True, "f": False, "n": None}) == "t=true&f=false&n="

    def test_no_percent_encoding_by_default(self):
        """Values are written verbatim."""
        assert serialize({"q": "a b&c=d"}) == "q=a b&c=d"

    def test_empty_and_none(self):
        """An empty mapping and None both give an empty string."""
        assert serialize({}) == ""
        assert serialize(None) == ""

    def test_empty_containers_contribute_nothing(self):
        """Empty nested containers are skipped."""
        assert serialize({"a": [], "b": {}, "c": 1}) == "c=1"

    def test_key_order_follows_insertion(self):
        """Keys appear in mapping insertion order."""
        assert serialize({"z": 1, "a": 2, "m": 3}) == "z=1&a=2&m=3"


class TestRejection:
    """Tests for trees that cannot be serialized."""

    def test_self_referencing_mapping(self):
        """A mapping containing itself is rejected with its key path."""
        params: dict = {"filter": {}}
        params["filter"]["self"] = params
        with pytest.raises(SerializationError) as exc_info:
            serialize(params)
        assert exc_info.value.key_path == ("filter", "self")

    def test_self_referencing_list(self):
        """A list containing itself is rejected."""
        items: list = [1]
        items.append(items)
        with pytest.raises(SerializationError):
            serialize({"items": items})

    def test_shared_subtree_is_not_a_cycle(self):
        """The same subtree may appear under several keys."""
        shared = {"x": 1}
        assert serialize({"a": shared, "b": shared}) == "a[x]=1&b[x]=1"

    def test_non_mapping_top_level(self):
        """The top level must be a mapping."""
        with pytest.raises(SerializationError):
            serialize([1, 2])  # type: ignore[arg-type]

    def test_deeply_nested_tree(self):
        """A very deep acyclic tree is rejected instead of overflowing."""
        tree: dict = {}
        node = tree
        for _ in range(5000):
            node["k"] = {}
            node = node["k"]
        with pytest.raises(SerializationError, match="nested too deeply"):
            serialize(tree)

    def test_unsupported_leaf(self):
        """Leaves of unknown types are rejected."""
        with pytest.raises(SerializationError) as exc_info:
            serialize({"blob": b"bytes"})
        assert exc_info.value.key_path == ("blob",)


class TestPercentEncoding:
    """Tests for the percent_encode option."""

    def test_values_are_encoded(self):
        """Reserved characters in values are escaped."""
        serializer = ParamSerializer(percent_encode=True)
        assert serializer({"q": "a b&c=d"}) == "q=a%20b%26c%3Dd"

    def test_brackets_in_keys_survive(self):
        """Bracket notation stays readable when encoding."""
        serializer = ParamSerializer(percent_encode=True)
        assert serializer({"a b": {"c": 1}}) == "a%20b[c]=1"


class TestHelpers:
    """Tests for the formatting helpers."""

    def test_format_date(self):
        assert format_date(date(2024, 1, 9)) == "2024-1-9"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            (True, "true"),
            (3, "3"),
            (2.0, "2"),
            (2.5, "2.5"),
            (float("nan"), "NaN"),
            (float("-inf"), "-Infinity"),
            ("text", "text"),
        ],
    )
    def test_format_scalar(self, value, expected):
        assert format_scalar(value) == expected

    def test_format_key(self):
        """First segment bare, the rest bracketed; '' is the array marker."""
        assert format_key(["a"]) == "a"
        assert format_key(["a", "b", "", "c"]) == "a[b][][c]"
