"""tests/unit/test_serialization.py"""

import pytest

from wiremodel.utils.serialization import build_query, parse_query


class TestBuildQuery:
    """Tests for build_query()."""

    @pytest.mark.parametrize(
        "data, expected",
        [
            ({}, ""),
            ({"a": "x"}, "a=x"),
            ({"a": "x y", "b": "&="}, "a=x+y&b=%26%3D"),
            ({"b": {"c": "y"}}, "b%5Bc%5D=y"),
            ({"l": ["p", "q"]}, "l%5B0%5D=p&l%5B1%5D=q"),
            ({"t": True, "f": False, "n": None}, "t=1&f=0"),
            ({"i": 42, "x": 1.5}, "i=42&x=1.5"),
            ({"a": {"b": None}}, ""),
        ],
    )
    def test_build_query(self, data, expected):
        """Test encoding of scalar and nested values."""
        assert build_query(data) == expected


class TestParseQuery:
    """Tests for parse_query()."""

    @pytest.mark.parametrize(
        "query, expected",
        [
            ("", {}),
            ("&&", {}),
            ("a=x", {"a": "x"}),
            ("a", {"a": ""}),
            ("a=x+y&b=%26%3D", {"a": "x y", "b": "&="}),
            ("a=1&a=2", {"a": "2"}),
            ("a[]=1&a[]=2", {"a": ["1", "2"]}),
            ("a%5Bb%5D%5Bc%5D=y", {"a": {"b": {"c": "y"}}}),
            ("a[0]=p&a[1]=q", {"a": ["p", "q"]}),
            ("a[1]=q&a[0]=p", {"a": {"1": "q", "0": "p"}}),
            ("a[x]=1&a[]=2", {"a": {"x": "1", "0": "2"}}),
            ("a=1&a[b]=2", {"a": {"b": "2"}}),
            ("=orphan&b=1", {"b": "1"}),
        ],
    )
    def test_parse_query(self, query, expected):
        """Test decoding into nested maps and lists."""
        assert parse_query(query) == expected

    def test_nested_lists(self):
        """Test lists inside maps inside lists."""
        parsed = parse_query("u[0][name]=a&u[0][tags][]=x&u[1][name]=b")
        assert parsed == {"u": [{"name": "a", "tags": ["x"]}, {"name": "b"}]}

    def test_encoded_form_decodes_to_strings(self):
        """Test that decoding an encoded map gives its string form."""
        data = {"a": 1, "b": {"c": [True, "z"]}}
        assert parse_query(build_query(data)) == {"a": "1", "b": {"c": ["1", "z"]}}
