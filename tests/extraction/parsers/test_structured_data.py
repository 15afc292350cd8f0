"""Tests for addbook/extraction/parsers/structured_data.py"""

import json
import re
from datetime import datetime

import pytest
from bs4 import BeautifulSoup

from addbook.extraction.parsers.structured_data import (
    StructuredDataParser,
    concatenate_names,
    format_date_from_timestamp,
    has_long_description,
    is_book_details,
)


def make_soup_with_jsonld(*blocks: str) -> BeautifulSoup:
    """Create a BeautifulSoup with one JSON-LD script tag per block."""
    scripts = "".join(f'<script type="application/ld+json">{b}</script>' for b in blocks)
    return BeautifulSoup(f"<html><head>{scripts}</head><body></body></html>", "lxml")


@pytest.fixture
def parser():
    return StructuredDataParser()


class TestFindJsonLd:
    def test_book_type(self, parser):
        soup = make_soup_with_jsonld('{"@type": "Book", "name": "Emma"}')
        assert parser.find_json_ld(soup)["name"] == "Emma"

    def test_type_list_with_product(self, parser):
        soup = make_soup_with_jsonld('{"@type": ["Product", "Thing"], "name": "Emma"}')
        assert parser.find_json_ld(soup)["name"] == "Emma"

    def test_plain_product_at_top_level_skipped(self, parser):
        soup = make_soup_with_jsonld('{"@type": "Product", "name": "Kettle"}')
        assert parser.find_json_ld(soup) is None

    def test_skips_unrelated_and_malformed_blocks(self, parser):
        soup = make_soup_with_jsonld(
            '{"@type": "Organization", "name": "Store"}',
            "not valid json{{{",
            '{"@type": "Book", "name": "Persuasion"}',
        )
        assert parser.find_json_ld(soup)["name"] == "Persuasion"

    def test_graph_member_returned(self, parser):
        data = {"@context": "https://schema.org", "@graph": [
            {"@type": "WebPage", "name": "Page"},
            {"@type": "Book", "name": "Emma"},
        ]}
        soup = make_soup_with_jsonld(json.dumps(data))
        assert parser.find_json_ld(soup) == {"@type": "Book", "name": "Emma"}

    def test_top_level_list_member_returned(self, parser):
        soup = make_soup_with_jsonld('[{"@type": "BreadcrumbList"}, {"@type": "Product", "name": "Emma"}]')
        assert parser.find_json_ld(soup)["name"] == "Emma"

    def test_no_script(self, parser):
        assert parser.find_json_ld(BeautifulSoup("<html></html>", "lxml")) is None


class TestFindAppState:
    def test_parses_payload(self, parser):
        soup = BeautifulSoup(
            '<script id="__NEXT_DATA__" type="application/json">{"props": {"a": 1}}</script>', "lxml"
        )
        assert parser.find_app_state(soup) == {"props": {"a": 1}}

    def test_malformed_payload(self, parser):
        soup = BeautifulSoup('<script id="__NEXT_DATA__">{broken</script>', "lxml")
        assert parser.find_app_state(soup) is None

    def test_missing_payload(self, parser):
        assert parser.find_app_state(BeautifulSoup("<html></html>", "lxml")) is None


class TestFindByPredicate:
    def test_finds_nested_node(self, parser):
        data = {"a": [{"b": {"target": True}}]}
        assert parser.find_by_predicate(data, lambda n: isinstance(n, dict) and n.get("target")) == {"target": True}

    def test_cyclic_graph_terminates(self, parser):
        a = {"name": "a"}
        b = {"name": "b", "back": a}
        a["next"] = b
        a["self"] = a
        nodes = [a, b]
        a["all"] = nodes
        assert parser.find_by_predicate(a, lambda n: False) is None

    def test_cyclic_graph_still_finds_match(self, parser):
        a = {"name": "a"}
        b = {"name": "b", "back": a, "details": {"__typename": "BookDetails"}}
        a["next"] = b
        assert parser.find_by_predicate(a, is_book_details) == {"__typename": "BookDetails"}

    def test_details_child_explored_first(self, parser):
        data = {
            "other": {"publisher": "Wrong", "publicationTime": 1, "format": "x"},
            "details": {"publisher": "Right", "publicationTime": 1, "numPages": 10},
        }
        assert parser.find_by_predicate(data, is_book_details)["publisher"] == "Right"

    def test_leaves_are_opaque(self, parser):
        data = {"when": datetime(2020, 1, 1), "pattern": re.compile("x"), "text": "details", "n": 3}
        assert parser.find_by_predicate(data, lambda n: isinstance(n, list)) is None

    def test_non_container_root(self, parser):
        assert parser.find_by_predicate("text", lambda n: True) is None


class TestPredicates:
    def test_book_details_by_typename(self):
        assert is_book_details({"__typename": "BookDetails"})

    def test_book_details_by_shape(self):
        assert is_book_details({"publisher": "P", "publicationTime": 1, "asin": "B0"})
        assert not is_book_details({"publisher": "P", "publicationTime": 1})

    def test_long_description(self):
        assert has_long_description({"description": "x" * 51})
        assert not has_long_description({"description": "x" * 50})
        assert not has_long_description({"description": {"html": "x" * 80}})


class TestConcatenateNames:
    def test_mixed_entries(self):
        assert concatenate_names([{"name": "Jane Austen"}, "Anna Quindlen"]) == "Jane Austen, Anna Quindlen"

    def test_single_object(self):
        assert concatenate_names({"@type": "Person", "name": "Elif Shafak"}) == "Elif Shafak"

    def test_blank_names_dropped(self):
        assert concatenate_names([{"name": " "}, {"url": "x"}, "Ann"]) == "Ann"

    def test_empty(self):
        assert concatenate_names(None) == ""
        assert concatenate_names([]) == ""


class TestFormatDateFromTimestamp:
    def test_local_calendar_date(self):
        expected = datetime.fromtimestamp(1700000000).strftime("%Y-%m-%d")
        assert format_date_from_timestamp(1700000000000) == expected

    def test_numeric_string(self):
        expected = datetime.fromtimestamp(1700000000).strftime("%Y-%m-%d")
        assert format_date_from_timestamp("1700000000000") == expected

    @pytest.mark.parametrize("value", [None, 0, "", "soon", True])
    def test_invalid(self, value):
        assert format_date_from_timestamp(value) == ""
