"""Tests for property parsing, Document and document_title."""

import pytest

from notionlinks.graph.document import Document, DocumentAccessor, document_title
from notionlinks.graph.properties import (
    OtherProperty,
    RelationProperty,
    TitleProperty,
    parse_properties,
    parse_property,
)
from tests.helpers import FakeClient, make_page


class TestParseProperty:
    """Tests for the typed property variants."""

    def test_title_runs_in_order(self):
        value = parse_property(
            {"type": "title", "title": [{"plain_text": "Launch "}, {"plain_text": "plan"}]}
        )
        assert isinstance(value, TitleProperty)
        assert value.runs == ("Launch ", "plan")
        assert value.text == "Launch plan"

    def test_relation_ids_deduplicated_in_order(self):
        value = parse_property(
            {"type": "relation", "relation": [{"id": "b"}, {"id": "a"}, {"id": "b"}]}
        )
        assert isinstance(value, RelationProperty)
        assert value.ids == ("b", "a")
        assert "a" in value
        assert "c" not in value

    def test_relation_missing_list(self):
        assert parse_property({"type": "relation"}) == RelationProperty()

    def test_other_types_keep_payload(self):
        payload = {"type": "select", "select": {"name": "Done"}}
        value = parse_property(payload)
        assert isinstance(value, OtherProperty)
        assert value.type == "select"
        assert value.payload == payload

    def test_parse_properties_preserves_order(self):
        parsed = parse_properties(
            {
                "Status": {"type": "status", "status": None},
                "Name": {"type": "title", "title": []},
                "Related": {"type": "relation", "relation": []},
            }
        )
        assert list(parsed) == ["Status", "Name", "Related"]


class TestRelationProperty:
    """Tests for RelationProperty set operations."""

    def test_with_id_appends(self):
        assert RelationProperty(("a",)).with_id("b").ids == ("a", "b")

    def test_with_id_present_is_unchanged(self):
        value = RelationProperty(("a", "b"))
        assert value.with_id("a") is value

    def test_without_id_keeps_others(self):
        assert RelationProperty(("a", "b", "c")).without_id("b").ids == ("a", "c")

    def test_without_absent_id(self):
        assert RelationProperty(("a",)).without_id("z").ids == ("a",)

    def test_to_payload(self):
        assert RelationProperty(("a", "b")).to_payload() == {
            "relation": [{"id": "a"}, {"id": "b"}]
        }


class TestDocumentTitle:
    """Tests for title extraction."""

    def test_title_property_name_is_discovered(self):
        page = Document.from_api(make_page("p1", "Quarterly goals", title_property="Task name"))
        assert document_title(page) == "Quarterly goals"

    def test_no_title_property_is_untitled(self):
        page = Document.from_api(make_page("p1", title=None, relations={"Related": []}))
        assert document_title(page) == "Untitled"

    def test_empty_runs_is_untitled(self):
        page = Document.from_api(
            {"id": "p1", "parent": {}, "properties": {"Name": {"type": "title", "title": []}}}
        )
        assert document_title(page) == "Untitled"

    def test_title_property_on_document(self):
        page = Document.from_api(make_page("p1", "Hello"))
        assert page.title == "Hello"


class TestDocumentFromApi:
    """Tests for parent resolution."""

    def test_database_parent(self):
        page = Document.from_api(make_page("p1", database_id="db1"))
        assert page.database_id == "db1"
        assert page.parent_page_id is None

    def test_page_parent(self):
        page = Document.from_api(make_page("p1", parent_page_id="p0"))
        assert page.database_id is None
        assert page.parent_page_id == "p0"

    def test_relation_lookup(self):
        page = Document.from_api(make_page("p1", "One", relations={"Related": ["p2"]}))
        assert page.relation("Related").ids == ("p2",)
        assert page.relation("Name") is None
        assert page.relation("Missing") is None


class TestDocumentAccessor:
    """Tests for the remote paths used by the accessor."""

    def test_fetch_document(self):
        client = FakeClient(pages=[make_page("p1", "One")])
        page = DocumentAccessor(client).fetch_document("p1")
        assert page.id == "p1"
        assert client.paths("GET") == ["pages/p1"]

    def test_search_restricted_to_pages(self):
        client = FakeClient(pages=[make_page("p1", "One")], search=["p1"])
        results = DocumentAccessor(client).search_documents("One", 50)
        assert [p.id for p in results] == ["p1"]
        assert client.calls[-1] == (
            "POST",
            "search",
            {"query": "One", "filter": {"property": "object", "value": "page"}, "page_size": 50},
        )

    def test_query_collection_single_page(self):
        client = FakeClient(pages=[make_page("p1")], queries={"db1": ["p1"]})
        results = DocumentAccessor(client).query_collection("db1", 100)
        assert [p.id for p in results] == ["p1"]
        assert client.calls == [("POST", "databases/db1/query", {"page_size": 100})]

    def test_write_relation_is_partial_update(self):
        client = FakeClient(pages=[make_page("p1", relations={"Related": []})])
        DocumentAccessor(client).write_relation("p1", "Related", RelationProperty(("p2",)))
        assert client.patches == [
            ("p1", {"properties": {"Related": {"relation": [{"id": "p2"}]}}})
        ]

    def test_missing_page_raises(self):
        from notionlinks.errors import NotFoundError

        with pytest.raises(NotFoundError):
            DocumentAccessor(FakeClient()).fetch_document("nope")
