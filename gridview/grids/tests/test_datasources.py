from types import SimpleNamespace

import pytest

from gridview.grids.datasources import ArrayDataSource, BaseDataSource, QueryDataSource
from gridview.grids.tests.models import Book


def test_base_data_source_is_abstract():
    data_source = BaseDataSource()

    with pytest.raises(NotImplementedError):
        data_source.fetch_entity_fields()
    with pytest.raises(NotImplementedError):
        data_source.get_entity_short_name()
    assert data_source.get_queryset() is None
    assert data_source.get_attribute_label("created_on") == "Created on"


def test_array_source_fields_from_first_mapping(array_source):
    assert array_source.fetch_entity_fields() == ["id", "name", "city"]
    assert array_source.get_entity_short_name() == "person"


def test_array_source_fields_from_objects():
    data_source = ArrayDataSource([SimpleNamespace(code="KE", country="Kenya", _cache=None)])

    assert data_source.fetch_entity_fields() == ["code", "country"]
    assert data_source.get_entity_short_name() == "item"


def test_array_source_explicit_fields():
    assert ArrayDataSource([{"a": 1, "b": 2}], fields=("b",)).fetch_entity_fields() == ["b"]
    assert ArrayDataSource([]).fetch_entity_fields() == []


def test_array_source_resolves_mappings_and_objects():
    data_source = ArrayDataSource([])

    assert data_source.resolve({"name": "Ada"}, "name") == "Ada"
    assert data_source.resolve(SimpleNamespace(name="Ada"), "name") == "Ada"
    assert data_source.resolve(SimpleNamespace(), "name") is None


def test_query_source_accepts_a_model_class():
    data_source = QueryDataSource(Book)

    assert data_source.model is Book
    assert data_source.fetch_entity_fields() == ["id", "title", "author", "published", "in_stock"]
    assert data_source.get_entity_short_name() == "book"


def test_query_source_labels(book_source):
    assert book_source.get_attribute_label("author") == "Written by"
    assert book_source.get_attribute_label("rating") == "Rating"
    assert book_source.get_model_field("rating") is None


@pytest.mark.django_db
def test_query_source_data_is_a_fresh_queryset(books):
    data_source = QueryDataSource(Book.objects.filter(in_stock=True))

    assert [book.title for book in data_source.get_data()] == ["Dune", "Emma"]
    assert data_source.get_queryset().model is Book
