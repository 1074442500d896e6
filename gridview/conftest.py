import pytest
from django.db import connection

from gridview.grids.datasources import ArrayDataSource, QueryDataSource
from gridview.grids.factory import GridViewFactory
from gridview.grids.tests.factories import BookFactory
from gridview.grids.tests.models import Book


@pytest.fixture(scope="session", autouse=True)
def create_book_table(django_db_setup, django_db_blocker):
    with django_db_blocker.unblock():
        with connection.schema_editor() as schema_editor:
            schema_editor.create_model(Book)
    yield

    with django_db_blocker.unblock():
        with connection.schema_editor() as schema_editor:
            schema_editor.delete_model(Book)


@pytest.fixture
def grid_factory() -> GridViewFactory:
    return GridViewFactory()


@pytest.fixture
def array_source() -> ArrayDataSource:
    return ArrayDataSource(
        [
            {"id": 1, "name": "Alice", "city": "Lagos"},
            {"id": 2, "name": "Bob", "city": "Nairobi"},
            {"id": 3, "name": "Carol", "city": "Lagos"},
        ],
        entity_name="person",
    )


@pytest.fixture
def book_source() -> QueryDataSource:
    return QueryDataSource(Book.objects.all())


@pytest.fixture
def books(db):
    return [
        BookFactory(title="Dune", author="Frank Herbert"),
        BookFactory(title="Emma", author="Jane Austen"),
        BookFactory(title="Dubliners", author="James Joyce", in_stock=False),
    ]
