import django_tables2 as tables
import pytest

from gridview.grids.columns import ActionColumn, BaseColumn, CheckboxColumn, Column, SerialColumn
from gridview.grids.exceptions import GridException
from gridview.grids.grid import GridView
from gridview.grids.tables import ActionsColumn, DMYTColumn, DurationColumn, IndexColumn, ValueColumn


def bind(column, data_source):
    grid_view = GridView()
    grid_view.set_data_source(data_source)
    column.set_grid_view(grid_view)
    return column


def test_options_are_collected_across_bases():
    assert Column.get_options() == (
        "label",
        "visible",
        "attrs",
        "orderable",
        "empty_value",
        "attribute_name",
        "value",
        "format",
        "filter",
        "filter_lookup",
    )
    assert "buttons" in ActionColumn.get_options()
    assert "attribute_name" not in SerialColumn.get_options()


def test_option_without_default_fails_at_class_definition():
    with pytest.raises(GridException, match="'precision' without a default"):

        class MoneyColumn(Column):
            options = ("precision",)


def test_configure_rejects_undeclared_options():
    column = Column()

    with pytest.raises(GridException, match="Column has no property buttons"):
        column.configure(attribute_name="title", buttons=("view",))


def test_configure_sets_declared_options():
    column = Column(attribute_name="title", visible=False)

    assert column.attribute_name == "title"
    assert not column.is_visible()


def test_label_comes_from_model_field(book_source):
    assert bind(Column(attribute_name="author"), book_source).get_label() == "Written by"
    assert bind(Column(attribute_name="in_stock"), book_source).get_label() == "In stock"


def test_label_fallbacks(array_source):
    assert Column(attribute_name="first_name").get_label() == "First name"
    assert bind(Column(attribute_name="city"), array_source).get_label() == "City"
    assert Column(attribute_name="city", label="Town").get_label() == "Town"


@pytest.mark.parametrize(
    "column_format,column_class",
    [
        ("text", tables.Column),
        ("datetime", DMYTColumn),
        ("duration", DurationColumn),
        ("boolean", tables.BooleanColumn),
    ],
)
def test_format_selects_table_column(column_format, column_class):
    table_column = Column(attribute_name="value", format=column_format, label="Value").as_table_column()

    assert type(table_column) is column_class
    assert table_column.verbose_name == "Value"


def test_unknown_format_raises():
    with pytest.raises(GridException, match="Unknown column format 'html'"):
        Column(attribute_name="value", format="html").as_table_column()


def test_value_callable_builds_value_column():
    table_column = Column(attribute_name="name", value=lambda record: record["name"].upper()).as_table_column()

    assert isinstance(table_column, ValueColumn)
    assert table_column.render({"name": "ada"}) == "ADA"


def test_action_column_url_names(book_source):
    column = bind(ActionColumn(url_names={"delete": "books:remove"}), book_source)

    assert column.get_url_name("view") == "book_detail"
    assert column.get_url_name("update") == "book_update"
    assert column.get_url_name("delete") == "books:remove"
    assert isinstance(column.as_table_column(), ActionsColumn)


def test_serial_and_checkbox_columns():
    assert isinstance(SerialColumn().as_table_column(), IndexColumn)
    assert isinstance(CheckboxColumn().as_table_column(), tables.CheckBoxColumn)


def test_base_column_has_no_filter():
    column = SerialColumn()

    assert column.init_column_filter(filterset=None) is None
    assert isinstance(column, BaseColumn)
