import pytest
from django.apps import apps

from gridview.grids.columns import ActionColumn, CheckboxColumn, Column, SerialColumn
from gridview.grids.conf import DEFAULTS, get_setting
from gridview.grids.exceptions import ColumnNotRegistered
from gridview.grids.registry import ColumnRegistry, column_registry


def test_builtin_columns_are_registered():
    assert column_registry.get("column") is Column
    assert column_registry.get("action_column") is ActionColumn
    assert column_registry.get("serial_column") is SerialColumn
    assert column_registry.get("checkbox_column") is CheckboxColumn


def test_register_as_decorator():
    registry = ColumnRegistry()

    @registry.register("price")
    class PriceColumn(Column):
        pass

    assert "price" in registry
    assert list(registry) == ["price"]
    assert isinstance(registry.create("price"), PriceColumn)


def test_create_returns_new_instances():
    first = column_registry.create("column")
    second = column_registry.create("column")

    assert first is not second


def test_unknown_name_raises():
    registry = ColumnRegistry()

    with pytest.raises(ColumnNotRegistered, match="'missing'"):
        registry.get("missing")


def test_settings_columns_registered_on_ready(settings):
    settings.GRIDVIEW = {"COLUMNS": {"row_number": "gridview.grids.columns.SerialColumn"}}

    try:
        apps.get_app_config("grids").ready()
        assert column_registry.get("row_number") is SerialColumn
    finally:
        column_registry.unregister("row_number")

    assert "row_number" not in column_registry


def test_get_setting_falls_back_to_defaults(settings):
    settings.GRIDVIEW = {"PAGE_SIZE": 50}

    assert get_setting("PAGE_SIZE") == 50
    assert get_setting("DEFAULT_COLUMN") == DEFAULTS["DEFAULT_COLUMN"]

    del settings.GRIDVIEW
    assert get_setting("PAGE_SIZE_OPTIONS") == [20, 30, 50, 100]
