import django_tables2 as tables
from django.urls import NoReverseMatch, reverse
from django.utils.text import capfirst

from gridview.grids.exceptions import GridException
from gridview.grids.registry import column_registry
from gridview.grids.tables import ActionsColumn, DMYTColumn, DurationColumn, IndexColumn, ValueColumn


class BaseColumn:
    """
    A column of a grid view.

    Every column type declares the options it accepts in ``options``; the options of a
    class are those of all its bases plus its own, and each must have a class-level default.
    ``configure`` refuses any other name.
    """

    options = ("label", "visible", "attrs", "orderable", "empty_value")

    label = None
    visible = True
    attrs = None
    orderable = None
    empty_value = "—"

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        for name in cls.get_options():
            if not hasattr(cls, name):
                raise GridException(f"{cls.__name__} declares option {name!r} without a default value.")

    def __init__(self, **options):
        self.grid_view = None
        self.configure(**options)

    @classmethod
    def get_options(cls):
        names = []
        for klass in reversed(cls.__mro__):
            for name in vars(klass).get("options", ()):
                if name not in names:
                    names.append(name)
        return tuple(names)

    def configure(self, **options):
        allowed = self.get_options()
        for name, value in options.items():
            if name not in allowed:
                raise GridException(f"Column has no property {name}")
            setattr(self, name, value)
        return self

    @property
    def name(self):
        raise NotImplementedError

    def is_visible(self):
        return bool(self.visible)

    def set_grid_view(self, grid_view):
        self.grid_view = grid_view

    @property
    def data_source(self):
        return self.grid_view.data_source if self.grid_view is not None else None

    def get_label(self):
        return self.label if self.label is not None else ""

    def init_column_filter(self, filterset):
        """Add this column's filter to the grid view's filter set. Most columns have none."""

    def get_table_column_kwargs(self):
        kwargs = {
            "verbose_name": self.get_label(),
            "default": self.empty_value,
            "attrs": self.attrs or {},
        }
        if self.orderable is not None:
            kwargs["orderable"] = self.orderable
        return kwargs

    def as_table_column(self):
        raise NotImplementedError


@column_registry.register("column")
class Column(BaseColumn):
    options = ("attribute_name", "value", "format", "filter", "filter_lookup")

    attribute_name = None
    value = None
    format = "text"
    filter = True
    filter_lookup = None

    format_classes = {
        "text": tables.Column,
        "datetime": DMYTColumn,
        "duration": DurationColumn,
        "boolean": tables.BooleanColumn,
    }

    @property
    def name(self):
        return self.attribute_name

    def get_label(self):
        if self.label is not None:
            return self.label
        if not self.attribute_name:
            return ""
        if self.data_source is not None:
            return self.data_source.get_attribute_label(self.attribute_name)
        return capfirst(self.attribute_name.replace("_", " "))

    def init_column_filter(self, filterset):
        if not self.filter or not self.attribute_name:
            return
        filterset.add_column_filter(self.attribute_name, lookup_expr=self.filter_lookup, label=self.get_label())

    def as_table_column(self):
        kwargs = self.get_table_column_kwargs()
        if self.attribute_name:
            kwargs["accessor"] = self.attribute_name
        if self.value is not None:
            return ValueColumn(self.value, **kwargs)

        try:
            column_class = self.format_classes[self.format]
        except KeyError:
            raise GridException(
                f"Unknown column format {self.format!r}, expected one of {', '.join(self.format_classes)}."
            )
        return column_class(**kwargs)


@column_registry.register("action_column")
class ActionColumn(BaseColumn):
    options = ("buttons", "url_names", "url_kwarg")

    buttons = ("view", "update", "delete")
    url_names = None
    url_kwarg = "pk"
    orderable = False

    button_labels = {"view": "View", "update": "Edit", "delete": "Delete"}
    url_suffixes = {"view": "detail", "update": "update", "delete": "delete"}

    @property
    def name(self):
        return "actions"

    def get_url_name(self, button):
        if self.url_names and button in self.url_names:
            return self.url_names[button]
        suffix = self.url_suffixes.get(button, button)
        return f"{self.data_source.get_entity_short_name()}_{suffix}"

    def get_url_factory(self, button):
        url_name = self.get_url_name(button)
        url_kwarg = self.url_kwarg

        def url_factory(record):
            value = tables.A(url_kwarg).resolve(record, quiet=True)
            if value is None:
                raise NoReverseMatch(f"Record has no {url_kwarg!r} to build the {url_name} url with.")
            return reverse(url_name, kwargs={url_kwarg: value})

        return url_factory

    def as_table_column(self):
        buttons = [
            (button, self.button_labels.get(button, capfirst(button)), self.get_url_factory(button))
            for button in self.buttons
        ]
        return ActionsColumn(buttons, **self.get_table_column_kwargs())


@column_registry.register("serial_column")
class SerialColumn(BaseColumn):
    label = "#"
    orderable = False

    @property
    def name(self):
        return "serial"

    def as_table_column(self):
        return IndexColumn(**self.get_table_column_kwargs())


@column_registry.register("checkbox_column")
class CheckboxColumn(BaseColumn):
    options = ("attribute_name",)

    attribute_name = "pk"
    orderable = False

    @property
    def name(self):
        return "selection"

    def as_table_column(self):
        kwargs = self.get_table_column_kwargs()
        kwargs.pop("verbose_name")
        kwargs.pop("default")
        return tables.CheckBoxColumn(accessor=self.attribute_name, **kwargs)
