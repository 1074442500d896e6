from django.core.exceptions import FieldDoesNotExist
from django.db import models
from django.utils.text import capfirst
from django_filters.constants import EMPTY_VALUES


class BaseDataSource:
    """
    Supplies the rows and entity metadata a grid view is built from.

    Subclasses implement ``fetch_entity_fields``, ``get_entity_short_name`` and ``get_data``.
    """

    def fetch_entity_fields(self):
        raise NotImplementedError

    def get_entity_short_name(self):
        raise NotImplementedError

    def get_data(self):
        raise NotImplementedError

    def get_queryset(self):
        """Queryset the filters of a grid view run against, if the source has one."""
        return None

    def get_attribute_label(self, attribute_name):
        return capfirst(attribute_name.replace("_", " "))

    def filter_data(self, filterset):
        return self.get_data()


def _matches(value, lookup_expr, expected):
    if lookup_expr in ("icontains", "contains"):
        if value is None:
            return False
        if lookup_expr == "icontains":
            return str(expected).lower() in str(value).lower()
        return str(expected) in str(value)
    if lookup_expr == "iexact":
        return value is not None and str(value).lower() == str(expected).lower()
    if lookup_expr == "in":
        return value in expected
    return value == expected


class ArrayDataSource(BaseDataSource):
    """In-memory records, either mappings or plain objects."""

    def __init__(self, records, fields=None, entity_name="item"):
        self.records = list(records)
        self.fields = list(fields) if fields is not None else None
        self.entity_name = entity_name

    def fetch_entity_fields(self):
        if self.fields is not None:
            return list(self.fields)
        if not self.records:
            return []
        first = self.records[0]
        if isinstance(first, dict):
            return list(first.keys())
        return [name for name in vars(first) if not name.startswith("_")]

    def get_entity_short_name(self):
        return self.entity_name

    def get_data(self):
        return list(self.records)

    def resolve(self, record, attribute_name):
        if isinstance(record, dict):
            return record.get(attribute_name)
        return getattr(record, attribute_name, None)

    def filter_data(self, filterset):
        rows = self.get_data()
        if not filterset.is_bound or not filterset.is_valid():
            return rows

        for name, value in filterset.form.cleaned_data.items():
            if value in EMPTY_VALUES:
                continue
            filter_ = filterset.filters[name]
            rows = [
                row for row in rows if _matches(self.resolve(row, filter_.field_name), filter_.lookup_expr, value)
            ]
        return rows


class QueryDataSource(BaseDataSource):
    """Rows come from a Django queryset; entity metadata from its model."""

    def __init__(self, queryset):
        if isinstance(queryset, type) and issubclass(queryset, models.Model):
            queryset = queryset._default_manager.all()
        self.queryset = queryset

    @property
    def model(self):
        return self.queryset.model

    def fetch_entity_fields(self):
        return [field.name for field in self.model._meta.concrete_fields]

    def get_entity_short_name(self):
        return self.model._meta.model_name

    def get_model_field(self, attribute_name):
        try:
            return self.model._meta.get_field(attribute_name)
        except FieldDoesNotExist:
            return None

    def get_attribute_label(self, attribute_name):
        field = self.get_model_field(attribute_name)
        if field is None or not hasattr(field, "verbose_name"):
            return super().get_attribute_label(attribute_name)
        return capfirst(field.verbose_name)

    def get_data(self):
        return self.queryset.all()

    def get_queryset(self):
        return self.queryset

    def filter_data(self, filterset):
        return filterset.qs
