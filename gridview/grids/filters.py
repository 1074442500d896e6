import logging

import django_filters
from crispy_forms.helper import FormHelper
from crispy_forms.layout import Submit
from django import forms
from django.core.exceptions import FieldDoesNotExist
from django.db import models
from django_filters.constants import EMPTY_VALUES

logger = logging.getLogger(__name__)

TEXT_FIELDS = (models.CharField, models.TextField)


class GridFilterForm(forms.Form):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.helper = FormHelper()
        self.helper.disable_csrf = True
        self.helper.form_method = "GET"
        self.helper.add_input(Submit("submit", "Filter"))


class GridFilterSet(django_filters.FilterSet):
    """
    Filters for a grid view, bound to a filter entity.

    The entity is a model instance: its current values seed the unbound form, and
    ``handle_request`` copies valid submitted values back onto it. Filters are not
    declared on the class; each grid column contributes one through ``add_column_filter``.
    """

    class Meta:
        form = GridFilterForm

    def __init__(self, data=None, queryset=None, *, entity, request=None, prefix=None):
        self.entity = entity
        if queryset is None:
            queryset = type(entity)._default_manager.none()
        super().__init__(data, queryset, request=request, prefix=prefix)

    @property
    def form(self):
        if not hasattr(self, "_form"):
            Form = self.get_form_class()
            if self.is_bound:
                self._form = Form(self.data, prefix=self.form_prefix)
            else:
                self._form = Form(prefix=self.form_prefix, initial=self.get_initial())
        return self._form

    def get_initial(self):
        initial = {}
        for name, filter_ in self.filters.items():
            value = getattr(self.entity, filter_.field_name, None)
            if value not in EMPTY_VALUES:
                initial[name] = value
        return initial

    @staticmethod
    def default_lookup_expr(field):
        if isinstance(field, TEXT_FIELDS) and not field.choices:
            return "icontains"
        return "exact"

    def build_filter(self, field_name, lookup_expr=None):
        model = self.queryset.model
        try:
            field = model._meta.get_field(field_name)
        except FieldDoesNotExist:
            field = None

        if field is not None and field.concrete:
            lookup_expr = lookup_expr or self.default_lookup_expr(field)
            filter_class, _ = self.filter_for_lookup(field, lookup_expr)
            if filter_class is not None:
                return self.filter_for_field(field, field_name, lookup_expr)
            logger.debug("No filter type for %s.%s, falling back to a text filter", model.__name__, field_name)

        return django_filters.CharFilter(field_name=field_name, lookup_expr=lookup_expr or "icontains")

    def add_column_filter(self, field_name, lookup_expr=None, label=None):
        if hasattr(self, "_form"):
            raise RuntimeError("Column filters must be added before the filter form is built.")

        filter_ = self.build_filter(field_name, lookup_expr)
        if label is not None:
            filter_.label = label
        filter_.model = self.queryset.model
        filter_.parent = self
        self.filters[field_name] = filter_
        return filter_

    def handle_request(self):
        """
        Validate the submitted filters and copy their non-empty values onto the entity.

        Returns True when the form was submitted and valid.
        """
        if not self.is_bound:
            return False

        if not self.is_valid():
            logger.info("Filter form %r submitted with errors: %s", self.form_prefix, self.form.errors.as_json())
            return False

        for name, value in self.form.cleaned_data.items():
            if value in EMPTY_VALUES:
                continue
            setattr(self.entity, self.filters[name].field_name, value)
        return True
