import datetime
import itertools
import logging
from datetime import timedelta

import django_tables2 as tables
from django.urls import NoReverseMatch
from django.utils.html import format_html_join
from django.utils.timezone import is_aware, localtime

from gridview.grids.conf import get_setting

logger = logging.getLogger(__name__)

DATE_TIME_FORMAT = "%d-%b-%Y %H:%M"
DATE_FORMAT = "%d-%b-%Y"


class FullWidthTableMixin:
    """
    Mixin that allows tables to opt-in to full-width styling.

    The mixin applies 'base-table-full' CSS class for full-width tables,
    or 'base-table' for normal width tables.
    """

    full_width = False

    def __init__(self, *args, **kwargs):
        self.full_width = kwargs.pop("full_width", self.__class__.full_width)
        super().__init__(*args, **kwargs)

        table_class = "base-table-full" if self.full_width else "base-table"
        existing_class = self.attrs.get("class", "")
        existing_class = existing_class.replace("base-table-full", "").replace("base-table", "").strip()
        if existing_class:
            table_class = f"{table_class} {existing_class}"
        self.attrs["class"] = table_class


class GridTable(FullWidthTableMixin, tables.Table):
    """Table whose columns are supplied at runtime by a grid view."""


class ValueColumn(tables.Column):
    """Column whose cell content is computed from the whole record."""

    def __init__(self, compute, *args, **kwargs):
        self.compute = compute
        kwargs.setdefault("empty_values", ())
        super().__init__(*args, **kwargs)

    def render(self, record):
        return self.compute(record)


class IndexColumn(tables.Column):
    def __init__(self, *args, **kwargs):
        kwargs.setdefault("verbose_name", "#")
        kwargs.setdefault("orderable", False)
        kwargs.setdefault("empty_values", ())
        super().__init__(*args, **kwargs)

    def render(self, value, record, bound_column, bound_row, **kwargs):
        table = bound_row._table
        page = getattr(table, "page", None)
        if page:
            start_index = (page.number - 1) * page.paginator.per_page + 1
        else:
            start_index = 1
        if not hasattr(table, "_row_counter") or getattr(table, "_row_counter_start", None) != start_index:
            table._row_counter = itertools.count(start=start_index)
            table._row_counter_start = start_index
        return next(table._row_counter)


def get_duration_min(total_seconds):
    total_seconds = int(total_seconds)
    minutes = (total_seconds // 60) % 60
    hours = (total_seconds // 3600) % 24
    days = total_seconds // 86400

    parts = []
    if days:
        parts.append(f"{days} day{'s' if days != 1 else ''}")
    elif hours:
        parts.append(f"{hours} hr")
    elif minutes or not parts:
        parts.append(f"{minutes} min")

    return " ".join(parts)


class DurationColumn(tables.Column):
    def render(self, value):
        total_seconds = int(value.total_seconds() if isinstance(value, timedelta) else 0)
        return get_duration_min(total_seconds)


class DMYTColumn(tables.Column):
    """
    Formats datetime values as date and time, and date values as date only.
    """

    def render(self, value, record=None, bound_column=None):
        if value is None:
            return self.default

        final_value = str(value)

        if isinstance(value, datetime.datetime):
            if is_aware(value):
                value = localtime(value)
            final_value = value.strftime(DATE_TIME_FORMAT)
        elif isinstance(value, datetime.date):
            final_value = value.strftime(DATE_FORMAT)

        return final_value


class ActionsColumn(tables.Column):
    """Renders one link per button; ``buttons`` is a sequence of (name, label, url_factory)."""

    def __init__(self, buttons, *args, **kwargs):
        self.buttons = buttons
        kwargs.setdefault("orderable", False)
        kwargs.setdefault("empty_values", ())
        super().__init__(*args, **kwargs)

    def render(self, record):
        links = []
        for name, label, url_factory in self.buttons:
            try:
                url = url_factory(record)
            except NoReverseMatch:
                logger.debug("Skipping %s action, its url could not be reversed", name)
                continue
            links.append((url, name, label))
        return format_html_join(" ", '<a href="{}" class="grid-action grid-action-{}">{}</a>', links)


def get_validated_page_size(request, default=None):
    default = default or get_setting("PAGE_SIZE")
    options = get_setting("PAGE_SIZE_OPTIONS")
    try:
        page_size = int(request.GET.get("page_size", default))
        return page_size if page_size in options or page_size == default else default
    except (ValueError, TypeError):
        return default
