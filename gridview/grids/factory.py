import logging

from django.db import models
from django.urls import NoReverseMatch, reverse

from gridview.grids.conf import get_setting
from gridview.grids.datasources import BaseDataSource, QueryDataSource
from gridview.grids.exceptions import GridException
from gridview.grids.filters import GridFilterSet
from gridview.grids.grid import GridView
from gridview.grids.registry import column_registry

logger = logging.getLogger(__name__)

# Configuration keys consumed by the factory itself rather than forwarded to the grid view.
RESERVED_KEYS = ("columns", "data_source", "column_options")


class GridViewFactory:
    """
    Assembles a ``GridView`` from a declarative configuration mapping.

    Usage:
        grid_view = GridViewFactory().prepare_grid_view(
            {
                "data_source": QueryDataSource(Book.objects.all()),
                "columns": [
                    {"attribute_name": "title"},
                    {"attribute_name": "published", "format": "datetime"},
                    {"service": "action_column", "buttons": ("view",)},
                ],
                "filter_entity": Book(),
            },
            request=request,
        )
    """

    def __init__(self, grid_view=None, registry=None, url_resolver=reverse, filterset_class=GridFilterSet):
        self.grid_view = grid_view if grid_view is not None else GridView()
        self.registry = registry if registry is not None else column_registry
        self.url_resolver = url_resolver
        self.filterset_class = filterset_class

    def prepare_grid_view(self, config, request=None):
        self.set_data_source(config)
        self.set_grid_parameters(config)

        columns = self.prepare_columns(config)
        if columns:
            self.init_columns(columns)

        self.set_filterset(request)
        return self.grid_view

    def set_data_source(self, config):
        data_source = config.get("data_source")
        if not data_source:
            raise GridException("Grid view data source should be specified.")

        if not isinstance(data_source, BaseDataSource):
            raise GridException(
                f"Data source should be instance of {BaseDataSource.__name__}. {type(data_source).__name__} given."
            )

        self.grid_view.set_data_source(data_source)
        return self

    def set_grid_parameters(self, config):
        self.grid_view.configure(**{name: value for name, value in config.items() if name not in RESERVED_KEYS})
        return self

    def prepare_columns(self, config):
        columns = config.get("columns")
        if columns:
            if not isinstance(columns, (list, tuple)):
                raise GridException(f"Grid view columns should be a list, {type(columns).__name__} given.")
            return [self._normalize_column(column) for column in columns]

        data_source = config["data_source"]
        columns = [{"attribute_name": name} for name in data_source.fetch_entity_fields()]

        if isinstance(data_source, QueryDataSource):
            columns.append({"service": get_setting("ACTION_COLUMN")})

        logger.debug("Derived %d columns from %s", len(columns), data_source.get_entity_short_name())
        return self.filter_columns(config, columns)

    @staticmethod
    def _normalize_column(column):
        if isinstance(column, str):
            return {"attribute_name": column}
        return dict(column)

    def filter_columns(self, config, columns):
        excluded = (config.get("column_options") or {}).get("exclude_attributes")
        if not excluded or not isinstance(config["data_source"], QueryDataSource):
            return columns
        excluded = {excluded} if isinstance(excluded, str) else set(excluded)

        kept = []
        for column in columns:
            if column.get("attribute_name") and column["attribute_name"] in excluded:
                logger.debug("Excluding column %s", column["attribute_name"])
                continue
            kept.append(column)
        return kept

    def init_columns(self, columns):
        for column_data in columns:
            column_data = dict(column_data)

            if "service" in column_data:
                column = self.registry.create(column_data.pop("service"))
            else:
                column = self.registry.create(get_setting("DEFAULT_COLUMN"))

            column.configure(**column_data)

            if column.is_visible():
                column.set_grid_view(self.grid_view)
                self.grid_view.add_column(column)

        return self

    def get_filter_url(self, request):
        if self.grid_view.filter_url:
            return self.grid_view.filter_url
        if request is None:
            return ""

        match = request.resolver_match
        if match is None:
            return request.get_full_path()

        try:
            url = self.url_resolver(match.view_name, args=match.args, kwargs=match.kwargs)
        except NoReverseMatch:
            logger.debug("Route %s cannot be reversed, using the request path", match.view_name)
            return request.get_full_path()
        query = request.GET.urlencode()
        return f"{url}?{query}" if query else url

    def set_filterset(self, request=None):
        entity = self.grid_view.filter_entity
        if not entity:
            return self

        if not isinstance(entity, models.Model):
            raise GridException("Entity instance should be specified to use filters.")

        data_source = self.grid_view.data_source
        prefix = data_source.get_entity_short_name()

        data = None
        if request is not None and any(key.startswith(f"{prefix}-") for key in request.GET):
            data = request.GET

        filterset = self.filterset_class(
            data,
            queryset=data_source.get_queryset(),
            entity=entity,
            request=request,
            prefix=prefix,
        )
        self.grid_view.set_filterset(filterset)

        for column in self.grid_view.columns:
            column.init_column_filter(filterset)

        filterset.form.helper.form_action = self.get_filter_url(request)

        if filterset.handle_request():
            logger.info("Applied %s filters to %s", prefix, type(entity).__name__)
        return self
