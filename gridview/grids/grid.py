import logging

from django_tables2 import RequestConfig

from gridview.grids.conf import get_setting
from gridview.grids.tables import GridTable, get_validated_page_size

logger = logging.getLogger(__name__)


class GridView:
    """
    A table of columns bound to a data source, with an optional filter form.

    Usually populated by ``GridViewFactory.prepare_grid_view`` and then rendered with
    ``get_table`` or the ``render_grid`` template tag.
    """

    options = (
        "filter_entity",
        "filter_url",
        "page_size",
        "empty_text",
        "attrs",
        "orderable",
        "full_width",
        "template_name",
        "prefix",
    )

    table_class = GridTable

    def __init__(self):
        self.columns = []
        self.data_source = None
        self.filterset = None
        self.filter_entity = None
        self.filter_url = None
        self.page_size = None
        self.empty_text = None
        self.attrs = None
        self.orderable = None
        self.full_width = False
        self.template_name = None
        self.prefix = None

    def configure(self, **options):
        for name, value in options.items():
            if name not in self.options:
                logger.debug("Ignoring unknown grid view option %r", name)
                continue
            setattr(self, name, value)
        return self

    def set_data_source(self, data_source):
        self.data_source = data_source

    def add_column(self, column):
        self.columns.append(column)

    def set_filterset(self, filterset):
        self.filterset = filterset

    @property
    def filter_form(self):
        return self.filterset.form if self.filterset is not None else None

    def get_data(self):
        if self.filterset is not None:
            return self.data_source.filter_data(self.filterset)
        return self.data_source.get_data()

    def get_table_columns(self):
        table_columns = []
        seen = set()
        for index, column in enumerate(self.columns):
            name = column.name or f"column_{index}"
            if name in seen:
                name = f"{name}_{index}"
            seen.add(name)
            table_columns.append((name, column.as_table_column()))
        return table_columns

    def get_table(self, request=None):
        kwargs = {
            "extra_columns": self.get_table_columns(),
            "full_width": self.full_width,
        }
        for name in ("empty_text", "attrs", "orderable", "template_name", "prefix"):
            value = getattr(self, name)
            if value is not None:
                kwargs[name] = value

        table = self.table_class(self.get_data(), **kwargs)
        if request is not None:
            page_size = get_validated_page_size(request, self.page_size or get_setting("PAGE_SIZE"))
            RequestConfig(request, paginate={"per_page": page_size}).configure(table)
        return table
