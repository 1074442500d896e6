from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class GridsConfig(AppConfig):
    name = "gridview.grids"
    verbose_name = _("Grids")

    def ready(self):
        from django.utils.module_loading import import_string

        from gridview.grids import columns  # noqa: F401 registers the built-in column types
        from gridview.grids.conf import get_setting
        from gridview.grids.registry import column_registry

        for name, dotted_path in get_setting("COLUMNS").items():
            column_registry.register(name, import_string(dotted_path))
