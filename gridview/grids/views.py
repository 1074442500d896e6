import copy

from django.core.exceptions import ImproperlyConfigured
from django.views.generic import TemplateView

from gridview.grids.factory import GridViewFactory


class GridViewMixin:
    """
    Usage:
        - Set grid_config to a grid configuration, or override get_grid_config()
        - The prepared grid view is available as get_grid_view() and in the template
          context as grid_view, along with its table and filter_form
    """

    grid_config = None
    grid_factory_class = GridViewFactory
    context_grid_name = "grid_view"

    def get_grid_config(self):
        if self.grid_config is None:
            raise ImproperlyConfigured(
                f"{self.__class__.__name__} is missing a grid_config. "
                f"Define {self.__class__.__name__}.grid_config or override get_grid_config()."
            )
        # class-level configs hold filter entities which get populated per request
        return copy.deepcopy(self.grid_config)

    def get_grid_factory(self):
        return self.grid_factory_class()

    def get_grid_view(self):
        if not hasattr(self, "_grid_view"):
            self._grid_view = self.get_grid_factory().prepare_grid_view(self.get_grid_config(), request=self.request)
        return self._grid_view

    def get_grid_context(self):
        grid_view = self.get_grid_view()
        return {
            self.context_grid_name: grid_view,
            "table": grid_view.get_table(self.request),
            "filter_form": grid_view.filter_form,
        }

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update(self.get_grid_context())
        return context


class GridListView(GridViewMixin, TemplateView):
    template_name = "grids/grid.html"
