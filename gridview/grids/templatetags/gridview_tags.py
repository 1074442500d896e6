from django import template

register = template.Library()


@register.inclusion_tag("grids/grid.html", takes_context=True)
def render_grid(context, grid_view):
    """
    Renders the filter form and table of a prepared grid view.
    :param grid_view: A GridView returned by GridViewFactory.prepare_grid_view.
    """
    request = context.get("request")
    return {
        "request": request,
        "grid_view": grid_view,
        "table": grid_view.get_table(request),
        "filter_form": grid_view.filter_form,
    }
