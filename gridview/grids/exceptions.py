from django.core.exceptions import ImproperlyConfigured


class GridException(ImproperlyConfigured):
    """A grid view configuration that cannot be assembled."""


class ColumnNotRegistered(LookupError):
    pass
