from gridview.grids.exceptions import ColumnNotRegistered


class ColumnRegistry:
    """
    Maps column type names to column classes.

    Usage:
        registry = ColumnRegistry()

        @registry.register("money")
        class MoneyColumn(Column):
            ...

        column = registry.create("money")
    """

    def __init__(self):
        self._columns = {}

    def register(self, name, column_class=None):
        if column_class is None:

            def decorator(cls):
                self._columns[name] = cls
                return cls

            return decorator

        self._columns[name] = column_class
        return column_class

    def unregister(self, name):
        self._columns.pop(name, None)

    def get(self, name):
        try:
            return self._columns[name]
        except KeyError:
            raise ColumnNotRegistered(f"No column registered under the name {name!r}.")

    def create(self, name):
        return self.get(name)()

    def __contains__(self, name):
        return name in self._columns

    def __iter__(self):
        return iter(self._columns)


column_registry = ColumnRegistry()
