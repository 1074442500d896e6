from django.conf import settings

DEFAULTS = {
    "DEFAULT_COLUMN": "column",
    "ACTION_COLUMN": "action_column",
    "COLUMNS": {},
    "PAGE_SIZE": 20,
    "PAGE_SIZE_OPTIONS": [20, 30, 50, 100],
}


def get_setting(name):
    """Read a grid view option from ``settings.GRIDVIEW``, falling back to the defaults."""
    return getattr(settings, "GRIDVIEW", {}).get(name, DEFAULTS[name])
