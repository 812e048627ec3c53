from blogapi.configs.settings import (
    BLOG_STATES,
    DEFAULT_ERROR_MESSAGE,
    SORTABLE_FIELDS,
    Settings,
    settings,
)

__all__ = [
    "BLOG_STATES",
    "DEFAULT_ERROR_MESSAGE",
    "SORTABLE_FIELDS",
    "Settings",
    "settings",
]
