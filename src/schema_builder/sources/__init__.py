"""Model discovery sources."""

from typing import TYPE_CHECKING, Type

from ..exceptions import ConfigurationError

if TYPE_CHECKING:
    from ..base import BaseModelSource


def get_source(source: str) -> Type["BaseModelSource"]:
    """Get the model source class for a source name."""
    if source == "json":
        from .json_file import JsonModelSource
        return JsonModelSource

    elif source == "sqlite":
        from .sqlite import SQLiteModelSource
        return SQLiteModelSource

    else:
        raise ConfigurationError(
            f"Unknown model source: {source}. Supported sources: json, sqlite"
        )
