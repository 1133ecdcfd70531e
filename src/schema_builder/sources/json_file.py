"""Model discovery from JSON descriptor files."""

import glob
import json
import logging
from pathlib import Path
from typing import Any

from ..base import BaseModelSource
from ..base.models import AssociationDescriptor, ColumnDescriptor, ModelDescriptor
from ..exceptions import MetadataUnavailableError

logger = logging.getLogger(__name__)


def model_from_dict(data: dict[str, Any]) -> ModelDescriptor:
    """Build a model descriptor from its JSON form.

    Example::

        {
            "name": "Article",
            "columns": [{"name": "id", "data_type": "integer", "is_primary_key": true}],
            "associations": [{"name": "comments", "kind": "has_many",
                              "target_plural_name": "comments"}]
        }
    """
    columns = [
        ColumnDescriptor(
            name=col["name"],
            data_type=col.get("data_type", col.get("type", "string")),
            is_primary_key=bool(col.get("is_primary_key", col.get("primary", False))),
            default_value=col.get("default_value", col.get("default")),
            max_length=col.get("max_length", col.get("limit")),
        )
        for col in data.get("columns", [])
    ]
    associations = [
        AssociationDescriptor(
            name=assoc["name"],
            kind=assoc["kind"],
            target_plural_name=assoc["target_plural_name"],
        )
        for assoc in data.get("associations", [])
    ]
    return ModelDescriptor(
        name=data["name"],
        columns=columns,
        associations=associations,
        table_name=data.get("table_name"),
    )


class JsonModelSource(BaseModelSource):
    """Reads model descriptors from the files matching ``model_path``."""

    def extract(self) -> list[ModelDescriptor]:
        pattern = str(self.config.resolved_model_path)
        files = sorted(glob.glob(pattern, recursive=True))
        if not files:
            logger.warning(f"No model files match {pattern}")

        models: list[ModelDescriptor] = []
        for file in files:
            models.extend(self._load_file(Path(file)))
        logger.info(f"Loaded {len(models)} models from {len(files)} files")
        return models

    def _load_file(self, path: Path) -> list[ModelDescriptor]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            entries = data if isinstance(data, list) else [data]
            return [model_from_dict(entry) for entry in entries]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise MetadataUnavailableError(f"Failed to load models from {path}: {e}") from e
