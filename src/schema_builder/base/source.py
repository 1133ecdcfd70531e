"""Abstract base class for model discovery sources."""

import logging
from abc import ABC, abstractmethod

from ..config import BuilderConfig
from ..exceptions import MetadataUnavailableError
from .models import ModelDescriptor


class BaseModelSource(ABC):
    """Abstract base class for enumerating model descriptors."""

    def __init__(self, config: BuilderConfig):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def extract(self) -> list[ModelDescriptor]:
        """Extract all models, in discovery order."""
        pass

    def find(self, name: str) -> ModelDescriptor:
        """Get a single model by name or table name."""
        for model in self.extract():
            if name in (model.name, model.plural_table_name):
                return model
        raise MetadataUnavailableError(f"Model not found: {name}")
