"""Configuration dataclasses for the schema builder."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError

# Fields that are never writable by clients
READONLY_FIELDS = ("id", "created_at", "updated_at")

# Controllers whose routes never become links (matched as substrings)
SKIPPED_CONTROLLERS = ("passwords", "sessions", "users", "admin")

# UI-only actions, dropped when a route allows a set of actions
SKIPPED_ACTIONS = ("edit", "new")

# History associations are never part of a schema
SKIPPED_ASSOCIATIONS = ("versions",)

SUPPORTED_SOURCES = ["json", "sqlite"]


@dataclass
class BuilderConfig:
    """Configuration for the schema builder."""

    # Application root; relative paths below resolve against it
    base_path: Path = field(default_factory=Path.cwd)

    # Model discovery
    source: str = "json"
    model_path: str = "models/**/*.json"
    database_path: Optional[str] = None

    # Route table
    routes_path: Optional[str] = "config/routes.json"

    # Output settings
    out_path: str = "json-schema"

    # Behavior
    dry_run: bool = False
    verbosity: int = 0

    def __post_init__(self) -> None:
        """Normalize configuration after initialization."""
        if isinstance(self.base_path, str):
            self.base_path = Path(self.base_path)
        self.source = self.source.lower()

    def _resolve(self, path: str) -> Path:
        resolved = Path(path)
        if not resolved.is_absolute():
            resolved = self.base_path / resolved
        return resolved

    @property
    def resolved_model_path(self) -> Path:
        """Glob pattern (or file) used to discover model descriptors."""
        return self._resolve(self.model_path)

    @property
    def resolved_out_path(self) -> Path:
        """Directory the schema files are written to."""
        return self._resolve(self.out_path)

    @property
    def resolved_routes_path(self) -> Optional[Path]:
        """Route table file, if one is configured."""
        if not self.routes_path:
            return None
        return self._resolve(self.routes_path)

    @property
    def resolved_database_path(self) -> Optional[Path]:
        if not self.database_path:
            return None
        return self._resolve(self.database_path)

    def validate(self) -> None:
        """Validate the configuration is complete and consistent."""
        if self.source not in SUPPORTED_SOURCES:
            raise ConfigurationError(
                f"Unknown model source: {self.source}. "
                f"Supported sources: {', '.join(SUPPORTED_SOURCES)}"
            )
        if self.source == "sqlite" and not self.database_path:
            raise ConfigurationError("Database path is required for the sqlite source")
        if not self.out_path:
            raise ConfigurationError("Output path is required")
