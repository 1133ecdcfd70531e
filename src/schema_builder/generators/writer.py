"""Persist schema documents as JSON files."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .. import inflector
from ..base.models import SchemaDocument
from ..exceptions import WriteFailure

logger = logging.getLogger(__name__)


@dataclass
class PersistReport:
    """Outcome of persisting a batch of documents."""

    created: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class SchemaFilePersister:
    """Writes one ``<underscored model name>.json`` file per document.

    Existing files are never overwritten; they are reported as skipped so
    they can be renamed before being generated again.
    """

    def __init__(self, output_dir: Path, dry_run: bool = False):
        self.output_dir = Path(output_dir)
        self.dry_run = dry_run

    def path_for(self, document: SchemaDocument) -> Path:
        return self.output_dir / f"{inflector.underscore(document.title)}.json"

    def persist(self, documents: Iterable[SchemaDocument]) -> PersistReport:
        report = PersistReport()
        for document in documents:
            path = self.path_for(document)
            try:
                created = self.write_one(document)
            except WriteFailure as e:
                logger.error(f"Failed to write {path}: {e.message}")
                report.failed.append((path, e.message))
                continue
            if created:
                report.created.append(path)
            else:
                report.skipped.append(path)
        return report

    def write_one(self, document: SchemaDocument) -> bool:
        """Write a document unless its file exists.

        Returns:
            True if the file was (or in dry run would be) created, False if
            it already existed.

        Raises:
            WriteFailure: the file could not be written.
        """
        path = self.path_for(document)
        try:
            text = document.to_json()
        except (TypeError, ValueError) as e:
            raise WriteFailure(path, f"cannot serialize document: {e}") from e

        if self.dry_run:
            if path.exists():
                return False
            logger.info(f"[DRY RUN] Would write: {path}")
            return True

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteFailure(path, str(e)) from e

        try:
            # exclusive create, fails if the file exists
            f = path.open("x", encoding="utf-8")
        except FileExistsError:
            logger.debug(f"Exists, skipping: {path}")
            return False
        except OSError as e:
            raise WriteFailure(path, str(e)) from e

        try:
            with f:
                f.write(text)
        except OSError as e:
            # never leave a partial file behind
            path.unlink(missing_ok=True)
            raise WriteFailure(path, str(e)) from e

        logger.debug(f"Wrote: {path}")
        return True
