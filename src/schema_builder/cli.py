"""Click CLI interface for the schema builder."""

import json
import logging
import sys
from typing import Optional

import click

from . import SUPPORTED_SOURCES, __version__
from .config import BuilderConfig
from .exceptions import ConfigurationError, MetadataUnavailableError, SchemaBuilderError
from .generators import ModelSchemaGenerator, SchemaFilePersister
from .links import load_routes
from .sources import get_source


def setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level."""
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def source_options(f):
    """Options shared by every command that reads models and routes."""
    options = [
        click.option("-b", "--base-path", type=click.Path(file_okay=False), default=".",
                     envvar="SCHEMA_BUILDER_BASE_PATH",
                     help="Application root used to resolve relative paths"),
        click.option("-s", "--source", type=click.Choice(SUPPORTED_SOURCES, case_sensitive=False),
                     default="json", help="Where model metadata comes from"),
        click.option("-m", "--models", "model_path", default="models/**/*.json",
                     help="Glob of JSON model descriptor files"),
        click.option("-d", "--database", "database_path", envvar="SCHEMA_BUILDER_DATABASE",
                     help="SQLite database to introspect (sqlite source)"),
        click.option("-r", "--routes", "routes_path", default="config/routes.json",
                     help="JSON route table used to build links"),
        click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def build_config(**kwargs) -> BuilderConfig:
    config = BuilderConfig(**kwargs)
    config.validate()
    return config


def load_generator(config: BuilderConfig) -> ModelSchemaGenerator:
    """Create a generator over the configured route table."""
    routes_path = config.resolved_routes_path
    routes = []
    if routes_path and routes_path.exists():
        routes = load_routes(routes_path)
    else:
        logging.getLogger(__name__).info(f"No route table at {routes_path}, links are omitted")
    return ModelSchemaGenerator(routes)


@click.group()
@click.version_option(version=__version__)
def cli():
    """Schema Builder - Generate JSON Schema files from model and route metadata.

    Sources: JSON model descriptors, SQLite databases
    """
    pass


@cli.command()
@source_options
@click.option("-o", "--output", "out_path", default="json-schema",
              help="Directory the schema files are written to")
@click.option("--dry-run", is_flag=True, help="Preview without writing files")
def build(
    base_path: str,
    source: str,
    model_path: str,
    database_path: Optional[str],
    routes_path: str,
    verbose: int,
    out_path: str,
    dry_run: bool,
) -> None:
    """Write one JSON Schema file per model, keeping existing files."""
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        config = build_config(
            base_path=base_path,
            source=source,
            model_path=model_path,
            database_path=database_path,
            routes_path=routes_path,
            out_path=out_path,
            dry_run=dry_run,
            verbosity=verbose,
        )

        models = get_source(config.source)(config).extract()
        generator = load_generator(config)
        documents = generator.generate_all(models)

        persister = SchemaFilePersister(config.resolved_out_path, dry_run=config.dry_run)
        report = persister.persist(documents)

        if report.skipped:
            click.echo("== Existing Files ==")
            click.echo("Please rename them before they can be re-generated")
            for path in report.skipped:
                click.echo(str(path))
        if report.created:
            click.echo("== Would Create Files ==" if dry_run else "== Created Files ==")
            for path in report.created:
                click.echo(str(path))
        if report.failed:
            click.echo("== Failed Files ==", err=True)
            for path, message in report.failed:
                click.echo(f"{path}: {message}", err=True)
            sys.exit(1)

    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except MetadataUnavailableError as e:
        click.echo(f"Metadata unavailable: {e}", err=True)
        sys.exit(1)
    except SchemaBuilderError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)


@cli.command()
@source_options
@click.argument("model")
def show(
    base_path: str,
    source: str,
    model_path: str,
    database_path: Optional[str],
    routes_path: str,
    verbose: int,
    model: str,
) -> None:
    """Print the JSON Schema of a single MODEL (class or table name)."""
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        config = build_config(
            base_path=base_path,
            source=source,
            model_path=model_path,
            database_path=database_path,
            routes_path=routes_path,
            verbosity=verbose,
        )
        descriptor = get_source(config.source)(config).find(model)
        click.echo(load_generator(config).generate_one(descriptor).to_json())

    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except MetadataUnavailableError as e:
        click.echo(f"Metadata unavailable: {e}", err=True)
        sys.exit(1)
    except SchemaBuilderError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option("-b", "--base-path", type=click.Path(file_okay=False), default=".",
              envvar="SCHEMA_BUILDER_BASE_PATH",
              help="Application root used to resolve relative paths")
@click.option("-r", "--routes", "routes_path", default="config/routes.json",
              help="JSON route table used to build links")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def links(base_path: str, routes_path: str, verbose: int) -> None:
    """Print the links collected per resource from the route table."""
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        config = build_config(base_path=base_path, routes_path=routes_path)
        index = ModelSchemaGenerator(load_routes(config.resolved_routes_path)).link_index
        output = {name: [link.to_dict() for link in items] for name, items in index.items()}
        click.echo(json.dumps(output, indent=2))

    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except MetadataUnavailableError as e:
        click.echo(f"Metadata unavailable: {e}", err=True)
        sys.exit(1)
    except SchemaBuilderError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
