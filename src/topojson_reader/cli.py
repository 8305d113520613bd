"""
Command-line interface for TopoJSON Reader.
"""

import dataclasses
import json
import sys

import click

from topojson_reader import __version__
from topojson_reader.config import ConversionOptions, Settings
from topojson_reader.converter import TopologyConverter
from topojson_reader.validators import validate_topology


# Custom help class for better formatting
class CustomGroup(click.Group):
    """Custom group with better help formatting."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Write the help into the formatter with additional info."""
        self.format_usage(ctx, formatter)
        self.format_help_text(ctx, formatter)
        self.format_options(ctx, formatter)
        self.format_commands(ctx, formatter)

        formatter.write_paragraph()
        with formatter.section("Examples"):
            formatter.write_text("topo2geo convert world.topojson countries.geojson -o countries")
            formatter.write_text("topo2geo names world.topojson")
            formatter.write_text("topo2geo validate world.topojson --verbose")


@click.group(cls=CustomGroup)
@click.version_option(version=__version__, prog_name="topojson-reader")
@click.option(
    "--log-level",
    help="Logging level (DEBUG, INFO, WARNING, ERROR)  [default: WARNING]",
)
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """
    TopoJSON Reader - Convert TopoJSON topologies to GeoJSON.

    Decodes quantized, delta-encoded arcs and writes the objects of a
    Topology as GeoJSON FeatureCollections.

    \b
    Environment variables:
      TOPOJSON_READER_LOG_LEVEL  Default for --log-level
      TOPOJSON_READER_PRECISION  Default for convert --precision
    """
    try:
        settings = Settings.from_env()
    except ValueError as e:
        raise click.ClickException(str(e))

    if log_level is not None:
        try:
            settings = dataclasses.replace(settings, log_level=log_level)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--log-level")

    settings.configure_logging()
    ctx.obj = settings


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("output_file", type=click.Path(dir_okay=False))
@click.option("--object", "-o", "object_name", help="Name of the Topology object to convert")
@click.option("--pretty", "-p", is_flag=True, help="Pretty-print output JSON")
@click.option(
    "--precision",
    type=click.IntRange(min=0),
    help="Round output coordinates to this many decimal places  [default: no rounding]",
)
@click.pass_obj
def convert(
    settings: Settings,
    input_file: str,
    output_file: str,
    object_name: str | None,
    pretty: bool,
    precision: int | None,
) -> None:
    """
    Convert a TopoJSON object to a GeoJSON FeatureCollection.

    Without --object the first object of the Topology is converted.

    \b
    Examples:
      topo2geo convert input.topojson output.geojson
      topo2geo convert world.topojson land.geojson --object land --pretty
    """
    click.echo(f"\n🔄 Converting: {input_file}")

    if precision is None:
        precision = settings.precision
    options = ConversionOptions(object_name=object_name, precision=precision, pretty=pretty)

    try:
        converter = TopologyConverter(precision=options.precision)
        result = converter.convert(input_file, object_name=options.object_name)
        click.echo(f"   Object: {result.object_name}")

        if result.warnings:
            click.echo("\n⚠️  Warnings:")
            for warning in result.warnings:
                click.echo(f"   - {warning}")

        with open(output_file, "w", encoding="utf-8") as f:
            if options.pretty:
                json.dump(result.geojson, f, indent=2, ensure_ascii=False)
            else:
                json.dump(result.geojson, f, ensure_ascii=False)

        click.echo(f"\n✅ Converted {result.feature_count} features to {output_file}")

    except (ValueError, OSError) as e:
        raise click.ClickException(str(e))


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
def names(input_file: str) -> None:
    """
    List the object names of a Topology.

    \b
    Examples:
      topo2geo names world.topojson
    """
    try:
        topology = TopologyConverter().load(input_file)
    except (ValueError, OSError) as e:
        raise click.ClickException(str(e))

    for name in topology.list_names():
        click.echo(name)


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--verbose", "-v", is_flag=True, help="Show all warnings including info-level")
def validate(input_file: str, verbose: bool) -> None:
    """
    Validate a TopoJSON file without converting it.

    Checks that the document parses and that every arc reference of every
    object points at an existing arc.

    \b
    Examples:
      topo2geo validate world.topojson
      topo2geo validate world.topojson --verbose
    """
    click.echo(f"\n🔍 Validating: {input_file}\n")

    try:
        topology = TopologyConverter().load(input_file)
    except (ValueError, OSError) as e:
        click.echo(f"❌ Validation failed: {e}")
        sys.exit(1)

    validation = validate_topology(topology)

    click.echo(f"   Objects: {validation.object_count}")
    click.echo(f"   Arcs: {validation.arc_count}")
    click.echo(f"   Warnings: {validation.warning_count}")
    click.echo(f"   Errors: {validation.error_count}")

    by_type: dict[str, list] = {}
    for w in validation.warnings:
        if not verbose and w.severity == "info":
            continue
        by_type.setdefault(w.warning_type, []).append(w)

    if by_type:
        click.echo("\n⚠️  Issues found:")
        for wtype, warnings in sorted(by_type.items()):
            click.echo(f"\n   [{wtype}] ({len(warnings)} occurrences)")
            for w in warnings[:3]:
                loc = w.object_name or "global"
                if w.path:
                    loc = f"{loc}/{w.path}"
                click.echo(f"     • {loc}: {w.message}")
            if len(warnings) > 3:
                click.echo(f"     ... and {len(warnings) - 3} more")

    if validation.valid:
        click.echo("\n✅ Topology is valid")
    else:
        click.echo("\n❌ Topology has errors that will make conversion fail")
        sys.exit(1)


@main.command()
def info() -> None:
    """
    Show tool information and configuration help.

    \b
    Examples:
      topo2geo info
    """
    click.echo(f"""
TopoJSON Reader v{__version__}

A tool to convert TopoJSON topologies to GeoJSON.

CONFIGURATION
   TOPOJSON_READER_LOG_LEVEL   Logging level (default: WARNING)
   TOPOJSON_READER_PRECISION   Decimal places in output coordinates (default: no rounding)

COMMANDS
   topo2geo convert     Convert a Topology object to GeoJSON
   topo2geo names       List the objects of a Topology
   topo2geo validate    Check arc references and structure
""")


if __name__ == "__main__":
    main()
