"""
Command-line interface for code generation.

Reads table definitions exported by a SurQL parser and writes generated
schema classes to stdout or a file.
"""

import argparse
import sys
from pathlib import Path
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.syntax import Syntax
from rich import box

from . import __version__
from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import GeneratorError, generate_code
from .core.schema import load_table_definitions
from .logging_config import get_logger, setup_logging
from .registry import (
    RegistryError,
    get_generator,
    get_target_info,
    list_supported_targets,
)
from .utils import TableLoaderError, load_json, load_json_from_stream

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich consoles; generated code is the only thing written to stdout
console = Console()
err_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="surql-codegen",
        description="Generate schema classes from SurrealDB table definitions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  surql-codegen tables.json
  surql-codegen tables.json --output schema.ts
  surql-codegen --stdin --target effect < tables.json
  surql-codegen --list-targets
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Table definitions JSON file")
    input_group.add_argument("--url", help="URL to fetch table definitions from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read table definitions from standard input"
    )

    # Core generation options
    parser.add_argument(
        "--target", "-t", default="effect", help="Target framework (default: effect)"
    )
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--config", help="Configuration file path (JSON)")
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't emit table descriptions as doc comments",
    )
    parser.add_argument(
        "--indent", type=int, metavar="N", help="Spaces used to indent fields"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show generation result metadata",
    )

    # Informational commands
    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-targets",
        action="store_true",
        help="List supported targets and exit",
    )
    info_group.add_argument(
        "--target-info",
        metavar="TARGET",
        help="Show detailed info about a target and exit",
    )
    info_group.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    # Logging
    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--log-level",
        default="WARNING",
        help="Console log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_group.add_argument("--log-file", help="Also write logs to this file")

    return parser


def main(argv=None) -> int:
    """Entry point for the surql-codegen command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    try:
        if args.list_targets:
            return _list_targets()

        if args.target_info:
            return _show_target_info(args.target_info)

        if not (args.file or args.url or args.stdin):
            err_console.print("[red]✗[/red] Input source required (file, --url, or --stdin)")
            return 1

        tables_data = _get_input_data(args)
        config = _build_config(args)

        return _generate_and_output(tables_data, args.target, config, args)

    except CLIError as e:
        logger.error("%s", e)
        err_console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _list_targets() -> int:
    """List supported targets with details."""
    table = Table(title="📋 Supported Targets", box=box.ROUNDED, title_style="bold cyan")

    table.add_column("Target", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for target in list_supported_targets():
        info = get_target_info(target)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {target}", info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] surql-codegen [dim]tables.json[/dim] --target [cyan]TARGET[/cyan]\n"
            "[bold]Info:[/bold] surql-codegen --target-info [cyan]TARGET[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _show_target_info(target: str) -> int:
    """Show detailed information about a specific target."""
    try:
        info = get_target_info(target)
    except RegistryError as e:
        console.print(f"[red]✗[/red] {e}")
        return 1

    info_text = f"""[bold]Target:[/bold] {info['name']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]Generator Class:[/bold] {info['class']}
[bold]Module:[/bold] {info['module']}"""

    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(
        Panel(info_text, title=f"🔧 {info['name'].title()} Generator", border_style="green")
    )

    config: GeneratorConfig = info["config"]
    config_table = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")
    config_table.add_row("Indent Size", str(config.indent_size))
    config_table.add_row("Add Comments", str(config.add_comments))
    for key, value in sorted(config.custom.items()):
        config_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(config_table)
    return 0


def _get_input_data(args: argparse.Namespace):
    """Get table definitions JSON from the selected source."""
    try:
        if args.file:
            return load_json(file_path=args.file)[1]
        elif args.url:
            return load_json(url=args.url)[1]
        else:
            return load_json_from_stream(sys.stdin)[1]
    except (TableLoaderError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments."""
    overrides = {}

    if args.no_comments:
        overrides["add_comments"] = False

    if args.indent is not None:
        overrides["indent_size"] = args.indent

    if args.output:
        overrides["output_file"] = args.output

    try:
        return load_config(args.target.lower(), overrides, args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def _generate_and_output(
    tables_data, target: str, config: GeneratorConfig, args: argparse.Namespace
) -> int:
    """Generate code and handle output with rich formatting."""
    try:
        generator = get_generator(target, config)
        tables = load_table_definitions(tables_data)
    except (RegistryError, GeneratorError) as e:
        raise CLIError(str(e)) from e

    result = generate_code(generator, tables)

    if not result.success:
        err_console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        return 1

    if config.output_file:
        output_path = Path(config.output_file)
        try:
            output_path.write_text(result.code, encoding="utf-8", newline="")
        except OSError as e:
            err_console.print(f"[red]✗ Failed to write to {output_path}:[/red] {e}")
            return 1
        console.print(
            f"[green]✓[/green] Generated {target} code saved to [cyan]{output_path}[/cyan]"
        )
        logger.info("Wrote %d bytes to %s", len(result.code), output_path)
    elif console.is_terminal:
        console.print(Syntax(result.code, "typescript", theme="monokai"))
    else:
        # Piped or redirected: the source must reach the file byte for byte
        sys.stdout.write(result.code)
        sys.stdout.flush()

    report = console if config.output_file else err_console

    if args.verbose and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")

        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))

        report.print()
        report.print(metadata_table)

    if result.warnings:
        report.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            report.print(f"  [yellow]•[/yellow] {warning}")
        report.print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
