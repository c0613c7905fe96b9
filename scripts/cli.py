import logging
import sys
import click
from pathlib import Path

from calculator import evaluate, parse_operations, greet as greet_name, OperationSyntaxError
from scripts.check_core import check_file
from semantic.diagnostics import Severity
from semantic.report import format_text, format_json

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


@click.group()
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default='ERROR', show_default=True, help='Logging level')
def cli(log_level: str):
    logging.basicConfig(level=log_level.upper(), format='[%(levelname)s] %(name)s: %(message)s',
                        stream=sys.stderr)


@cli.command()
@click.argument('file', type=click.Path(exists=True, path_type=Path))
@click.option('--format', 'fmt', type=click.Choice(['text', 'json']), default='text',
              show_default=True, help='Output format')
@click.option('--strict', is_flag=True, help='Treat warnings as failures')
def check(file: Path, fmt: str, strict: bool):
    """Classify diagnostics in a source fragment"""
    try:
        fragment, findings = check_file(file)
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if fmt == 'json':
        click.echo(format_json(findings, fragment.name))
    else:
        click.echo(format_text(findings, fragment.name))

    failing = {Severity.ERROR, Severity.WARNING} if strict else {Severity.ERROR}
    if any(f.severity in failing for f in findings):
        sys.exit(1)


@cli.command()
@click.argument('operations')
def calc(operations: str):
    """Evaluate a chain of operations, e.g. "+10 -3" """
    try:
        ops = parse_operations(operations)
    except OperationSyntaxError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Calculator result: {evaluate(ops):g}")


@cli.command()
@click.argument('name')
def greet(name: str):
    """Print a greeting"""
    click.echo(greet_name(name))


if __name__ == '__main__':
    cli()
