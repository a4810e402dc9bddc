#!/usr/bin/env python3
"""
Command line entry point of the SiteMirror crawler.

Commands:
  crawl     Mirror a site starting at SEED into OUTPUT_DIR
  config    Show the resolved configuration

Global options:
  --config PATH       YAML/JSON config file (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only when omitted)
  --log-format FORMAT Logging format string

crawl options:
  --parallelism, -p N     Pages processed at once (default 1)
  --request-timeout SEC   Deadline of one HTTP request
  --crawl-timeout SEC     Deadline of the whole crawl

Other:
  --version, -v       Show the SiteMirror version

Example:
  site-mirror crawl https://example.com/ out -p 4
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_mirror import __version__
from site_mirror.config import load_config
from site_mirror.engine import start_crawl
from site_mirror.errors import MirrorError
from site_mirror.logger import DEFAULT_FORMAT, init_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _resolve_config(ctx, **overrides):
    try:
        return load_config(ctx.obj['config_path'], **overrides)
    except ValidationError as e:
        print_error(f'Invalid configuration: {e}')
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Error loading configuration: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMirror, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stdout only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SiteMirror command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('seed', required=False)
@click.argument('output_dir', required=False, type=click.Path(file_okay=False, path_type=Path))
@click.option(
    '--parallelism', '-p', 'parallelism',
    type=click.IntRange(min=1),
    default=None,
    help='Maximum number of pages processed at once [default: 1]'
)
@click.option(
    '--request-timeout', 'request_timeout',
    type=float,
    default=None,
    help='Deadline of a single HTTP request (seconds)'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Deadline of the whole crawl (seconds)'
)
@click.pass_context
def crawl(ctx, seed, output_dir, parallelism, request_timeout, crawl_timeout):
    """Mirror the site at SEED into OUTPUT_DIR."""
    cfg = _resolve_config(
        ctx,
        seed_url=seed,
        output_dir=output_dir,
        max_parallelism=parallelism,
        request_timeout=request_timeout,
    )
    click.echo(f'Mirroring {cfg.seed_url} into {cfg.output_dir}')
    try:
        if crawl_timeout:
            stats = asyncio.run(
                asyncio.wait_for(start_crawl(cfg), timeout=crawl_timeout)
            )
        else:
            stats = asyncio.run(start_crawl(cfg))
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {crawl_timeout} seconds')
    except KeyboardInterrupt:
        print_error('Crawl cancelled')
    except MirrorError as e:
        print_error(f'Crawl failed: {e}')

    click.echo(
        f'Done: {stats.pages} pages ({stats.fetched} fetched, {stats.from_cache} from disk, '
        f'{stats.written} written) in {stats.rounds} rounds'
    )


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('seed', required=False)
@click.argument('output_dir', required=False, type=click.Path(file_okay=False, path_type=Path))
@click.option('--parallelism', '-p', 'parallelism', type=click.IntRange(min=1), default=None)
@click.pass_context
def show_config(ctx, seed, output_dir, parallelism):
    """Show the resolved configuration as JSON."""
    cfg = _resolve_config(ctx, seed_url=seed, output_dir=output_dir, max_parallelism=parallelism)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
