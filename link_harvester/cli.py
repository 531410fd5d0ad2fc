# === FILE: link_harvester/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска LinkHarvester через командную строку.

Команды:
  harvest   Обойти все сайты из seed-файла и записать найденные ссылки
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --seeds PATH        Файл со списком URL (override seeds_file)
  --output-dir PATH   Каталог для результатов (override output_dir)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда harvest опции:
  --json PATH         Сохранить JSON-отчёт в файл
  --crawl-timeout SEC Лимит времени на обход одного сайта (секунд)
  --max-sites N       Сколько сайтов обходить одновременно

Ошибки обхода только логируются: код возврата harvest всегда 0.

Пример:
  link-harvester --seeds urls.txt --output-dir raw-results harvest --json report.json
"""
import asyncio
import sys
from pathlib import Path

import click

from link_harvester import __version__
from link_harvester.config import load_config
from link_harvester.engine import start_harvest
from link_harvester.errors import SeedListError
from link_harvester.logger import DEFAULT_FORMAT, configure, logger
from link_harvester.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LinkHarvester, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--seeds', '-s', 'seeds_file',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Файл со списком стартовых URL (override seeds_file)'
)
@click.option(
    '--output-dir', '-o', 'output_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог для файлов <site>.txt (override output_dir)'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, seeds_file, output_dir, log_level, log_file, log_format):
    """Группа команд LinkHarvester CLI."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    overrides = {}
    if seeds_file is not None:
        overrides['seeds_file'] = seeds_file
    if output_dir is not None:
        overrides['output_dir'] = output_dir
    if overrides:
        cfg = cfg.model_copy(update=overrides)
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('harvest', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Лимит времени на обход одного сайта (секунд)'
)
@click.option(
    '--max-sites', 'max_sites',
    type=click.IntRange(min=1),
    default=None,
    help='Сколько сайтов обходить одновременно'
)
@click.pass_context
def harvest(ctx, json_output, crawl_timeout, max_sites):
    """Обойти сайты из seed-файла и сохранить найденные ссылки."""
    cfg = ctx.obj['config']
    overrides = {}
    if crawl_timeout is not None:
        overrides['crawl_timeout'] = crawl_timeout
    if max_sites is not None:
        overrides['max_concurrent_sites'] = max_sites
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    try:
        report = asyncio.run(start_harvest(cfg))
    except SeedListError as e:
        logger.error('Error reading links from file: %s', e)
        return

    click.echo(
        f'Harvested {len(report.results)} site(s), '
        f'{len(report.failed_seeds)} skipped, {report.total_fetched} links visited'
    )

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            logger.error('Ошибка при сохранении JSON: %s', e)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
