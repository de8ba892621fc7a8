# === FILE: site_mirror/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера SiteMirror через командную строку.

Опции:
  --start, -s URL     Стартовый URL (он же префикс области обхода)
  --dir, -d PATH      Каталог для сохранения страниц
  --state PATH        Файл состояния (default: state.json)
  --config, -c PATH   YAML/JSON-конфиг; флаги CLI имеют приоритет
  --scope MODE        origin | link
  --dedup MODE        raw | normalized
  --on-exists MODE    abort | skip
  --on-error MODE     abort | continue
  --timeout SEC       Таймаут на один запрос
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --version, -v       Показать версию SiteMirror

Пример:
  site-mirror --start https://example.com/docs/ --dir mirror
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_mirror import __version__
from site_mirror.config import load_config
from site_mirror.errors import SiteMirrorError
from site_mirror.logger import init_logging
from site_mirror.scanner import start_crawl

CONTEXT_SETTINGS = dict(help_option_names=["--help"])
USAGE_HINT = "use command --start <url> --dir <directory>"


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMirror, version %(version)s')
@click.option('--start', '-s', 'start_url', default=None, help='Стартовый URL')
@click.option(
    '--dir', '-d', 'dest_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог назначения'
)
@click.option(
    '--state', 'state_file',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Файл состояния (default: state.json)'
)
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option('--scope', type=click.Choice(['origin', 'link']), default=None,
              help='Проверять префикс у страницы-источника или у ссылки')
@click.option('--dedup', type=click.Choice(['raw', 'normalized']), default=None,
              help='Сравнивать ссылки как есть или после нормализации')
@click.option('--on-exists', 'exists_policy', type=click.Choice(['abort', 'skip']), default=None,
              help='Поведение, если файл страницы уже существует')
@click.option('--on-error', 'error_policy', type=click.Choice(['abort', 'continue']), default=None,
              help='Прерывать весь обход или продолжать соседние ветки')
@click.option('--timeout', type=float, default=None, help='Таймаут на один запрос (секунд)')
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
def cli(start_url, dest_dir, state_file, config_path, scope, dedup, exists_policy,
        error_policy, timeout, log_level, log_file):
    """Зеркалирует .html страницы сайта в локальный каталог."""
    log = init_logging(level=log_level, log_file=str(log_file) if log_file else None)
    try:
        cfg = load_config(
            config_path,
            start_url=start_url,
            dest_dir=dest_dir,
            state_file=state_file,
            scope=scope,
            dedup=dedup,
            exists_policy=exists_policy,
            error_policy=error_policy,
            timeout=timeout,
        )
    except ValidationError as e:
        missing = {err['loc'][0] for err in e.errors() if err['type'] == 'missing'}
        if missing & {'start_url', 'dest_dir'}:
            raise click.UsageError(USAGE_HINT)
        print_error(f'Ошибка загрузки конфигурации: {e}')
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    try:
        report = asyncio.run(start_crawl(cfg))
    except SiteMirrorError as e:
        log.error("Crawl aborted: %s", e)
        print_error(f'Ошибка при обходе: {e}')

    click.echo('Visited pages:')
    for url in report.state:
        click.echo(url)
    if report.failed:
        click.secho(f'Failed pages: {len(report.failed)}', fg='yellow', err=True)
        for url, reason in report.failed.items():
            click.echo(f'{url}: {reason}', err=True)


if __name__ == "__main__":
    cli()
