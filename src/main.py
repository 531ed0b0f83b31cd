"""Main entry point for the terminal to-do list.

Usage: todo PATH
"""
import logging
from pathlib import Path
from typing import Optional

import click

from cli import CLI
from config import get_settings
from logging_setup import setup_logging
from storage import TaskList

logger = logging.getLogger(__name__)


@click.command(name='todo')
@click.argument('path', required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def main(ctx: click.Context, path: Optional[Path]) -> None:
    """Cycle the tasks stored in PATH through todo, doing, done and rejected.

    Arrow keys: Up/Down select, Right cycles the state, Left saves. q quits.
    """
    if path is None:
        click.echo(ctx.get_usage())
        return

    settings = get_settings()
    setup_logging(settings.log_file, settings.log_level)

    task_list = TaskList()
    try:
        task_list.load(path)
        if settings.seed_samples and not task_list.tasks:
            task_list.seed_samples()
            task_list.save(path)
    except OSError as exc:
        logger.error("Could not open %s: %s", path, exc)
        raise click.ClickException(f'Could not open {path}: {exc}')
    logger.info("Loaded %s (%s)", path, task_list or 'empty')

    cli = CLI(task_list, path, color=settings.color, alt_screen=settings.alt_screen)
    try:
        cli.run()
    except OSError as exc:
        logger.error("Could not save %s: %s", path, exc)
        raise click.ClickException(f'Could not save {path}: {exc}')


if __name__ == "__main__":
    main()
