import pathlib
import sys

import click
from loguru import logger

from jointable.core.constants import DEFAULT_CONFIG_PATH


@click.group()
@click.pass_context
@click.option(
    "--dbconf",
    default=DEFAULT_CONFIG_PATH,
    type=click.Path(dir_okay=False, path_type=pathlib.Path),
    help="Specify a database config for connections",
)
@click.option("--logging", type=str, default="info")
@click.option("--logfile", type=click.Path(dir_okay=False), default=None)
def jointablecli(ctx, dbconf, logging, logfile):
    """
    Master command for all join table commandline interaction
    """
    ctx.ensure_object(dict)
    logger.remove()
    if logfile is None:
        logger.add(sys.stdout, level=logging.upper())
    else:
        logger.add(logfile, level=logging.upper())
        ctx.obj["logfile"] = pathlib.Path(logfile)
    logger.debug(f"Set logging to {logging}")

    ctx.obj["log_level"] = logging
    ctx.obj["dbconf"] = dbconf
