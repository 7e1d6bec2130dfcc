import click
from loguru import logger
from tabulate import tabulate

from jointable.cli.base import jointablecli
from jointable.core.connection import SessionConnection, engine_from_config
from jointable.io.pipeline import db_scope


def join_table_summary(connection, table_name):
    """
    Summarize a join table: its reflected columns, primary key and whether
    loading through it without an explicit select would be ambiguous.
    """
    columns = connection.columns(table_name)
    primary_key = (
        connection.primary_key(table_name)
        if connection.supports_primary_key()
        else None
    )
    return {
        "name": table_name,
        "columns": columns,
        "primary_key": primary_key,
        "ambiguous": len(columns) > 2,
    }


@jointablecli.command()
@click.pass_context
@click.argument("tables", nargs=-1, required=True)
@click.option("--table-fmt", type=str, default="simple")
def describe(ctx, tables, table_fmt):
    """
    Describe the given join tables.
    """
    dbconf = ctx.obj["dbconf"]
    if not dbconf.exists():
        raise click.BadParameter(
            f"{dbconf} does not exist", param_hint="--dbconf"
        )
    engine = engine_from_config(dbconf)

    @db_scope(bind=engine, application_name="describe")
    def summarize(session, table_name):
        return join_table_summary(SessionConnection(session), table_name)

    for table_name in tables:
        logger.debug(f"Describing {table_name}")
        summary = summarize(table_name)
        rows = [
            (column.name, str(column.type), column.nullable)
            for column in summary["columns"]
        ]
        click.echo(f"{table_name}:")
        click.echo(
            tabulate(
                rows,
                headers=("column", "type", "nullable"),
                tablefmt=table_fmt,
            )
        )
        primary_key = summary["primary_key"]
        click.echo(
            "primary key: "
            + (", ".join(primary_key) if primary_key else "none")
        )
        click.echo(
            "ambiguous star-select: "
            + ("yes" if summary["ambiguous"] else "no")
        )
    engine.dispose()
