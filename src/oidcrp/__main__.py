import click

from oidcrp.cli.oidc import authorize_url, discover, token, userinfo


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """oidcrp CLI"""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(discover)
cli.add_command(authorize_url)
cli.add_command(token)
cli.add_command(userinfo)


if __name__ == "__main__":
    cli()
