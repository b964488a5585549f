import click
from .commands import *


@click.group()
@click.option("--path", "-p", default=".", help="Base directory holding sources, build and output.")
@click.pass_context
def cli(ctx, path):
    """Build FFmpeg shared libraries for Android."""
    ctx.obj = {"path": path}

cli.add_command(build)
cli.add_command(clean)
cli.add_command(config)
cli.add_command(doctor)
cli.add_command(log)
cli.add_command(version)

if __name__ == '__main__':
    cli()
