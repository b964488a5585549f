import click
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ..workspace import Workspace

@click.command()
@click.option("--sources", is_flag=True, help="Also remove the cached FFmpeg sources.")
@click.pass_context
@handle_exceptions
def clean(ctx, sources):
    """Remove build, output and stats directories."""
    logger.info("Cleaning build artifacts...")
    removed = Workspace(ctx.obj["path"]).clean(include_sources=sources)

    if removed:
        logger.success(f"Cleaning complete. Removed {len(removed)} items.")
    else:
        logger.info("Project is already clean.")
