import click
from .. import environment
from ..cli_logger import logger
from ..decorators import handle_exceptions

@click.command()
@click.pass_context
@handle_exceptions
def doctor(ctx):
    """Check if all required tools are installed and the environment is set up correctly."""
    logger.info("Running environment check...")
    if environment.check_environment(ctx.obj["path"]):
        logger.success("Environment check completed successfully.")
    else:
        logger.error("Environment check found issues. Please review the warnings above.")
        ctx.exit(1)
