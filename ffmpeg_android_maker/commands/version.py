import click
import importlib.metadata
from ..cli_logger import logger

@click.command()
def version():
    """Print the version of ffmpeg-android-maker."""
    try:
        ver = importlib.metadata.version("ffmpeg-android-maker")
        logger.info(f"ffmpeg-android-maker version {ver}")
    except importlib.metadata.PackageNotFoundError:
        logger.error("Error: Could not determine the version of ffmpeg-android-maker. Is it installed correctly?")
