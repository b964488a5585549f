import click
from .. import config as config_module
from .. import builder
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ..toolchain import Abi

@click.command()
@click.pass_context
@click.argument("kind", required=False)
@click.argument("ref", required=False)
@click.option("--abi", "abis", multiple=True, type=click.Choice([abi.value for abi in Abi]),
              help="Build only this ABI (repeatable). Defaults to every configured target.")
@click.option("--jobs", "-j", type=int, default=None, help="Parallel make jobs (default: 8).")
@click.option("--verbose", "-v", is_flag=True, help="Stream configure and make output.")
@handle_exceptions
def build(ctx, kind, ref, abis, jobs, verbose):
    """Fetch FFmpeg and build it for the Android ABIs.

    KIND is 'tag' or 'branch' and REF the release version or branch name.
    Without them the fallback release version is built.
    """
    conf = config_module.load_config(path=ctx.obj["path"])
    result = builder.build_ffmpeg(
        conf,
        kind=kind,
        ref=ref,
        base_dir=ctx.obj["path"],
        abis=list(abis),
        jobs=jobs,
        verbose=verbose,
    )

    if result.success:
        logger.success("Build completed successfully.")
        return True

    if result.completed_abis:
        logger.info(f"Libraries for {', '.join(str(abi) for abi in result.completed_abis)} were kept in the output directory.")
    logger.error("Build failed. Please check the logs for details.")
    ctx.exit(1)
