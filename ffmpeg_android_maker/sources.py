import os
from .cli_logger import logger
from .utils import download_and_extract, run_shell_command, log_command_failure

TAG = "tag"
BRANCH = "branch"


def ensure_sources_tag(version, workspace, settings):
    """Make sure sources of the FFmpeg release ``version`` are present.

    The same version always resolves to the same source tree, so an existing
    directory is reused without touching the network.
    """
    source_dir = os.path.join(workspace.sources_dir, f"ffmpeg-{version}")
    if os.path.isdir(source_dir):
        logger.info(f"  - Sources of FFmpeg {version} already present at {source_dir}")
        return source_dir

    file_name = f"ffmpeg-{version}.tar.bz2"
    url = f"{settings['ffmpeg']['release_url'].rstrip('/')}/{file_name}"
    logger.info(f"  - Downloading {url}")
    if download_and_extract(url, workspace.sources_dir, file_name) is None:
        logger.error(f"Failed to fetch sources of FFmpeg {version}.")
        return None

    if not os.path.isdir(source_dir):
        logger.error(f"Archive {file_name} did not contain the expected directory {source_dir}")
        return None
    return source_dir


def ensure_sources_branch(branch, workspace, settings):
    """Clone (once) and update the FFmpeg git repository to ``branch``.

    The branch is pulled on every call, so the resulting tree may differ from
    one run to the next. The commit being built is logged.
    """
    git_directory = settings["ffmpeg"]["git_directory"]
    source_dir = os.path.join(workspace.sources_dir, git_directory)

    if not os.path.isdir(source_dir):
        git_url = settings["ffmpeg"]["git_url"]
        logger.info(f"  - Cloning {git_url}")
        result = run_shell_command(["git", "clone", git_url, git_directory], cwd=workspace.sources_dir)
        if not result.ok:
            log_command_failure("git clone", result)
            return None

    for command in (["git", "checkout", branch], ["git", "pull", "origin", branch]):
        result = run_shell_command(command, cwd=source_dir)
        if not result.ok:
            log_command_failure(" ".join(command), result)
            return None

    result = run_shell_command(["git", "rev-parse", "HEAD"], cwd=source_dir)
    if not result.ok:
        log_command_failure("git rev-parse", result)
        return None
    logger.info(f"Commit to build: {result.stdout.strip()}")
    return source_dir


def ensure_sources(kind, ref, workspace, settings):
    """Resolve the FFmpeg source tree to build. Returns its path or None."""
    if kind in (TAG, BRANCH) and not ref:
        logger.error(f"Error: '{kind}' requires a {'version' if kind == TAG else 'branch name'}.")
        return None

    if kind == TAG:
        logger.info(f"Using FFmpeg {ref}")
        return ensure_sources_tag(ref, workspace, settings)
    if kind == BRANCH:
        logger.info(f"Using FFmpeg git repository and its branch {ref}")
        return ensure_sources_branch(ref, workspace, settings)

    version = settings["ffmpeg"]["fallback_version"]
    if kind:
        logger.warning(f"Unknown source type '{kind}', falling back to FFmpeg {version}")
    logger.info(f"Using FFmpeg {version}")
    return ensure_sources_tag(version, workspace, settings)
