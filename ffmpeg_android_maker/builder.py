import os
from typing import NamedTuple, Optional, Tuple

from .cli_logger import logger
from .config import get_settings
from .workspace import Workspace
from .toolchain import Abi, get_host_tag, resolve_ndk_home, resolve_toolchain
from .sources import ensure_sources
from .configure import read_decoders, assemble
from .stats import collect_text_relocations
from .artifacts import install_libs, install_headers


class BuildResult(NamedTuple):
    success: bool
    source_dir: Optional[str] = None
    completed_abis: Tuple[Abi, ...] = ()


def get_targets(settings, abis=None):
    """Return the (Abi, api_level) pairs to build, in configured order.

    ``abis`` restricts the configured targets to the given ABI names.
    """
    targets = [
        (Abi.parse(target["abi"]), int(target["api_level"]))
        for target in settings["android"]["targets"]
    ]
    if abis:
        wanted = {Abi.parse(name) for name in abis}
        targets = [target for target in targets if target[0] in wanted]
    return targets


def build_ffmpeg(conf, kind=None, ref=None, base_dir=".", abis=None, jobs=None, verbose=False):
    """Fetch FFmpeg sources and build them for every configured Android ABI.

    ABIs are built one after another. The first failing step stops the run;
    libraries of ABIs finished before it stay in the output directory.
    """
    settings = get_settings(conf)
    jobs = jobs or settings["build"]["jobs"]

    # No incremental builds: whatever an earlier run produced is gone, even
    # if this run fails right away.
    workspace = Workspace(base_dir)
    workspace.prepare()

    try:
        targets = get_targets(settings, abis)
        host_tag = get_host_tag()
    except KeyError as e:
        logger.error(f"Error: Every entry of 'android.targets' needs 'abi' and 'api_level', missing {e}.")
        return BuildResult(False)
    except ValueError as e:
        logger.error(f"Error: {e}")
        return BuildResult(False)
    if not targets:
        logger.error("Error: No targets selected. Check 'android.targets' and the --abi options.")
        return BuildResult(False)

    ndk_home = resolve_ndk_home(settings)
    if not ndk_home:
        logger.error("Error: Android NDK not found. Set ANDROID_NDK_HOME or 'android.ndk_home' in the config.")
        return BuildResult(False)
    logger.info(f"Using Android NDK at {ndk_home} ({host_tag})")

    source_dir = ensure_sources(kind, ref, workspace, settings)
    if not source_dir:
        logger.error("Error: FFmpeg sources are not available. Aborting.")
        return BuildResult(False)

    decoders_file = os.path.join(workspace.base_dir, settings["ffmpeg"]["decoders_file"])
    try:
        decoders = read_decoders(decoders_file)
    except IOError as e:
        logger.error(f"Error reading decoder list {decoders_file}: {e}")
        return BuildResult(False, source_dir)
    logger.info(f"Enabling {len(decoders)} decoders: {', '.join(decoders)}")

    completed = []
    for abi, api_level in targets:
        logger.info(f"Building FFmpeg for {abi} (API {api_level})...")
        toolchain = resolve_toolchain(abi, api_level, ndk_home, host_tag)
        prefix = workspace.abi_build_dir(abi)

        if not assemble(toolchain, source_dir, prefix, decoders, jobs=jobs, verbose=verbose):
            logger.error(f"Build for {abi} failed. Aborting remaining ABIs.")
            return BuildResult(False, source_dir, tuple(completed))

        if not collect_text_relocations(toolchain, os.path.join(prefix, "lib"), workspace.text_relocations_report):
            logger.warning(f"Could not collect text relocation stats for {abi}.")

        if not install_libs(workspace, abi):
            logger.error(f"Installing libraries for {abi} failed. Aborting remaining ABIs.")
            return BuildResult(False, source_dir, tuple(completed))
        completed.append(abi)

    if install_headers(workspace) is None:
        return BuildResult(False, source_dir, tuple(completed))

    logger.success(f"FFmpeg built for {', '.join(str(abi) for abi in completed)}. Output: {workspace.output_dir}")
    return BuildResult(True, source_dir, tuple(completed))
