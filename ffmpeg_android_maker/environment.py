import os
import shutil
from . import config as config_module
from .cli_logger import logger
from .toolchain import get_host_tag, resolve_ndk_home

REQUIRED_TOOLS = ("git", "make")


def check_environment(path="."):
    """Check that everything a build needs is in place."""
    settings = config_module.get_settings(config_module.load_config(path=path))
    all_ok = True

    try:
        host_tag = get_host_tag()
        logger.info(f"Host tag: {host_tag}")
    except ValueError as e:
        logger.warning(str(e))
        host_tag = None
        all_ok = False

    ndk_home = resolve_ndk_home(settings)
    if not ndk_home:
        logger.warning("ANDROID_NDK_HOME environment variable is not set and 'android.ndk_home' is empty.")
        all_ok = False
    elif not os.path.isdir(ndk_home):
        logger.warning(f"Android NDK directory {ndk_home} does not exist.")
        all_ok = False
    elif host_tag:
        toolchain_path = os.path.join(ndk_home, "toolchains", "llvm", "prebuilt", host_tag)
        if os.path.isdir(toolchain_path):
            logger.info(f"NDK toolchain found at {toolchain_path}")
        else:
            logger.warning(f"NDK toolchain not found at {toolchain_path}. Is this a recent NDK?")
            all_ok = False

    for tool in REQUIRED_TOOLS:
        if shutil.which(tool) is None:
            logger.warning(f"'{tool}' was not found on PATH.")
            all_ok = False

    decoders_file = os.path.join(path, settings["ffmpeg"]["decoders_file"])
    if not os.path.isfile(decoders_file):
        logger.warning(f"Decoder list {decoders_file} not found.")
        all_ok = False

    return all_ok
