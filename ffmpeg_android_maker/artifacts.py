import glob
import os
import shutil
from .cli_logger import logger


def install_libs(workspace, abi):
    """Copy the built *.so files of ``abi`` into output/lib/<abi>."""
    lib_dir = os.path.join(workspace.abi_build_dir(abi), "lib")
    libs = sorted(glob.glob(os.path.join(lib_dir, "*.so")))
    if not libs:
        logger.error(f"Error: No shared libraries found in {lib_dir}")
        return []

    output_subdir = workspace.abi_output_dir(abi)
    os.makedirs(output_subdir, exist_ok=True)
    installed = []
    for lib in libs:
        installed.append(shutil.copy(lib, output_subdir))
    logger.success(f"  - Installed {len(installed)} libraries for {abi} into {output_subdir}")
    return installed


def install_headers(workspace):
    """Copy the header tree into output/include.

    Headers do not depend on the ABI for a given source tree and
    configuration, so the first build directory is used.
    """
    if not os.path.isdir(workspace.build_dir):
        logger.error(f"Error: Build directory {workspace.build_dir} does not exist.")
        return None
    abi_dirs = sorted(
        name for name in os.listdir(workspace.build_dir)
        if os.path.isdir(os.path.join(workspace.build_dir, name))
    )
    if not abi_dirs:
        logger.error(f"Error: Nothing was built in {workspace.build_dir}")
        return None

    include_dir = os.path.join(workspace.build_dir, abi_dirs[0], "include")
    if not os.path.isdir(include_dir):
        logger.error(f"Error: Header directory {include_dir} does not exist.")
        return None

    shutil.copytree(include_dir, workspace.include_output_dir, dirs_exist_ok=True)
    logger.success(f"  - Installed headers from {abi_dirs[0]} into {workspace.include_output_dir}")
    return workspace.include_output_dir
