import glob
import os
from .cli_logger import logger
from .utils import run_shell_command, log_command_failure

MARKERS = ("TEXTREL", "File")


def _readelf(toolchain):
    prefixed = f"{toolchain.cross_prefix}readelf"
    if os.path.exists(prefixed):
        return prefixed
    # Newer NDKs ship only the LLVM binutils
    return os.path.join(toolchain.bin_dir, "llvm-readelf")


def collect_text_relocations(toolchain, lib_dir, report_path):
    """Append the text relocation status of every shared object to the report.

    A report without any TEXTREL line means every library is position
    independent.
    """
    libs = sorted(glob.glob(os.path.join(lib_dir, "*.so")))
    if not libs:
        logger.warning(f"No shared libraries found in {lib_dir}, skipping text relocation check.")
        return False

    result = run_shell_command([_readelf(toolchain), "--dynamic", *libs])
    if not result.ok:
        log_command_failure(f"readelf for {toolchain.abi}", result)
        return False

    lines = [line for line in result.stdout.splitlines() if any(marker in line for marker in MARKERS)]
    with open(report_path, "a") as f:
        for line in lines:
            f.write(line + "\n")

    if any("TEXTREL" in line for line in lines):
        logger.warning(f"  - Text relocations found in {toolchain.abi} libraries, see {report_path}")
    else:
        logger.info(f"  - No text relocations in {toolchain.abi} libraries.")
    return True
