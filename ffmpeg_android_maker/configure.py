from .cli_logger import logger
from .utils import run_shell_command, log_command_failure

DEFAULT_JOBS = 8

BASE_CFLAGS = ("-O3", "-fPIC")

# Produces a minimal, decode-only set of shared libraries. Decoders are
# disabled as a group and re-enabled one by one from the allow-list.
CONFIGURE_SWITCHES = (
    "--enable-shared",
    "--disable-static",
    "--disable-doc",
    "--disable-runtime-cpudetect",
    "--disable-debug",
    "--disable-programs",
    "--disable-muxers",
    "--disable-encoders",
    "--disable-decoders",
)

DISABLED_SUBSYSTEMS = (
    "--disable-bsfs",
    "--disable-pthreads",
    "--disable-avdevice",
    "--disable-network",
    "--disable-postproc",
    "--disable-swresample",
    "--disable-avfilter",
)


def read_decoders(path):
    """Read the decoder allow-list, one name per line, blank lines ignored."""
    with open(path, "r") as f:
        return [line.strip() for line in f if line.strip()]


def decoder_flags(decoders):
    return [f"--enable-decoder={name}" for name in decoders]


def configure_command(toolchain, prefix, decoders):
    cflags = " ".join(BASE_CFLAGS + tuple(toolchain.extra_cflags))
    return [
        "./configure",
        f"--prefix={prefix}",
        "--enable-cross-compile",
        f"--cross-prefix={toolchain.cross_prefix}",
        f"--arch={toolchain.arch}",
        "--target-os=android",
        f"--cc={toolchain.cc}",
        f"--extra-cflags={cflags}",
        f"--sysroot={toolchain.sysroot}",
        *CONFIGURE_SWITCHES,
        *decoder_flags(decoders),
        *DISABLED_SUBSYSTEMS,
        *toolchain.extra_configure_flags,
    ]


def assemble(toolchain, source_dir, prefix, decoders, jobs=DEFAULT_JOBS, verbose=False):
    """Configure, compile and install FFmpeg for one ABI into ``prefix``.

    Stops at the first failing step. Returns True when everything succeeded.
    """
    logger.info(f"  - Assembling FFmpeg for {toolchain.abi} (API {toolchain.api_level})...")

    steps = [
        ("configure", configure_command(toolchain, prefix, decoders)),
        ("make clean", ["make", "clean"]),
        ("make", ["make", f"-j{jobs}"]),
        ("make install", ["make", "install"]),
    ]
    for description, command in steps:
        logger.info(f"  - Running {description}: {' '.join(command)}")
        result = run_shell_command(command, stream_output=verbose, cwd=source_dir)
        if not result.ok:
            log_command_failure(f"{description} for {toolchain.abi}", result)
            return False

    logger.success(f"  - FFmpeg assembled and installed for {toolchain.abi}.")
    return True
