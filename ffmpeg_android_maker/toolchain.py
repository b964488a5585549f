import os
import platform
import sys
from enum import Enum
from typing import NamedTuple, Optional, Tuple

from .cli_logger import logger


class Abi(str, Enum):
    ARMEABI_V7A = "armeabi-v7a"
    ARM64_V8A = "arm64-v8a"
    X86 = "x86"
    X86_64 = "x86_64"

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, name):
        try:
            return cls(name)
        except ValueError:
            supported = ", ".join(abi.value for abi in cls)
            raise ValueError(f"Unsupported ABI '{name}'. Supported ABIs are: {supported}") from None


class ToolchainDescriptor(NamedTuple):
    binutils_machine: str
    cc_machine: Optional[str] = None
    target_os: str = "android"
    extra_cflags: Tuple[str, ...] = ()
    # may contain a {toolchain_path} placeholder
    extra_configure_flags: Tuple[str, ...] = ()

    @property
    def compiler_machine(self):
        return self.cc_machine or self.binutils_machine


# cc       armv7a-linux-androideabi16-clang   binutils arm-linux-androideabi-
# cc       aarch64-linux-android21-clang      binutils aarch64-linux-android-
# cc       i686-linux-android16-clang         binutils i686-linux-android-
# cc       x86_64-linux-android21-clang       binutils x86_64-linux-android-
TOOLCHAINS = {
    Abi.ARMEABI_V7A: ToolchainDescriptor("arm", cc_machine="armv7a", target_os="androideabi"),
    Abi.ARM64_V8A: ToolchainDescriptor("aarch64"),
    Abi.X86: ToolchainDescriptor(
        "i686",
        extra_cflags=("-mno-stackrealign",),
        extra_configure_flags=("--disable-asm",),
    ),
    Abi.X86_64: ToolchainDescriptor(
        "x86_64",
        extra_configure_flags=("--x86asmexe={toolchain_path}/bin/yasm",),
    ),
}


class Toolchain(NamedTuple):
    abi: Abi
    api_level: int
    toolchain_path: str
    sysroot: str
    arch: str
    cross_prefix: str
    cc: str
    extra_cflags: Tuple[str, ...]
    extra_configure_flags: Tuple[str, ...]

    @property
    def bin_dir(self):
        return os.path.join(self.toolchain_path, "bin")


def get_host_tag():
    """Return the NDK prebuilt directory name for the machine we run on."""
    if sys.platform == "darwin":
        return "darwin-x86_64"
    if sys.platform.startswith("linux"):
        return "linux-x86_64"
    if sys.platform in ("win32", "cygwin", "msys"):
        if platform.machine().lower() in ("amd64", "x86_64"):
            return "windows-x86_64"
        return "windows"
    raise ValueError(f"Unsupported host platform: {sys.platform}")


def resolve_ndk_home(settings):
    """NDK location from the config file, falling back to ANDROID_NDK_HOME."""
    ndk_home = settings.get("android", {}).get("ndk_home") or os.environ.get("ANDROID_NDK_HOME")
    return ndk_home or None


def resolve_toolchain(abi, api_level, ndk_home, host_tag) -> Toolchain:
    abi = Abi.parse(abi) if not isinstance(abi, Abi) else abi
    descriptor = TOOLCHAINS[abi]

    toolchain_path = f"{ndk_home}/toolchains/llvm/prebuilt/{host_tag}"
    bin_dir = f"{toolchain_path}/bin"
    cross_prefix = f"{bin_dir}/{descriptor.binutils_machine}-linux-{descriptor.target_os}-"
    cc = f"{bin_dir}/{descriptor.compiler_machine}-linux-{descriptor.target_os}{api_level}-clang"

    toolchain = Toolchain(
        abi=abi,
        api_level=int(api_level),
        toolchain_path=toolchain_path,
        sysroot=f"{toolchain_path}/sysroot",
        arch=descriptor.binutils_machine,
        cross_prefix=cross_prefix,
        cc=cc,
        extra_cflags=descriptor.extra_cflags,
        extra_configure_flags=tuple(
            flag.format(toolchain_path=toolchain_path) for flag in descriptor.extra_configure_flags
        ),
    )
    logger.debug(f"Toolchain for {abi} (API {api_level}): cc={cc}, cross-prefix={cross_prefix}")
    return toolchain
