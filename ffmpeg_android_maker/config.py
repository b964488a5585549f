import copy
import toml
import os
from .cli_logger import logger

CONFIG_FILE = "ffmpeg-android-maker.toml"

DEFAULT_CONFIG = {
    "ffmpeg": {
        "fallback_version": "4.1.4",
        "release_url": "https://www.ffmpeg.org/releases",
        "git_url": "https://git.ffmpeg.org/ffmpeg.git",
        "git_directory": "ffmpeg-git",
        "decoders_file": "video_decoders_list.txt",
    },
    "android": {
        # Empty means "read ANDROID_NDK_HOME from the environment"
        "ndk_home": "",
        "targets": [
            {"abi": "armeabi-v7a", "api_level": 16},
            {"abi": "arm64-v8a", "api_level": 21},
            {"abi": "x86", "api_level": 16},
            {"abi": "x86_64", "api_level": 21},
        ],
    },
    "build": {
        "jobs": 8,
    },
}

def load_config(path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    logger.info(f"Loading configuration from {config_path}")
    if os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                return toml.load(f)
        except toml.TomlDecodeError as e:
            logger.error(f"Error decoding TOML file at {config_path}: {e}")
            logger.info("Please check the file's format for syntax errors.")
        except IOError as e:
            logger.error(f"Error reading configuration file at {config_path}: {e}")
            logger.info("Please check file permissions.")
    return {}

def save_config(config, path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    logger.info(f"Saving configuration to {config_path}")
    try:
        with open(config_path, "w") as f:
            toml.dump(config, f)
        return True
    except IOError as e:
        logger.error(f"Error saving configuration to {config_path}: {e}")
        logger.info("Please check file permissions and ensure the directory is writable.")
        return False

def _merge(base, override):
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base

def get_settings(conf=None):
    """Return DEFAULT_CONFIG with the values of ``conf`` layered on top.

    Tables are merged key by key; any other value (including the ``targets``
    list) replaces the default wholesale.
    """
    return _merge(copy.deepcopy(DEFAULT_CONFIG), conf or {})
