from .build import build
from .clean import clean
from .config import config
from .doctor import doctor
from .log import log
from .version import version

__all__ = ["build", "clean", "config", "doctor", "log", "version"]
