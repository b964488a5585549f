import os
import shutil
from .cli_logger import logger


class Workspace:
    """Directory layout of a build run, rooted at ``base_dir``.

    ``sources/`` is a cache that survives between runs. ``build/``, ``output/``
    and ``stats/`` are derived and get dropped by :meth:`prepare`, so there is
    no incremental compilation.
    """

    def __init__(self, base_dir="."):
        self.base_dir = os.path.abspath(base_dir)
        self.sources_dir = os.path.join(self.base_dir, "sources")
        self.build_dir = os.path.join(self.base_dir, "build")
        self.output_dir = os.path.join(self.base_dir, "output")
        self.stats_dir = os.path.join(self.base_dir, "stats")

    @property
    def derived_dirs(self):
        return [self.build_dir, self.stats_dir, self.output_dir]

    @property
    def text_relocations_report(self):
        return os.path.join(self.stats_dir, "text-relocations.txt")

    @property
    def include_output_dir(self):
        return os.path.join(self.output_dir, "include")

    def abi_build_dir(self, abi):
        return os.path.join(self.build_dir, str(abi))

    def abi_output_dir(self, abi):
        return os.path.join(self.output_dir, "lib", str(abi))

    def prepare(self):
        """Drop everything built previously and recreate the empty layout."""
        for path in self.derived_dirs:
            if os.path.exists(path):
                logger.step_info(f"Removing {path}", indent=2)
                shutil.rmtree(path)
        os.makedirs(self.stats_dir, exist_ok=True)
        os.makedirs(self.output_dir, exist_ok=True)
        os.makedirs(self.sources_dir, exist_ok=True)

    def clean(self, include_sources=False):
        """Remove derived directories, and the source cache if asked to.

        Returns the list of removed paths.
        """
        targets = list(self.derived_dirs)
        if include_sources:
            targets.append(self.sources_dir)

        removed = []
        for path in targets:
            if not os.path.isdir(path):
                continue
            logger.info(f"Attempting to remove directory {path}...")
            try:
                shutil.rmtree(path)
                logger.success(f"Removed directory {path}")
                removed.append(path)
            except OSError as e:
                logger.error(f"Error removing directory {path}: {e}")
                logger.info("Please check file permissions and ensure the directory is not in use.")
        return removed
