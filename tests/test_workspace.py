import os
import tempfile
import unittest
from unittest.mock import patch
from ffmpeg_android_maker.workspace import Workspace

@patch('ffmpeg_android_maker.workspace.logger')
class TestWorkspace(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.workspace = Workspace(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def _populate(self):
        for name in ("build/x86/lib", "output/lib/x86", "stats", "sources/ffmpeg-4.1.4"):
            os.makedirs(os.path.join(self.tmp.name, name), exist_ok=True)
        with open(os.path.join(self.tmp.name, "stats", "text-relocations.txt"), "w") as f:
            f.write("File: old.so\n")

    def test_layout(self, mock_logger):
        self.assertEqual(self.workspace.abi_build_dir("x86"), os.path.join(self.tmp.name, "build", "x86"))
        self.assertEqual(self.workspace.abi_output_dir("x86"), os.path.join(self.tmp.name, "output", "lib", "x86"))
        self.assertEqual(self.workspace.text_relocations_report,
                         os.path.join(self.tmp.name, "stats", "text-relocations.txt"))

    def test_prepare_drops_derived_dirs_and_keeps_sources(self, mock_logger):
        self._populate()

        self.workspace.prepare()

        self.assertFalse(os.path.exists(self.workspace.build_dir))
        self.assertEqual(os.listdir(self.workspace.output_dir), [])
        self.assertEqual(os.listdir(self.workspace.stats_dir), [])
        self.assertTrue(os.path.isdir(os.path.join(self.workspace.sources_dir, "ffmpeg-4.1.4")))

    def test_prepare_is_idempotent(self, mock_logger):
        self.workspace.prepare()
        self.workspace.prepare()
        for path in (self.workspace.sources_dir, self.workspace.output_dir, self.workspace.stats_dir):
            self.assertTrue(os.path.isdir(path))

    def test_clean(self, mock_logger):
        self._populate()

        removed = self.workspace.clean()

        self.assertEqual(len(removed), 3)
        self.assertTrue(os.path.isdir(self.workspace.sources_dir))

    def test_clean_with_sources(self, mock_logger):
        self._populate()
        self.workspace.clean(include_sources=True)
        self.assertEqual(os.listdir(self.tmp.name), [])

    def test_clean_nothing(self, mock_logger):
        self.assertEqual(self.workspace.clean(include_sources=True), [])

if __name__ == '__main__':
    unittest.main()
