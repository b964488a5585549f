import os
import tempfile
import unittest
from unittest.mock import patch
from ffmpeg_android_maker.artifacts import install_libs, install_headers
from ffmpeg_android_maker.toolchain import Abi
from ffmpeg_android_maker.workspace import Workspace

def _write(path, content=""):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w") as f:
        f.write(content)

@patch('ffmpeg_android_maker.artifacts.logger')
class TestArtifacts(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.workspace = Workspace(self.tmp.name)
        self.workspace.prepare()

    def tearDown(self):
        self.tmp.cleanup()

    def _fake_build(self, abi, header=None):
        prefix = self.workspace.abi_build_dir(abi)
        _write(os.path.join(prefix, "lib", "libavcodec.so"), f"avcodec {abi}")
        _write(os.path.join(prefix, "lib", "libavutil.so"), f"avutil {abi}")
        _write(os.path.join(prefix, "lib", "pkgconfig", "libavutil.pc"))
        _write(os.path.join(prefix, "include", "libavutil", "avutil.h"), header or f"/* {abi} */")

    def test_install_libs(self, mock_logger):
        self._fake_build(Abi.ARM64_V8A)

        installed = install_libs(self.workspace, Abi.ARM64_V8A)

        output_dir = os.path.join(self.tmp.name, "output", "lib", "arm64-v8a")
        self.assertEqual(sorted(os.listdir(output_dir)), ["libavcodec.so", "libavutil.so"])
        self.assertEqual(len(installed), 2)
        with open(os.path.join(output_dir, "libavcodec.so")) as f:
            self.assertEqual(f.read(), "avcodec arm64-v8a")

    def test_install_libs_without_build(self, mock_logger):
        self.assertEqual(install_libs(self.workspace, Abi.X86), [])
        self.assertFalse(os.path.exists(self.workspace.abi_output_dir(Abi.X86)))
        mock_logger.error.assert_called_once()

    def test_one_lib_dir_per_abi(self, mock_logger):
        for abi in Abi:
            self._fake_build(abi)
            install_libs(self.workspace, abi)

        lib_root = os.path.join(self.workspace.output_dir, "lib")
        self.assertEqual(sorted(os.listdir(lib_root)), sorted(abi.value for abi in Abi))

    def test_install_headers_from_first_abi(self, mock_logger):
        self._fake_build(Abi.X86_64, header="/* x86_64 */")
        self._fake_build(Abi.ARM64_V8A, header="/* arm64 */")

        include_dir = install_headers(self.workspace)

        self.assertEqual(include_dir, os.path.join(self.tmp.name, "output", "include"))
        with open(os.path.join(include_dir, "libavutil", "avutil.h")) as f:
            self.assertEqual(f.read(), "/* arm64 */")
        self.assertEqual(os.listdir(include_dir), ["libavutil"])

    def test_install_headers_nothing_built(self, mock_logger):
        os.makedirs(self.workspace.build_dir)
        self.assertIsNone(install_headers(self.workspace))

    def test_install_headers_missing_build_dir(self, mock_logger):
        self.assertIsNone(install_headers(self.workspace))

if __name__ == '__main__':
    unittest.main()
