import os
import unittest
from unittest.mock import patch
from click.testing import CliRunner
from ffmpeg_android_maker.builder import BuildResult
from ffmpeg_android_maker.cli_logger import logger
from ffmpeg_android_maker.main import cli
from ffmpeg_android_maker.toolchain import Abi

class TestBuildCommand(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()

    @patch('ffmpeg_android_maker.builder.build_ffmpeg')
    def test_build_tag(self, mock_build):
        mock_build.return_value = BuildResult(True, "/src", tuple(Abi))
        with self.runner.isolated_filesystem():
            result = self.runner.invoke(cli, ["build", "tag", "4.4"])

        self.assertEqual(result.exit_code, 0)
        mock_build.assert_called_once_with(
            {}, kind="tag", ref="4.4", base_dir=".", abis=[], jobs=None, verbose=False
        )

    @patch('ffmpeg_android_maker.builder.build_ffmpeg')
    def test_build_without_arguments(self, mock_build):
        mock_build.return_value = BuildResult(True, "/src", tuple(Abi))
        result = self.runner.invoke(cli, ["--path", "/work", "build", "--abi", "x86", "--abi", "arm64-v8a", "-j", "4"])

        self.assertEqual(result.exit_code, 0)
        kwargs = mock_build.call_args.kwargs
        self.assertIsNone(kwargs["kind"])
        self.assertIsNone(kwargs["ref"])
        self.assertEqual(kwargs["base_dir"], "/work")
        self.assertEqual(kwargs["abis"], ["x86", "arm64-v8a"])
        self.assertEqual(kwargs["jobs"], 4)

    @patch('ffmpeg_android_maker.builder.build_ffmpeg')
    def test_build_failure_exit_code(self, mock_build):
        mock_build.return_value = BuildResult(False, "/src", (Abi.ARMEABI_V7A,))
        result = self.runner.invoke(cli, ["build", "branch", "master"])
        self.assertEqual(result.exit_code, 1)

    @patch('ffmpeg_android_maker.decorators.logger')
    @patch('ffmpeg_android_maker.builder.build_ffmpeg', side_effect=OSError("No space left on device"))
    def test_build_crash_exit_code(self, mock_build, mock_logger):
        result = self.runner.invoke(cli, ["build", "tag", "4.4"])

        self.assertEqual(result.exit_code, 1)
        mock_logger.error.assert_called_once()

    @patch('ffmpeg_android_maker.decorators.logger')
    @patch('ffmpeg_android_maker.builder.build_ffmpeg', side_effect=FileNotFoundError("ndk-build"))
    def test_build_missing_file_exit_code(self, mock_build, mock_logger):
        result = self.runner.invoke(cli, ["build"])
        self.assertEqual(result.exit_code, 1)

    @patch('ffmpeg_android_maker.builder.logger')
    @patch('ffmpeg_android_maker.builder.ensure_sources')
    def test_build_target_without_api_level(self, mock_sources, mock_logger):
        with self.runner.isolated_filesystem():
            with open("ffmpeg-android-maker.toml", "w") as f:
                f.write('[android]\nndk_home = "/opt/ndk"\ntargets = [{abi = "x86"}]\n')
            result = self.runner.invoke(cli, ["build", "tag", "4.4"])

        self.assertEqual(result.exit_code, 1)
        mock_sources.assert_not_called()

    def test_build_rejects_unknown_abi(self):
        result = self.runner.invoke(cli, ["build", "--abi", "mips"])
        self.assertEqual(result.exit_code, 2)


class TestCleanCommand(unittest.TestCase):

    def test_clean_command(self):
        """Test that the clean command removes derived directories and keeps sources."""
        runner = CliRunner()
        with runner.isolated_filesystem():
            for d in ["build/x86/lib", "output/lib/x86", "stats", "sources/ffmpeg-4.1.4"]:
                os.makedirs(d, exist_ok=True)

            result = runner.invoke(cli, ["clean"])

            self.assertEqual(result.exit_code, 0)
            for d in ["build", "output", "stats"]:
                self.assertFalse(os.path.exists(d))
            self.assertTrue(os.path.isdir("sources/ffmpeg-4.1.4"))

    def test_clean_sources(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            os.makedirs("sources/ffmpeg-git")
            result = runner.invoke(cli, ["clean", "--sources"])
            self.assertEqual(result.exit_code, 0)
            self.assertFalse(os.path.exists("sources"))


class TestDoctorCommand(unittest.TestCase):

    @patch('ffmpeg_android_maker.environment.check_environment', return_value=True)
    def test_doctor_ok(self, mock_check):
        result = CliRunner().invoke(cli, ["--path", "/work", "doctor"])
        self.assertEqual(result.exit_code, 0)
        mock_check.assert_called_once_with("/work")

    @patch('ffmpeg_android_maker.environment.check_environment', return_value=False)
    def test_doctor_issues(self, mock_check):
        result = CliRunner().invoke(cli, ["doctor"])
        self.assertEqual(result.exit_code, 1)

class TestLogCommand(unittest.TestCase):

    def test_missing_log_file(self):
        result = CliRunner().invoke(cli, ["log", "--filename", "does-not-exist.log"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("No log files found.", result.output)

    def test_list(self):
        logger.debug("listing log files")
        result = CliRunner().invoke(cli, ["log", "--list"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn(os.path.basename(logger.log_file), result.output)

if __name__ == "__main__":
    unittest.main()
