import subprocess
from typing import NamedTuple
from ..cli_logger import logger


class CommandResult(NamedTuple):
    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self):
        return self.returncode == 0


def run_shell_command(command, stream_output=False, env=None, cwd=None):
    """
    Executes a command, optionally echoing its output line by line.

    Args:
        command (list): The command to execute as a list of strings.
        stream_output (bool): If True, every output line is logged as it arrives
            and stderr is merged into stdout.
        env (dict, optional): A dictionary of environment variables.
        cwd (str, optional): The working directory for the command.

    Returns:
        CommandResult: (stdout, stderr, returncode). A command that cannot be
        started yields returncode -1 with the reason in stderr.
    """
    try:
        if stream_output:
            process = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                bufsize=1,
                universal_newlines=True,
                env=env,
                cwd=cwd
            )
            lines = []
            for line in process.stdout:
                logger.step_info(line.rstrip(), indent=4)
                lines.append(line)
            process.wait()
            return CommandResult("".join(lines), "", process.returncode)

        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            env=env,
            check=False,
            cwd=cwd
        )
        return CommandResult(result.stdout, result.stderr, result.returncode)

    except FileNotFoundError as e:
        logger.error(f"Command not found: {e.filename}")
        return CommandResult("", str(e), -1)
    except OSError as e:
        logger.error(f"Failed to run {command[0]}: {e}")
        return CommandResult("", str(e), -1)


def log_command_failure(description, result):
    """Log the exit code and captured output of a failed command."""
    logger.error(f"{description} failed (Exit Code: {result.returncode}):")
    if result.stdout:
        logger.error(f"Stdout:\n{result.stdout}")
    if result.stderr:
        logger.error(f"Stderr:\n{result.stderr}")
