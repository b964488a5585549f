from .command_executor import CommandResult, run_shell_command, log_command_failure
from .file_manager import extract, download, download_and_extract
