"""External module compiler invocation.

The compiler (``wasm-pack`` by default) is run as a blocking subprocess
with the project directory as working directory.  Its stdout and stderr
are inherited, so whatever it prints reaches the user unchanged.
"""

import subprocess

from wasmdist.errors import CompileError

# Status a POSIX shell reports when a command cannot be found.
COMMAND_NOT_FOUND = 127
# Status a POSIX shell reports when a command is found but cannot run.
COMMAND_NOT_EXECUTABLE = 126


def compiler_command(settings):
    """Build the compiler argv from resolved settings.

    Parameters
    ----------
    settings : dict
        Resolved build settings (see ``wasmdist.config``).

    Returns
    -------
    list of str
    """
    return [
        settings['tool'], 'build',
        '--target', settings['target'],
        '--out-dir', settings['out_dir'],
        *settings['extra_args'],
    ]


def run_compiler(project_dir, settings):
    """Run the compiler and wait for it to exit.

    Returns the argv that was run.  Raises CompileError on a non-zero
    exit status, with status 127 when the tool is not installed and 126
    when it cannot be executed.  A compiler killed by signal N reports
    128 + N, as a shell would.
    """
    cmd = compiler_command(settings)
    try:
        proc = subprocess.run(cmd, cwd=str(project_dir), check=False)
    except FileNotFoundError:
        raise CompileError(cmd, COMMAND_NOT_FOUND,
                           f"compiler not found: {cmd[0]}") from None
    except OSError:
        raise CompileError(cmd, COMMAND_NOT_EXECUTABLE,
                           f"compiler not executable: {cmd[0]}") from None
    returncode = proc.returncode
    if returncode < 0:
        returncode = 128 - returncode
    if returncode != 0:
        raise CompileError(cmd, returncode)
    return cmd
