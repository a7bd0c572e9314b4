"""Command-line interface for the wasm web bundler.

Usage:
    wasmdist [build] [--project-dir DIR] [--config FILE] [--profile NAME] [--verbose]
    wasmdist serve [--project-dir DIR] [--dir DIR] [--port 8080]

With no arguments, builds ``dist/`` in the current directory with
``wasm-pack build --target web --out-dir dist`` and copies
``src/index.html`` and ``src/style.css`` next to the compiled module.
"""

import argparse
import sys
from pathlib import Path

import yaml

from wasmdist import __version__
from wasmdist.bundler import bundle
from wasmdist.config import resolve_settings
from wasmdist.errors import AssetCopyError, CompileError
from wasmdist.serve import serve

COMMANDS = ('build', 'serve')

# Options whose next token is their value, never a subcommand.
_VALUE_OPTIONS = ('-C', '--project-dir', '-c', '--config', '-p', '--profile',
                  '-d', '--dir', '--port')

# Exit status for a run cut short by Ctrl+C (128 + SIGINT).
INTERRUPTED = 130


def main(args=None):
    argv = _command_first(list(sys.argv[1:] if args is None else args))

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--project-dir', '-C', default=None,
                        help='Project directory (default: current directory)')
    common.add_argument('--config', '-c', default=None,
                        help='YAML config file (default: wasmdist.yaml if present)')
    common.add_argument('--profile', '-p', default=None,
                        help='Profile from the config file')

    parser = argparse.ArgumentParser(
        prog='wasmdist',
        description='Build a browser WebAssembly module and bundle it with its static assets',
    )
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command')

    # --- build command (default) ---
    build_parser = subparsers.add_parser('build', parents=[common],
                                         help='Compile and bundle (default)')
    build_parser.add_argument('--verbose', '-v', action='store_true',
                              help='Print progress for each step')

    # --- serve command ---
    serve_parser = subparsers.add_parser('serve', parents=[common],
                                         help='Serve the bundle for local development')
    serve_parser.add_argument('--dir', '-d', default=None,
                              help='Directory to serve (default: the configured out_dir)')
    serve_parser.add_argument('--port', type=int, default=8080,
                              help='Port to serve on (default: 8080)')

    parsed = parser.parse_args(argv)

    if parsed.command == 'build':
        return cmd_build(parsed)
    elif parsed.command == 'serve':
        return cmd_serve(parsed)
    else:
        parser.print_help()
        return 1


def _command_first(argv):
    """Move the subcommand to the front of argv, defaulting to ``build``.

    Options may come before the subcommand (``wasmdist -C DIR serve``).
    """
    if argv and argv[0] in ('-h', '--help', '--version'):
        return argv
    skip_value = False
    for i, token in enumerate(argv):
        if skip_value:
            skip_value = False
        elif token == '--':
            break
        elif token in _VALUE_OPTIONS:
            skip_value = True
        elif token in COMMANDS:
            return [token] + argv[:i] + argv[i + 1:]
    return ['build'] + argv


def _load_settings(args):
    """Resolve settings for the CLI; returns (project_dir, settings or None)."""
    project_dir = Path(args.project_dir) if args.project_dir else Path.cwd()
    if not project_dir.is_dir():
        _error(f"project directory not found: {project_dir}")
        return project_dir, None
    try:
        settings = resolve_settings(project_dir, args.config, args.profile)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        _error(str(exc))
        return project_dir, None
    return project_dir, settings


def _error(message):
    print(f"Error: {message}", file=sys.stderr)


def cmd_build(args):
    """Compile the module and copy the static assets into the bundle."""
    project_dir, settings = _load_settings(args)
    if settings is None:
        return 1

    try:
        bundle(project_dir, settings, verbose=args.verbose)
    except CompileError as exc:
        # The compiler has already printed its own diagnostics.
        if exc.detail:
            _error(exc.detail)
        return exc.returncode
    except AssetCopyError as exc:
        for asset, err in exc.failures:
            _error(f"cannot copy {asset}: {err.strerror or err}")
        return exc.returncode
    except KeyboardInterrupt:
        return INTERRUPTED

    return 0


def cmd_serve(args):
    """Serve the built bundle on localhost."""
    project_dir, settings = _load_settings(args)
    if settings is None:
        return 1

    directory = project_dir / (args.dir or settings['out_dir'])
    if not directory.is_dir():
        _error(f"bundle directory not found: {directory} (run 'wasmdist build' first)")
        return 1

    serve(directory, args.port)
    return 0


if __name__ == '__main__':
    sys.exit(main())
