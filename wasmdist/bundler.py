"""Assemble a deployable static web bundle.

Two ordered steps, fail-fast:

1. Run the external compiler (``wasm-pack build --target web --out-dir
   dist`` by default).  It owns the bundle directory and writes the
   ``.wasm`` module and its JavaScript glue there.
2. Copy the static assets (``src/index.html``, ``src/style.css``) into
   the same directory.

A failed step 1 leaves step 2 unattempted.  A failed step 2 leaves the
compiler artifacts in place; nothing is rolled back.
"""

from pathlib import Path

from wasmdist.assets import copy_assets
from wasmdist.compiler import run_compiler
from wasmdist.config import default_settings
from wasmdist.errors import AssetCopyError, BundleError, CompileError

__all__ = ['bundle', 'BundleError', 'CompileError', 'AssetCopyError']


def bundle(project_dir=None, settings=None, verbose=False):
    """Build the bundle for a project.

    Parameters
    ----------
    project_dir : str or Path or None
        Project root.  Defaults to the current working directory.
    settings : dict or None
        Resolved settings from ``wasmdist.config``.  Defaults to the
        built-in settings.
    verbose : bool
        Print a progress line before each step and a summary after.

    Returns
    -------
    dict with keys:
        out_dir : Path — absolute bundle directory
        command : list of str — compiler argv that was run
        assets : list of Path — copied asset destinations

    Raises
    ------
    CompileError
        Step 1 failed; no asset was copied.
    AssetCopyError
        Step 2 failed for at least one asset.
    """
    project_dir = Path(project_dir) if project_dir is not None else Path.cwd()
    project_dir = project_dir.resolve()
    if settings is None:
        settings = default_settings()

    out_dir = project_dir / settings['out_dir']

    if verbose:
        print(f"Compiling with {settings['tool']} (target={settings['target']}) "
              f"into {settings['out_dir']}/")
    command = run_compiler(project_dir, settings)

    if verbose:
        print(f"Copying {len(settings['assets'])} assets into {settings['out_dir']}/")
    copied = copy_assets(project_dir, settings['out_dir'], settings['assets'])

    if verbose:
        print(f"Bundled {len(copied)} assets into {out_dir}")
        for dst in copied:
            print(f"  {dst.name}")

    return {
        'out_dir': out_dir,
        'command': command,
        'assets': copied,
    }
