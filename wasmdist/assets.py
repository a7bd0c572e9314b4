"""Copy static web assets into the bundle directory."""

import shutil
from pathlib import Path

from wasmdist.errors import AssetCopyError


def copy_assets(project_dir, out_dir, assets):
    """Copy each asset into out_dir, overwriting files of the same name.

    Every asset is attempted even if an earlier one fails, so a missing
    ``index.html`` does not keep ``style.css`` out of the bundle.  Content
    and permission bits are copied; the source files are only read.

    Parameters
    ----------
    project_dir : str or Path
        Directory relative asset paths and out_dir are resolved against.
    out_dir : str or Path
        Bundle directory; created if missing.
    assets : list of str or Path
        Files to copy.  Only the file name is kept in the bundle.

    Returns
    -------
    list of Path : Destination of each copied asset.

    Raises
    ------
    AssetCopyError
        After the loop, if any asset failed.
    """
    project_dir = Path(project_dir)
    out_dir = project_dir / out_dir
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise AssetCopyError([(asset, exc) for asset in assets]) from exc

    copied = []
    failures = []
    for asset in assets:
        src = project_dir / asset
        dst = out_dir / Path(asset).name
        try:
            shutil.copy(src, dst)
        except OSError as exc:
            failures.append((asset, exc))
            continue
        copied.append(dst)

    if failures:
        raise AssetCopyError(failures)
    return copied
