"""Exceptions raised by a bundle build."""


class BundleError(Exception):
    """A build step failed.  ``returncode`` is the process exit status."""

    returncode = 1


class CompileError(BundleError):
    """The external compiler exited non-zero or could not be started.

    ``detail`` is None when the compiler ran and printed its own
    diagnostics; otherwise it explains why the compiler never ran.
    """

    def __init__(self, command, returncode, detail=None):
        self.command = list(command)
        self.returncode = returncode
        self.detail = detail
        super().__init__(detail or f"{self.command[0]} exited with status {returncode}")


class AssetCopyError(BundleError):
    """One or more static assets could not be copied.

    ``failures`` is a list of ``(asset, OSError)`` pairs, one per asset
    that failed; assets not listed were copied.
    """

    def __init__(self, failures):
        self.failures = list(failures)
        names = ', '.join(str(asset) for asset, _ in self.failures)
        super().__init__(f"failed to copy {names}")
