"""Shared fixtures for wasmdist tests."""

import os
import stat
import sys

import pytest

# Stand-in for wasm-pack: records its argv, kills itself with
# $FAKE_COMPILER_SIGNAL or fails with $FAKE_COMPILER_EXIT if set, otherwise
# recreates --out-dir with a module and its JS glue.
FAKE_COMPILER = """#!/bin/sh
printf '%s\\n' "$@" > "$FAKE_COMPILER_LOG"
if [ -n "$FAKE_COMPILER_SIGNAL" ]; then
    kill -"$FAKE_COMPILER_SIGNAL" $$
fi
if [ -n "$FAKE_COMPILER_EXIT" ]; then
    echo "error: could not compile \\`playground\\`" >&2
    exit "$FAKE_COMPILER_EXIT"
fi
out=pkg
while [ $# -gt 0 ]; do
    case "$1" in
        --out-dir) out="$2"; shift ;;
    esac
    shift
done
rm -rf "$out"
mkdir -p "$out"
printf 'wasm module' > "$out/playground_bg.wasm"
printf 'export default function init() {}\\n' > "$out/playground.js"
"""

INDEX_HTML = """<!DOCTYPE html>
<html>
  <head>
    <link rel="stylesheet" href="style.css">
  </head>
  <body>
    <script type="module">
      import init from './playground.js';
      init();
    </script>
  </body>
</html>
"""

STYLE_CSS = "body { font-family: monospace; }\n"


@pytest.fixture
def project(tmp_path):
    """A well-formed project layout: manifest plus both static assets."""
    root = tmp_path / 'project'
    (root / 'src').mkdir(parents=True)
    (root / 'Cargo.toml').write_text('[package]\nname = "playground"\n')
    (root / 'src' / 'lib.rs').write_text('')
    (root / 'src' / 'index.html').write_text(INDEX_HTML)
    (root / 'src' / 'style.css').write_text(STYLE_CSS)
    return root


@pytest.fixture
def fake_compiler(tmp_path, monkeypatch):
    """Put a fake ``wasm-pack`` first on PATH.

    Returns the path of the file the fake writes its arguments to, one
    per line.  Set ``FAKE_COMPILER_EXIT`` to make it fail, or
    ``FAKE_COMPILER_SIGNAL`` to have it killed by that signal.
    """
    if sys.platform == 'win32':
        pytest.skip('fake compiler is a POSIX shell script')
    bin_dir = tmp_path / 'bin'
    bin_dir.mkdir()
    script = bin_dir / 'wasm-pack'
    script.write_text(FAKE_COMPILER)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    log = tmp_path / 'compiler-args.txt'
    monkeypatch.setenv('PATH', f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.setenv('FAKE_COMPILER_LOG', str(log))
    monkeypatch.delenv('FAKE_COMPILER_EXIT', raising=False)
    monkeypatch.delenv('FAKE_COMPILER_SIGNAL', raising=False)
    return log


@pytest.fixture
def no_compiler(tmp_path, monkeypatch):
    """PATH without any ``wasm-pack``."""
    empty = tmp_path / 'empty-bin'
    empty.mkdir()
    monkeypatch.setenv('PATH', str(empty))


def _snapshot(directory):
    """Map relative path -> bytes for every file under directory."""
    return {
        p.relative_to(directory).as_posix(): p.read_bytes()
        for p in sorted(directory.rglob('*')) if p.is_file()
    }


@pytest.fixture
def snapshot():
    """Function reading a directory tree into ``{relpath: bytes}``."""
    return _snapshot
