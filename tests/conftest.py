"""Shared fixtures for dirupgrade tests."""

import os

import pytest
from click.testing import CliRunner


posix_only = pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")


def make_tree(root, files):
    """Create *files* under *root*.

    *files* maps relative paths to ``bytes`` (a file), ``(bytes, mode)``
    (a file with explicit permission bits) or ``None`` (a directory).
    """
    root.mkdir(parents=True, exist_ok=True)
    for rel, spec in files.items():
        p = root / rel
        if spec is None:
            p.mkdir(parents=True, exist_ok=True)
            continue
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(spec, tuple):
            data, mode = spec
        else:
            data, mode = spec, None
        p.write_bytes(data)
        if mode is not None:
            os.chmod(p, mode)
    return root


def snapshot(root):
    """Return ``{relpath: (kind, bytes_or_None, mode)}`` for everything under *root*."""
    result = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            full = os.path.join(dirpath, name)
            rel = os.path.relpath(full, root).replace(os.sep, "/")
            st = os.lstat(full)
            if os.path.isdir(full):
                result[rel] = ("dir", None, st.st_mode & 0o777)
            else:
                with open(full, "rb") as f:
                    result[rel] = ("file", f.read(), st.st_mode & 0o777)
    return result


def mode_of(path):
    return os.stat(path).st_mode & 0o777


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def wp_source(tmp_path):
    """A fresh distribution with three files and a hidden .git directory."""
    return make_tree(tmp_path / "src", {
        "wp-activate.php": b"<?php // activate v2",
        "wp-admin/admin.php": b"<?php // admin v2",
        "wp-includes/version.php": b"<?php $wp_version = '6.0';",
        ".git/HEAD": b"ref: refs/heads/main\n",
    })


@pytest.fixture
def wp_dest(tmp_path):
    """An older installation of the same three files, with distinct modes."""
    return make_tree(tmp_path / "dest", {
        "wp-activate.php": (b"<?php // activate v1 with more bytes", 0o600),
        "wp-admin/admin.php": (b"<?php // admin v1", 0o640),
        "wp-includes/version.php": (b"<?php $wp_version = '5.9';", 0o644),
        "wp-config.php": (b"<?php // local settings", 0o640),
    })
