"""End-to-end tests for run_upgrade."""

import pytest

from dirupgrade import (
    ConfigError,
    CoverageError,
    EmptySourceError,
    RunConfig,
    StructuralError,
    run_upgrade,
)

from conftest import make_tree, mode_of, posix_only, snapshot


def _config(src, dest, **kw):
    kw.setdefault("required_markers", ("wp-activate.php",))
    return RunConfig(str(src), str(dest), **kw)


def test_content_equality(wp_source, wp_dest):
    result = run_upgrade(_config(wp_source, wp_dest))
    for rel in ("wp-activate.php", "wp-admin/admin.php", "wp-includes/version.php"):
        assert (wp_dest / rel).read_bytes() == (wp_source / rel).read_bytes()
    assert result.coverage.total == 3
    assert result.coverage.existing == 3
    assert result.changes.total == 3


def test_hidden_entries_not_copied(wp_source, wp_dest):
    run_upgrade(_config(wp_source, wp_dest))
    assert not (wp_dest / ".git").exists()


def test_destination_only_files_kept(wp_source, wp_dest):
    run_upgrade(_config(wp_source, wp_dest))
    assert (wp_dest / "wp-config.php").read_bytes() == b"<?php // local settings"


@posix_only
def test_mode_preservation(wp_source, wp_dest):
    run_upgrade(_config(wp_source, wp_dest))
    assert mode_of(wp_dest / "wp-activate.php") == 0o600
    assert mode_of(wp_dest / "wp-admin/admin.php") == 0o640
    assert mode_of(wp_dest / "wp-includes/version.php") == 0o644


def test_idempotent(wp_source, wp_dest):
    (wp_source / "wp-content/plugins").mkdir(parents=True)
    (wp_source / "wp-content/plugins/hello.php").write_bytes(b"hello")
    run_upgrade(_config(wp_source, wp_dest))
    first = snapshot(wp_dest)
    result = run_upgrade(_config(wp_source, wp_dest))
    assert snapshot(wp_dest) == first
    assert result.coverage.fraction == 1.0
    assert result.changes.add == []
    assert result.reconcile.created == []


def test_marker_failure_stops_before_enumeration(wp_source, wp_dest, monkeypatch):
    (wp_dest / "wp-activate.php").unlink()

    def boom(*args, **kwargs):
        raise AssertionError("enumeration must not run")

    monkeypatch.setattr("dirupgrade.upgrade.enumerate_source", boom)
    with pytest.raises(ConfigError):
        run_upgrade(_config(wp_source, wp_dest))


def test_structural_error_changes_nothing(tmp_path):
    src = make_tree(tmp_path / "src", {
        "wp-activate.php": b"new",
        "wp-content/plugins/x/foo.php": b"foo",
    })
    dest = make_tree(tmp_path / "dest", {"wp-activate.php": b"old"})
    before = snapshot(dest)
    with pytest.raises(StructuralError) as exc_info:
        run_upgrade(_config(src, dest, min_existing_fraction=0.0,
                            auto_create_missing_dirs=False))
    assert exc_info.value.missing == ["wp-content"]
    assert snapshot(dest) == before


def test_coverage_error_changes_nothing(tmp_path):
    src = make_tree(tmp_path / "src", {f"f{i}.php": b"new" for i in range(10)})
    dest = make_tree(tmp_path / "dest", {"f0.php": b"old"})
    before = snapshot(dest)
    with pytest.raises(CoverageError):
        run_upgrade(RunConfig(str(src), str(dest), min_existing_fraction=0.6))
    assert snapshot(dest) == before


def test_empty_source(tmp_path):
    src = make_tree(tmp_path / "src", {".git/HEAD": b"ref"})
    dest = make_tree(tmp_path / "dest", {"index.php": b"x"})
    with pytest.raises(EmptySourceError):
        run_upgrade(RunConfig(str(src), str(dest)))


def test_dry_run_changes_nothing(tmp_path):
    src = make_tree(tmp_path / "src", {"a.php": b"new", "lib/b.php": b"b"})
    dest = make_tree(tmp_path / "dest", {"a.php": b"old"})
    before = snapshot(dest)
    result = run_upgrade(RunConfig(str(src), str(dest), min_existing_fraction=0.0,
                                   dry_run=True))
    assert snapshot(dest) == before
    assert result.dry_run is True
    assert result.reconcile.created == ["lib"]
    assert result.changes.actions() == [("~", "a.php"), ("+", "lib/b.php")]


def test_status_messages(wp_source, wp_dest):
    messages = []
    run_upgrade(_config(wp_source, wp_dest), status=messages.append)
    assert any("3 of 3 files" in m for m in messages)


class TestRunConfig:
    def test_roots_cleaned(self):
        cfg = RunConfig("a//b/./c/", "dest/")
        assert cfg.source_root.replace("\\", "/") == "a/b/c"
        assert cfg.dest_root == "dest"

    def test_fraction_out_of_range(self):
        with pytest.raises(ConfigError):
            RunConfig("a", "b", min_existing_fraction=1.5)

    def test_empty_root(self):
        with pytest.raises(ConfigError):
            RunConfig("", "b")


def test_nested_dotfiles_upgraded(wp_source, wp_dest):
    (wp_source / "wp-admin/.htaccess").write_bytes(b"Deny from all")
    run_upgrade(_config(wp_source, wp_dest))
    assert (wp_dest / "wp-admin/.htaccess").read_bytes() == b"Deny from all"
