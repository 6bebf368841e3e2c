"""dirupgrade CLI: overlay a source tree onto an installation."""

from __future__ import annotations

import os

import click

from . import __version__
from ._exclude import ExcludeFilter
from .config import DEFAULT_MIN_FRACTION, RunConfig, parse_required_files
from .exceptions import (
    ConfigError,
    CoverageError,
    EmptySourceError,
    IOFailure,
    StructuralError,
)
from .upgrade import run_upgrade


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


_BARE_CREATE_FLAG = "--create-missing-dir"


class _UpgradeCommand(click.Command):
    """Command whose usage errors exit with 1, like every other bad argument.

    A bare ``--create-missing-dir`` means ``--create-missing-dir=true``.
    """

    def parse_args(self, ctx, args):
        args = [_BARE_CREATE_FLAG + "=true" if a == _BARE_CREATE_FLAG else a
                for a in args]
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            exc.exit_code = ConfigError.exit_code
            raise


def _build_config(src_dir, dest_dir, required_files, min_pct, create_missing_dir,
                  dry_run, exclude, exclude_from) -> RunConfig:
    """Turn parsed options into a :class:`RunConfig`, reporting all gaps at once."""
    problems = []
    if not src_dir:
        problems.append("The base source directory must be specified")
    if not dest_dir:
        problems.append("The destination installation directory must be specified")
    if problems:
        raise ConfigError(problems)

    excl = None
    if exclude or exclude_from:
        try:
            excl = ExcludeFilter(patterns=exclude, exclude_from=exclude_from)
        except OSError as exc:
            raise ConfigError(f"Cannot read exclude file {exclude_from}: {exc}")

    return RunConfig(
        source_root=src_dir,
        dest_root=dest_dir,
        required_markers=parse_required_files(required_files),
        min_existing_fraction=min_pct,
        auto_create_missing_dirs=create_missing_dir,
        dry_run=dry_run,
        exclude=excl,
    )


def _print_result(ctx, config: RunConfig, result) -> None:
    if config.dry_run:
        for p in result.reconcile.created:
            click.echo(f"mkdir {os.path.join(config.dest_root, p)}")
        for prefix, p in result.changes.actions():
            click.echo(f"{prefix} {os.path.join(config.dest_root, p)}")
    else:
        for p in result.reconcile.created:
            click.echo(f"Created directory {os.path.join(config.dest_root, p)}")
        for prefix, p in result.changes.actions():
            _status(ctx, f"{prefix} {os.path.join(config.dest_root, p)}")

    verb = "Would upgrade" if config.dry_run else "Upgraded"
    click.echo(
        f"{verb} {config.dest_root}: {len(result.changes.add)} added, "
        f"{len(result.changes.update)} updated"
    )


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

@click.command(cls=_UpgradeCommand)
@click.option("--src-dir", default=None,
              help="The source directory to copy (required).")
@click.option("--dest-dir", default=None,
              help="The directory to upgrade (required).")
@click.option("--required-files", default="",
              help="Comma-separated list of files that must exist in both directories.")
@click.option("--min-pct", type=click.FloatRange(0.0, 1.0), default=DEFAULT_MIN_FRACTION,
              show_default=True,
              help="The minimum fraction of source files that must already exist.")
@click.option("--create-missing-dir", type=click.BOOL, default=True, show_default=True,
              help="Automatically create directories that are missing (true/false).")
@click.option("-n", "--dry-run", is_flag=True, default=False,
              help="Show what would change without writing anything.")
@click.option("--exclude", multiple=True,
              help="Exclude source paths matching pattern (gitignore syntax, repeatable).")
@click.option("--exclude-from", "exclude_from",
              type=click.Path(exists=True, dir_okay=False),
              help="Read exclude patterns from file.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.version_option(__version__, prog_name="dirupgrade")
@click.pass_context
def main(ctx, src_dir, dest_dir, required_files, min_pct, create_missing_dir,
         dry_run, exclude, exclude_from, verbose):
    """Upgrade an installation in place from a pristine distribution.

    Copies every non-hidden file of --src-dir onto --dest-dir, keeping
    the permission bits of files that already exist.  Files only present
    in the destination are left alone.

    \b
    Exit codes:
      0  success
      1  bad arguments or missing required files
      2  destination directories missing (--create-missing-dir=false)
      3  no files in the source directory
      4  too few source files exist in the destination (--min-pct)
      5  filesystem error while copying
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    try:
        config = _build_config(src_dir, dest_dir, required_files, min_pct,
                               create_missing_dir, dry_run, exclude, exclude_from)
        result = run_upgrade(config, status=lambda msg: _status(ctx, msg))
    except ConfigError as exc:
        for msg in exc.messages:
            click.echo(msg)
        click.echo()
        click.echo(ctx.get_help())
        ctx.exit(exc.exit_code)
    except StructuralError as exc:
        for p in exc.missing:
            click.echo(f"Destination directory {os.path.join(config.dest_root, p)} does not exist!")
        click.echo("Fix missing directories and then re-run!")
        ctx.exit(exc.exit_code)
    except (EmptySourceError, CoverageError) as exc:
        click.echo(str(exc))
        ctx.exit(exc.exit_code)
    except IOFailure as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(exc.exit_code)

    _print_result(ctx, config, result)
