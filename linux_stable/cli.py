"""
Command-line interface for the linux-stable updater.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import click
from git.exc import GitCommandError
from rich.markup import escape
from rich.panel import Panel

from linux_stable import __version__
from linux_stable.common import console, logger, setup_logging
from linux_stable.config import UpdateConfig, UpdateMethod, UpdateMode
from linux_stable.errors import LinuxStableError, UsageError
from linux_stable.updater import UpdateOutcome, run_update


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def print_banner():
    """Print application banner."""
    console.print(Panel.fit(
        f"[bold blue]linux-stable updater[/bold blue] v{__version__}\n"
        "[dim]Merges/cherry-picks Linux upstream into a kernel tree[/dim]",
        border_style="blue",
    ))


def select_method(cherry_pick: bool, merge: bool) -> Optional[UpdateMethod]:
    """Map the method flags to an UpdateMethod; None if neither was given."""
    if cherry_pick and merge:
        raise UsageError("Only one of cherry-pick and merge may be specified!")
    if cherry_pick:
        return UpdateMethod.CHERRY_PICK
    if merge:
        return UpdateMethod.MERGE
    return None


def select_mode(latest: bool, target_version: Optional[str]) -> UpdateMode:
    """--latest beats an explicit version, which beats the next sublevel."""
    if latest:
        if target_version:
            logger.warning(f"--latest given, ignoring --version {target_version}")
        return UpdateMode.LATEST
    if target_version:
        return UpdateMode.EXPLICIT
    return UpdateMode.NEXT


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("--cherry-pick", "-c", is_flag=True, help="Cherry-pick the stable range")
@click.option("--merge", "-m", is_flag=True, help="Merge the target stable tag")
@click.option("--fetch-only", "-f", is_flag=True, help="Only update linux-stable, then exit")
@click.option("--kernel-folder", "-k", type=click.Path(path_type=Path),
              help="Kernel source location (default: current directory)")
@click.option("--latest", "-l", is_flag=True, help="Update to the latest stable version")
@click.option("--print-latest", "-p", is_flag=True,
              help="Print the current and latest versions, then exit")
@click.option("--version", "-v", "target_version", metavar="VERSION",
              help="Update to this version")
@click.option("--remote", help="Stable remote to fetch from")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path),
              help="Also write the log to this file")
@click.option("--verbose", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.pass_context
def cli(
    ctx,
    cherry_pick: bool,
    merge: bool,
    fetch_only: bool,
    kernel_folder: Optional[Path],
    latest: bool,
    print_latest: bool,
    target_version: Optional[str],
    remote: Optional[str],
    log_file: Optional[Path],
    verbose: bool,
    quiet: bool,
):
    """
    Merge or cherry-pick Linux stable updates into a kernel tree.
    
    Exactly one of --cherry-pick or --merge is required.
    
    Examples:
    
        # Cherry-pick the next stable release into the current directory
        linux-stable -c
        
        # Merge the latest stable release into another tree
        linux-stable -m -l -k ~/kernels/sm8150
        
        # Show how far behind the tree is
        linux-stable -m -p
    """
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    
    try:
        config = UpdateConfig.from_env(
            method=select_method(cherry_pick, merge),
            kernel_folder=kernel_folder,
            mode=select_mode(latest, target_version),
            target_version=target_version,
            fetch_only=fetch_only,
            print_latest=print_latest,
            remote_url=remote,
            log_file=log_file,
            verbose=verbose,
        )
        setup_logging("linux_stable", level=level, log_file=config.log_file)
        
        if not quiet:
            print_banner()
        
        outcome = run_update(config)
        
    except UsageError as e:
        console.print(f"\n[red]{escape(str(e))}[/red]\n")
        click.echo(ctx.get_help())
        sys.exit(1)
    except (LinuxStableError, GitCommandError) as e:
        console.print(f"\n[red]Error: {escape(str(e))}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)
    
    if outcome == UpdateOutcome.RESOLVED:
        console.print("[yellow]Update applied with automatically resolved conflicts[/yellow]")
    elif outcome == UpdateOutcome.CLEAN:
        console.print("[green]Update applied successfully[/green]")
    sys.exit(0)


def main(argv: Optional[List[str]] = None):
    """
    Console script entry point.
    
    Parameter errors detected by click exit with status 1 like every other
    usage error.
    """
    try:
        cli.main(args=argv, prog_name="linux-stable", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        console.print("[red]Aborted![/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
