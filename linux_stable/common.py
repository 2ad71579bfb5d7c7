"""
Common utility functions for the linux-stable updater.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel


# Rich console for output
console = Console()


def setup_logging(
    name: str = "linux_stable",
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Set up logging with Rich handler."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    
    # Clear existing handlers
    logger.handlers.clear()
    
    # Console handler with Rich
    console_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(level)
    logger.addHandler(console_handler)
    
    # File handler if specified
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)
    
    return logger


# Default logger
logger = setup_logging()


def run_command(
    cmd: List[str],
    cwd: Optional[Path] = None,
    timeout: Optional[int] = None,
    capture_output: bool = True,
) -> Tuple[int, str, str]:
    """
    Run an external command.
    
    Args:
        cmd: Command and arguments as list
        cwd: Working directory
        timeout: Command timeout in seconds
        capture_output: Capture stdout and stderr
    
    Returns:
        Tuple of (return_code, stdout, stderr); -1 if the command could
        not be started or timed out
    """
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            timeout=timeout,
            capture_output=capture_output,
            text=True,
        )
        return result.returncode, result.stdout or "", result.stderr or ""
    except subprocess.TimeoutExpired:
        logger.error(f"Command timed out after {timeout}s: {' '.join(cmd)}")
        return -1, "", f"Command timed out after {timeout}s"
    except OSError as e:
        logger.debug(f"Command failed to start: {' '.join(cmd)}: {e}")
        return -1, "", str(e)


def print_header(title: str, style: str = "red") -> None:
    """Print a framed header pointing out what is being done."""
    console.print()
    console.print(Panel.fit(f"[bold]{title}[/bold]", border_style=style, style=style))
    console.print()


def print_success(message: str) -> None:
    """Print a statement in bold green."""
    console.print(f"\n[bold green]{message}[/bold green]\n")


def print_warning(message: str) -> None:
    """Print a warning in bold yellow."""
    console.print(f"\n[bold yellow]{message}[/bold yellow]\n")
