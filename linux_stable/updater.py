"""
Main update workflow orchestration.
"""

from enum import Enum
from typing import Optional

from linux_stable.apply import ApplyResult, RangeApplicator
from linux_stable.common import console, logger
from linux_stable.config import UpdateConfig
from linux_stable.remote import update_remote
from linux_stable.repository import KernelRepository
from linux_stable.versions import VersionCalculator, compute_target


class UpdateOutcome(str, Enum):
    """Where a run stopped."""
    FETCHED = "fetched"
    PRINTED = "printed"
    CLEAN = "clean"
    RESOLVED = "resolved"


def run_update(
    config: UpdateConfig,
    repo: Optional[KernelRepository] = None,
    calculator: Optional[VersionCalculator] = None,
    applicator: Optional[RangeApplicator] = None,
) -> UpdateOutcome:
    """
    Run the complete update workflow.
    
    Stages run strictly in order: fetch, compute versions, apply. Any
    failure propagates as a LinuxStableError.
    
    Args:
        config: Validated configuration
        repo: Kernel repository (opened from config.kernel_folder if omitted)
        calculator: Version calculator (created if omitted)
        applicator: Range applicator (created if omitted)
    
    Returns:
        The stage the run finished at
    """
    config.validate()
    repo = repo or KernelRepository(config.kernel_folder)
    
    logger.info(f"Kernel folder: {config.kernel_folder}")
    logger.info(f"Update method: {config.method.value}")
    
    # Step 1: Update linux-stable
    update_remote(repo, config)
    if config.fetch_only:
        return UpdateOutcome.FETCHED
    
    # Step 2: Calculate versions
    calculator = calculator or VersionCalculator(repo, config)
    versions = calculator.calculate()
    if config.print_latest:
        return UpdateOutcome.PRINTED
    
    versions = compute_target(versions.current, versions.latest, config.mode, config.target_version)
    console.print(f"[bold]Target kernel version:[/bold] {versions.target}")
    logger.debug(f"Range: {versions.range_expression}")
    
    # Step 3: Apply
    applicator = applicator or RangeApplicator(repo)
    result = applicator.apply(config.method, versions)
    
    if result == ApplyResult.RESOLVED:
        return UpdateOutcome.RESOLVED
    return UpdateOutcome.CLEAN
