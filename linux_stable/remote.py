"""
Fetching the upstream stable remote.
"""

from git.exc import GitCommandError

from linux_stable.common import logger, print_header, print_success
from linux_stable.config import UpdateConfig
from linux_stable.errors import RemoteUpdateError
from linux_stable.repository import KernelRepository


def update_remote(repo: KernelRepository, config: UpdateConfig) -> None:
    """
    Fetch linux-stable tags and commits into the kernel tree.
    
    Raises:
        RemoteUpdateError: if the fetch fails
    """
    print_header("Updating linux-stable")
    logger.info(f"Fetching {config.remote_url}")
    
    try:
        repo.fetch_tags(config.remote_url)
    except GitCommandError as e:
        logger.debug(f"Fetch failed: {e.stderr}")
        raise RemoteUpdateError("linux-stable update failed!") from e
    
    print_success("linux-stable updated successfully!")
