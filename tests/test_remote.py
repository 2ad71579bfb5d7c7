"""Tests for remote module."""

import pytest
from unittest.mock import MagicMock

from git.exc import GitCommandError

from linux_stable.config import STABLE_REMOTE_URL, UpdateConfig
from linux_stable.errors import RemoteUpdateError
from linux_stable.remote import update_remote
from linux_stable.repository import KernelRepository

from conftest import release, requires_git


class TestUpdateRemote:
    """Tests for fetching linux-stable."""
    
    def test_fetch(self, capsys):
        """Test tags are fetched from the configured remote."""
        repo = MagicMock(spec=KernelRepository)
        
        update_remote(repo, UpdateConfig())
        
        repo.fetch_tags.assert_called_once_with(STABLE_REMOTE_URL)
        assert "linux-stable updated successfully!" in capsys.readouterr().out
    
    def test_fetch_failure(self):
        """Test a failed fetch is fatal."""
        repo = MagicMock(spec=KernelRepository)
        repo.fetch_tags.side_effect = GitCommandError(["git", "fetch"], 128, b"fatal: unable to access")
        
        with pytest.raises(RemoteUpdateError, match="linux-stable update failed!"):
            update_remote(repo, UpdateConfig(remote_url="https://example.invalid/linux.git"))
    
    @requires_git
    def test_fetch_local_remote(self, upstream_repo, tmp_path):
        """Test fetching tags from a local clone source."""
        from git import Repo
        
        release(upstream_repo, 11, {"driver.c": "int value = 11;\n"})
        downstream = Repo.init(tmp_path / "downstream")
        
        update_remote(
            KernelRepository(downstream.working_tree_dir),
            UpdateConfig(remote_url=upstream_repo.working_tree_dir),
        )
        
        assert {t.name for t in downstream.tags} == {"v5.4.10", "v5.4.11"}
