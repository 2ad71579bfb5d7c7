"""Tests for apply and conflicts modules against real git repositories."""

from pathlib import Path

import pytest

from linux_stable.apply import ApplyResult, RangeApplicator
from linux_stable.config import UpdateMethod
from linux_stable.models import KernelVersion, VersionInfo
from linux_stable.repository import KernelRepository

from conftest import checkout_local, release, requires_git


pytestmark = requires_git


def versions(current: str = "5.4.10", target: str = "5.4.11", latest: str = "5.4.11") -> VersionInfo:
    return VersionInfo(
        current=KernelVersion.parse(current),
        latest=KernelVersion.parse(latest),
        target=KernelVersion.parse(target),
    )


def read(repo, name: str) -> str:
    return (Path(repo.working_tree_dir) / name).read_text()


def assert_clean_state(repo):
    """No unmerged paths and no operation in progress."""
    kernel_repo = KernelRepository(repo.working_tree_dir)
    assert repo.git.ls_files("-u") == ""
    assert not kernel_repo.merge_in_progress()
    assert not kernel_repo.cherry_pick_in_progress()
    assert not kernel_repo.sequencer_in_progress()


@pytest.fixture
def applicator(upstream_repo):
    return RangeApplicator(KernelRepository(upstream_repo.working_tree_dir))


class TestCherryPick:
    """Tests for replaying the stable range."""
    
    def test_clean(self, upstream_repo, applicator, capsys):
        """Test range picks without conflicts."""
        release(upstream_repo, 11, {"driver.c": "int value = 11;\n"})
        checkout_local(upstream_repo, {"local.c": "int local;\n"})
        
        result = applicator.apply(UpdateMethod.CHERRY_PICK, versions())
        
        assert result == ApplyResult.CLEAN
        assert "5.4.11 PICKED CLEANLY!" in capsys.readouterr().out
        assert read(upstream_repo, "driver.c") == "int value = 11;\n"
        assert "SUBLEVEL = 11" in read(upstream_repo, "Makefile")
        assert upstream_repo.head.commit.message.strip() == "Linux 5.4.11"
        assert_clean_state(upstream_repo)
    
    def test_conflict_takes_theirs(self, upstream_repo, applicator):
        """Test a conflicting pick is resolved with the incoming side."""
        release(upstream_repo, 11, {"driver.c": "int value = 11;\n"})
        checkout_local(upstream_repo, {"driver.c": "int value = 42;\n"})
        before = upstream_repo.head.commit.hexsha
        
        result = applicator.apply(UpdateMethod.CHERRY_PICK, versions())
        
        assert result == ApplyResult.RESOLVED
        assert upstream_repo.head.commit.hexsha != before
        assert upstream_repo.head.commit.parents[0].hexsha == before
        assert upstream_repo.head.commit.message.strip().startswith("Linux 5.4.11")
        assert read(upstream_repo, "driver.c") == "int value = 11;\n"
        assert_clean_state(upstream_repo)
    
    def test_conflicts_across_range(self, upstream_repo, applicator):
        """Test every stopped commit of a multi-commit range is resolved."""
        release(upstream_repo, 11, {"driver.c": "int value = 11;\n"})
        release(upstream_repo, 12, {"other.c": "int other = 12;\n"})
        checkout_local(upstream_repo, {
            "driver.c": "int value = 42;\n",
            "other.c": "int other = 42;\n",
        })
        
        result = applicator.apply(
            UpdateMethod.CHERRY_PICK,
            versions(target="5.4.12", latest="5.4.12"),
        )
        
        assert result == ApplyResult.RESOLVED
        assert read(upstream_repo, "driver.c") == "int value = 11;\n"
        assert read(upstream_repo, "other.c") == "int other = 12;\n"
        assert "SUBLEVEL = 12" in read(upstream_repo, "Makefile")
        assert upstream_repo.git.rev_list("--count", "v5.4.10..HEAD") == "3"
        assert_clean_state(upstream_repo)


class TestMerge:
    """Tests for merging the target tag."""
    
    def test_clean(self, upstream_repo, applicator, capsys):
        """Test merge without conflicts."""
        release(upstream_repo, 11, {"driver.c": "int value = 11;\n"})
        checkout_local(upstream_repo, {"local.c": "int local;\n"})
        
        result = applicator.apply(UpdateMethod.MERGE, versions())
        
        assert result == ApplyResult.CLEAN
        assert "5.4.11 MERGED CLEANLY!" in capsys.readouterr().out
        assert len(upstream_repo.head.commit.parents) == 2
        assert read(upstream_repo, "local.c") == "int local;\n"
        assert_clean_state(upstream_repo)
    
    def test_conflict_takes_theirs(self, upstream_repo, applicator):
        """Test a conflicting merge is committed with the incoming side."""
        release(upstream_repo, 11, {"driver.c": "int value = 11;\n"})
        checkout_local(upstream_repo, {"driver.c": "int value = 42;\n"})
        before = upstream_repo.head.commit.hexsha
        
        result = applicator.apply(UpdateMethod.MERGE, versions())
        
        assert result == ApplyResult.RESOLVED
        head = upstream_repo.head.commit
        assert head.hexsha != before
        assert len(head.parents) == 2
        assert head.parents[1].hexsha == upstream_repo.tags["v5.4.11"].commit.hexsha
        assert read(upstream_repo, "driver.c") == "int value = 11;\n"
        assert "SUBLEVEL = 11" in read(upstream_repo, "Makefile")
        assert_clean_state(upstream_repo)
    
    def test_deleted_upstream(self, upstream_repo, applicator):
        """Test a file deleted upstream but modified locally is removed."""
        tree = Path(upstream_repo.working_tree_dir)
        (tree / "other.c").unlink()
        release(upstream_repo, 11, {})
        checkout_local(upstream_repo, {"other.c": "int other = 42;\n"})
        
        result = applicator.apply(UpdateMethod.MERGE, versions())
        
        assert result == ApplyResult.RESOLVED
        assert not (tree / "other.c").exists()
        assert_clean_state(upstream_repo)
