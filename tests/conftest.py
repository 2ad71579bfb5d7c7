"""Shared fixtures: throw-away kernel git trees."""

import shutil
from pathlib import Path

import pytest


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


MAKEFILE_TEMPLATE = """# SPDX-License-Identifier: GPL-2.0
VERSION = {major}
PATCHLEVEL = {minor}
SUBLEVEL = {sublevel}
EXTRAVERSION =
NAME = Kleptomaniac Octopus

kernelversion:
\t@echo $(VERSION).$(PATCHLEVEL).$(SUBLEVEL)
"""


def write_makefile(tree: Path, major: int = 5, minor: int = 4, sublevel: int = 10) -> Path:
    """Write a minimal kernel Makefile into a tree."""
    makefile = tree / "Makefile"
    makefile.write_text(MAKEFILE_TEMPLATE.format(major=major, minor=minor, sublevel=sublevel))
    return makefile


def commit_all(repo, message: str) -> None:
    repo.git.add("-A")
    repo.git.commit("-m", message)


def release(repo, sublevel: int, changes: dict) -> None:
    """Commit upstream changes as Linux 5.4.<sublevel> and tag it."""
    tree = Path(repo.working_tree_dir)
    for name, content in changes.items():
        (tree / name).write_text(content)
    write_makefile(tree, sublevel=sublevel)
    commit_all(repo, f"Linux 5.4.{sublevel}")
    repo.create_tag(f"v5.4.{sublevel}", message=f"Linux 5.4.{sublevel}")


@pytest.fixture
def kernel_makefile_dir(tmp_path):
    """A folder that looks like a kernel tree to config validation."""
    write_makefile(tmp_path)
    return tmp_path


@pytest.fixture
def upstream_repo(tmp_path):
    """
    Git repository holding release v5.4.10.
    
    Tests add further upstream releases and check out a local branch.
    """
    from git import Repo
    
    tree = tmp_path / "linux"
    tree.mkdir()
    repo = Repo.init(tree)
    with repo.config_writer() as cw:
        cw.set_value("user", "name", "Test User")
        cw.set_value("user", "email", "test@example.com")
        cw.set_value("commit", "gpgsign", "false")
        cw.set_value("tag", "gpgsign", "false")
    
    (tree / "driver.c").write_text("int value = 0;\n")
    (tree / "other.c").write_text("int other = 0;\n")
    write_makefile(tree, sublevel=10)
    commit_all(repo, "Linux 5.4.10")
    repo.create_tag("v5.4.10", message="Linux 5.4.10")
    
    return repo


def checkout_local(repo, changes: dict, message: str = "local: downstream change") -> None:
    """Create the downstream branch at v5.4.10 with one local commit."""
    tree = Path(repo.working_tree_dir)
    repo.git.checkout("-b", "local", "v5.4.10")
    for name, content in changes.items():
        (tree / name).write_text(content)
    commit_all(repo, message)
