"""Pytest configuration and shared fixtures.

This module contains canned apt output and a fake command runner used
across all test modules.
"""

from pathlib import Path

import pytest
from syspkg.utils.shell import CommandResult


class FakeRunner:
    """CommandRunner returning canned output and recording every call."""

    def __init__(
        self,
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
        interactive_returncode: int = 0,
        error: OSError | None = None,
    ) -> None:
        self.result = CommandResult(stdout=stdout, stderr=stderr, returncode=returncode)
        self.interactive_returncode = interactive_returncode
        self.error = error
        self.calls: list[tuple[list[str], dict[str, str] | None]] = []
        self.interactive_calls: list[list[str]] = []

    def run(self, args: list[str], *, env: dict[str, str] | None = None) -> CommandResult:
        self.calls.append((list(args), env))
        if self.error is not None:
            raise self.error
        return self.result

    def run_interactive(self, args: list[str]) -> int:
        self.interactive_calls.append(list(args))
        if self.error is not None:
            raise self.error
        return self.interactive_returncode

    @property
    def last_args(self) -> list[str]:
        """Arguments of the most recent call of either kind."""
        if self.interactive_calls and not self.calls:
            return self.interactive_calls[-1]
        return self.calls[-1][0]


@pytest.fixture
def make_runner() -> type[FakeRunner]:
    """Factory for FakeRunner instances."""
    return FakeRunner


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user config never leaks in."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def mock_install_output() -> str:
    """Sample apt install output."""
    return """Reading package lists...
Building dependency tree...
Reading state information...
The following NEW packages will be installed:
  htop libnl-3-200
0 upgraded, 2 newly installed, 0 to remove and 0 not upgraded.
Need to get 187 kB of archives.
After this operation, 481 kB of additional disk space will be used.
Get:1 http://archive.ubuntu.com/ubuntu jammy/main amd64 libnl-3-200 amd64 3.5.0-0.1 [59.1 kB]
Get:2 http://archive.ubuntu.com/ubuntu jammy/main amd64 htop amd64 3.0.5-7build2 [128 kB]
Fetched 187 kB in 1s (251 kB/s)
Selecting previously unselected package libnl-3-200:amd64.
(Reading database ... 74213 files and directories currently installed.)
Preparing to unpack .../libnl-3-200_3.5.0-0.1_amd64.deb ...
Unpacking libnl-3-200:amd64 (3.5.0-0.1) ...
Selecting previously unselected package htop.
Preparing to unpack .../htop_3.0.5-7build2_amd64.deb ...
Unpacking htop (3.0.5-7build2) ...
Setting up libnl-3-200:amd64 (3.5.0-0.1) ...
Setting up htop (3.0.5-7build2) ...
Processing triggers for man-db (2.10.2-1) ...
Processing triggers for libc-bin (2.35-0ubuntu3.1) ...
"""


@pytest.fixture
def mock_install_dry_run_output() -> str:
    """Sample apt install --dry-run output."""
    return """NOTE: This is only a simulation!
      apt needs root privileges for real execution.
      Keep also in mind that locking is deactivated,
      so don't depend on the relevance to the real current situation!
Reading package lists...
Building dependency tree...
Reading state information...
The following NEW packages will be installed:
  htop
0 upgraded, 1 newly installed, 0 to remove and 0 not upgraded.
Inst htop (3.0.5-7build2 Ubuntu:22.04/jammy [amd64])
Conf htop (3.0.5-7build2 Ubuntu:22.04/jammy [amd64])
"""


@pytest.fixture
def mock_upgrade_dry_run_output() -> str:
    """Sample apt upgrade --dry-run output."""
    return """Reading package lists...
Building dependency tree...
Reading state information...
Calculating upgrade...
The following packages will be upgraded:
  vim vim-common
2 upgraded, 0 newly installed, 0 to remove and 0 not upgraded.
Inst vim-common [2:8.2.3995-1ubuntu2.15] (2:8.2.3995-1ubuntu2.16 Ubuntu:22.04/jammy-updates, Ubuntu:22.04/jammy-security [all]) []
Inst vim [2:8.2.3995-1ubuntu2.15] (2:8.2.3995-1ubuntu2.16 Ubuntu:22.04/jammy-updates, Ubuntu:22.04/jammy-security [amd64])
Conf vim-common (2:8.2.3995-1ubuntu2.16 Ubuntu:22.04/jammy-updates, Ubuntu:22.04/jammy-security [all])
Conf vim (2:8.2.3995-1ubuntu2.16 Ubuntu:22.04/jammy-updates, Ubuntu:22.04/jammy-security [amd64])
"""


@pytest.fixture
def mock_remove_output() -> str:
    """Sample apt remove output."""
    return """Reading package lists...
Building dependency tree...
Reading state information...
The following packages will be REMOVED:
  htop libnl-3-200
0 upgraded, 0 newly installed, 2 to remove and 0 not upgraded.
After this operation, 481 kB disk space will be freed.
(Reading database ... 74231 files and directories currently installed.)
Removing htop (3.0.5-7build2) ...
Removing libnl-3-200:amd64 (3.5.0-0.1) ...
Processing triggers for man-db (2.10.2-1) ...
"""


@pytest.fixture
def mock_remove_dry_run_output() -> str:
    """Sample apt remove --dry-run output."""
    return """NOTE: This is only a simulation!
      apt needs root privileges for real execution.
Reading package lists...
The following packages will be REMOVED:
  htop
0 upgraded, 0 newly installed, 1 to remove and 0 not upgraded.
Remv htop [3.0.5-7build2]
"""


@pytest.fixture
def mock_search_output() -> str:
    """Sample apt search output."""
    return """Sorting...
Full Text Search...
btop/jammy 1.2.0-1 amd64
  Modern and colorful command line resource monitor that shows usage and stats

htop/jammy,now 3.0.5-7build2 amd64 [installed]
  interactive processes viewer

vim/jammy-updates,jammy-security 2:8.2.3995-1ubuntu2.16 amd64 [upgradable from: 2:8.2.3995-1ubuntu2.15]
  Vi IMproved - enhanced vi editor
"""


@pytest.fixture
def mock_upgradable_output() -> str:
    """Sample apt list --upgradable output."""
    return """Listing...
vim-common/jammy-updates,jammy-security 2:8.2.3995-1ubuntu2.16 all [upgradable from: 2:8.2.3995-1ubuntu2.15]
vim/jammy-updates,jammy-security 2:8.2.3995-1ubuntu2.16 amd64 [upgradable from: 2:8.2.3995-1ubuntu2.15]
"""


@pytest.fixture
def mock_dpkg_output() -> str:
    """Sample dpkg-query -W -f '${binary:Package} ${Version}\\n' output."""
    return """adduser 3.118ubuntu5
libc6:amd64 2.35-0ubuntu3.1
vim 2:8.2.3995-1ubuntu2.15
"""


@pytest.fixture
def mock_apt_cache_show_output() -> str:
    """Sample apt-cache show output with two stanzas."""
    return """Package: vim
Architecture: amd64
Version: 2:8.2.3995-1ubuntu2.16
Priority: optional
Section: editors
Origin: Ubuntu
Maintainer: Ubuntu Developers <ubuntu-devel-discuss@lists.ubuntu.com>
Installed-Size: 4008
Depends: vim-common (= 2:8.2.3995-1ubuntu2.16), vim-runtime (= 2:8.2.3995-1ubuntu2.16)
Filename: pool/main/v/vim/vim_8.2.3995-1ubuntu2.16_amd64.deb
Size: 1729830
Description-en: Vi IMproved - enhanced vi editor
 Vim is an almost compatible version of the UNIX editor Vi.
 .
 Many new features have been added.
Homepage: https://www.vim.org/

Package: vim
Architecture: amd64
Version: 2:8.2.3995-1ubuntu2
Section: editors
Description-en: Vi IMproved - enhanced vi editor
"""
