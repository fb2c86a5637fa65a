"""
ⒸAngelaMos | 2026
llm/sdk.py
"""
from __future__ import annotations

import importlib
import importlib.util
import subprocess
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from types import ModuleType
from typing import Callable

from gtxr.core import get_logger
from gtxr.core.console import info

logger = get_logger("sdk")

Installer = Callable[[str, Path], "subprocess.CompletedProcess[str]"]


class SdkInstallError(Exception):
    """
    A provider SDK could not be installed
    """

    def __init__(self, package: str, detail: str = "") -> None:
        self.package = package
        self.detail = detail
        message = f"Failed to install {package}"
        if detail:
            message = f"{message}:\n{detail}"
        super().__init__(message)


def pip_install(package: str, target: Path) -> subprocess.CompletedProcess[str]:
    """
    Install a distribution into a private target directory with pip
    """
    return subprocess.run(
        [
            sys.executable,
            "-m",
            "pip",
            "install",
            "--quiet",
            "--disable-pip-version-check",
            "--target",
            str(target),
            package,
        ],
        capture_output=True,
        text=True,
        check=False,
    )


def _find_in_environment(module: str) -> bool:
    try:
        return importlib.util.find_spec(module) is not None
    except (ImportError, ValueError):
        return False


class SdkLoader:
    """
    Makes provider SDKs available on demand

    SDKs already importable from the environment are used as they are.
    Missing ones are installed into a private directory, which is only
    visible to the import system inside a load() block.
    """

    def __init__(self, target_dir: Path, installer: Installer = pip_install) -> None:
        self.target_dir = target_dir
        self.installer = installer

    def _installed_privately(self, module: str) -> bool:
        location = self.target_dir.joinpath(*module.split("."))
        return location.is_dir() or location.with_suffix(".py").is_file()

    def is_available(self, module: str) -> bool:
        return _find_in_environment(module) or self._installed_privately(module)

    def ensure(self, module: str, package: str) -> None:
        """
        Install the package providing module unless it is already present
        Raises SdkInstallError when the installer fails
        """
        if self.is_available(module):
            return

        info(f"Installing {package}...")
        logger.info("sdk_install", package=package, target=str(self.target_dir))

        try:
            self.target_dir.mkdir(parents=True, exist_ok=True)
            completed = self.installer(package, self.target_dir)
        except OSError as e:
            raise SdkInstallError(package, str(e)) from e

        if completed.returncode != 0:
            logger.error("sdk_install_failed", package=package, code=completed.returncode)
            raise SdkInstallError(package, (completed.stderr or "").strip())

        importlib.invalidate_caches()

    @contextmanager
    def load(self, module: str) -> Iterator[ModuleType]:
        """
        Import an SDK module, looking in the private directory when needed
        """
        entry = str(self.target_dir)
        # appended, so an SDK installed in the environment still wins
        scoped = self._installed_privately(module) and entry not in sys.path
        if scoped:
            sys.path.append(entry)
        try:
            yield importlib.import_module(module)
        finally:
            if scoped and entry in sys.path:
                sys.path.remove(entry)
