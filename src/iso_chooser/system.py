"""
System utilities for iso-chooser-menu.
"""

import logging
import os
import platform
from typing import Optional

from .constants import ARCH_ENV_VAR

# Set up logging
logger = logging.getLogger(__name__)

# uname machine names to the Debian architecture names used in the feeds
_MACHINE_TO_DEBIAN_ARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "i386": "i386",
    "i686": "i386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "armhf",
    "armv8l": "armhf",
    "ppc64le": "ppc64el",
    "s390x": "s390x",
    "riscv64": "riscv64",
}


def debian_architecture(machine: Optional[str] = None) -> str:
    """Map a machine name (default: this host's) to a Debian architecture."""
    if machine is None:
        machine = platform.machine()
    machine = machine.lower()
    arch = _MACHINE_TO_DEBIAN_ARCH.get(machine)
    if arch is None:
        logger.warning(f"Unknown machine type '{machine}', using it as-is")
        return machine
    return arch


def resolve_architecture(configured: Optional[str] = None) -> str:
    """Pick the architecture to query: environment, then config, then host."""
    from_env = os.environ.get(ARCH_ENV_VAR, "").strip()
    if from_env:
        return from_env
    if configured:
        return configured
    return debian_architecture()
