"""Docker adapter for StackLauncher."""

from .client import CommandResult, DockerClient
from .controller import DockerStackController

__all__ = ["CommandResult", "DockerClient", "DockerStackController"]
