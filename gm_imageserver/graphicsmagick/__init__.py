"""GraphicsMagick processing server."""

from __future__ import annotations

from .arguments import ArgumentList, BuildResult, build_arguments
from .process import CommandResult, CommandTimeout, run_command
from .server import GLOBAL_PARAM, GraphicsMagickServer
from .workspace import Workspace, workspace

__all__ = [
    "ArgumentList",
    "BuildResult",
    "CommandResult",
    "CommandTimeout",
    "GLOBAL_PARAM",
    "GraphicsMagickServer",
    "Workspace",
    "build_arguments",
    "run_command",
    "workspace",
]
