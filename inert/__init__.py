"""inert: a pipeline-driven static site builder."""
from __future__ import annotations

from .build import BuildOptions, BuildOrchestrator, BuildReport, build
from .cli import main

__all__ = ["BuildOptions", "BuildOrchestrator", "BuildReport", "build", "main"]
