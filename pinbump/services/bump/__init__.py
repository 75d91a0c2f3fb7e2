"""Commit-pin bump: resolve, patch, name, publish."""

from pinbump.services.bump.coordinator import PublicationCoordinator, Stage, StageFailure
from pinbump.services.bump.errors import BumpError
from pinbump.services.bump.model import BumpOutcome, BumpRequest, Transition, build_request
from pinbump.services.bump.naming import ChangeName, compare_url

__all__ = [
    "BumpError",
    "BumpOutcome",
    "BumpRequest",
    "ChangeName",
    "PublicationCoordinator",
    "Stage",
    "StageFailure",
    "Transition",
    "build_request",
    "compare_url",
]
