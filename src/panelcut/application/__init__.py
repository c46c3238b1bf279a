"""Application layer - use cases, configuration and wiring."""

from panelcut.application.dtos import PartInput, SubmittedPartInput
from panelcut.application.factory import (
    ServiceFactory,
    get_factory,
    reset_factory,
    set_factory,
)

__all__ = [
    "PartInput",
    "ServiceFactory",
    "SubmittedPartInput",
    "get_factory",
    "reset_factory",
    "set_factory",
]
