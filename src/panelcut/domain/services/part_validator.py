"""Completeness checks for part configurations.

The configurator gates its steps with the same rules that are re-applied
when an order is submitted, so "can advance" and "can submit" never drift
apart. Each step owns one check; submission runs every blocking check
regardless of which step the user is on, since steps can be skipped by
direct navigation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable

from ..entities import PartConfiguration
from ..value_objects import PanelInfo

__all__ = [
    "PartValidator",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "WizardStep",
]


class WizardStep(IntEnum):
    """Configurator steps, in order."""

    IDENTIFICATION = 1
    PANEL = 2
    DIMENSIONS = 3
    EDGES = 4
    DRILLING = 5
    HARDWARE = 6
    MACHINING = 7
    FINISH = 8

    @property
    def is_optional(self) -> bool:
        return self >= WizardStep.EDGES


@dataclass
class ValidationError:
    """A blocking problem with a part configuration.

    Attributes:
        path: Field the problem relates to (e.g., "length_mm")
        message: Human-readable description of the problem
        value: The offending value
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking concern about a part configuration.

    Attributes:
        path: Field the concern relates to
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if there are no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 valid, 1 errors, 2 valid with warnings."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another ValidationResult into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


class PartValidator:
    """Validates part configurations for wizard navigation and submission."""

    def __init__(self) -> None:
        self._step_checks: dict[
            WizardStep, Callable[[PartConfiguration, PanelInfo | None], ValidationResult]
        ] = {
            WizardStep.IDENTIFICATION: self._check_identification,
            WizardStep.PANEL: self._check_panel,
            WizardStep.DIMENSIONS: self._check_dimensions,
        }

    def validate_step(
        self,
        part: PartConfiguration,
        step: WizardStep | int,
        panel: PanelInfo | None = None,
    ) -> ValidationResult:
        """Validate the fields owned by one step.

        Steps 4 to 8 (edges, drilling, hardware, machining, finish) are
        optional and never block.
        """
        step = WizardStep(step)
        check = self._step_checks.get(step)
        if check is None:
            return ValidationResult()
        return check(part, panel)

    def can_advance(self, part: PartConfiguration, step: WizardStep | int) -> bool:
        """Whether the user may move past ``step``."""
        return self.validate_step(part, step).is_valid

    def validate_for_submission(
        self, part: PartConfiguration, panel: PanelInfo | None = None
    ) -> ValidationResult:
        """Run every blocking check, independent of the current step."""
        result = ValidationResult()
        for step in WizardStep:
            result.merge(self.validate_step(part, step, panel))
        return result

    def is_submittable(self, part: PartConfiguration) -> bool:
        return self.validate_for_submission(part).is_valid

    def _check_identification(
        self, part: PartConfiguration, panel: PanelInfo | None
    ) -> ValidationResult:
        result = ValidationResult()
        if not part.reference or not part.reference.strip():
            result.add_error("reference", "Reference is required", part.reference)
        if not isinstance(part.quantity, int) or part.quantity < 1:
            result.add_error("quantity", "Quantity must be at least 1", part.quantity)
        return result

    def _check_panel(
        self, part: PartConfiguration, panel: PanelInfo | None
    ) -> ValidationResult:
        result = ValidationResult()
        if not part.panel_id:
            result.add_error("panel_id", "A panel must be selected")
        return result

    def _check_dimensions(
        self, part: PartConfiguration, panel: PanelInfo | None
    ) -> ValidationResult:
        result = ValidationResult()
        if part.length_mm <= 0:
            result.add_error("length_mm", "Length must be positive", part.length_mm)
        if part.width_mm <= 0:
            result.add_error("width_mm", "Width must be positive", part.width_mm)
        if not result.is_valid:
            return result

        if part.width_mm > part.length_mm:
            result.add_warning(
                "width_mm",
                f"Width ({part.width_mm:g} mm) is larger than length "
                f"({part.length_mm:g} mm)",
                suggestion="Enter the larger dimension as the length",
            )
        if panel is not None:
            self._check_against_panel(part, panel, result)
        return result

    def _check_against_panel(
        self, part: PartConfiguration, panel: PanelInfo, result: ValidationResult
    ) -> None:
        if part.grain_direction is not None and not panel.grain_direction:
            result.add_warning(
                "grain_direction",
                "Panel has no grain direction; the orientation will be ignored",
            )
        if panel.length_mm and panel.width_mm:
            fits = (
                part.length_mm <= panel.length_mm and part.width_mm <= panel.width_mm
            ) or (
                not panel.grain_direction
                and part.length_mm <= panel.width_mm
                and part.width_mm <= panel.length_mm
            )
            if not fits:
                result.add_warning(
                    "length_mm",
                    f"Part {part.length_mm:g} x {part.width_mm:g} mm exceeds the "
                    f"{panel.length_mm:g} x {panel.width_mm:g} mm sheet",
                    suggestion="Split the part or choose a larger sheet",
                )
