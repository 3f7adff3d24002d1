"""Failure taxonomy for army operations.

Domain helpers raise these; :class:`~condottiere.domain.army.Army` catches
them at the operation boundary, logs them and reports ``False`` to the
caller.  None of them is fatal to a running simulation.
"""

from __future__ import annotations


class ArmyOperationError(ValueError):
    """Base class for recoverable army operation failures."""


class InvalidUnitReference(ArmyOperationError):
    """An operation was invoked without a unit to act on."""


class UnknownUnitType(ArmyOperationError):
    """A unit type outside the catalog was encountered."""

    def __init__(self, unit_type: object) -> None:
        super().__init__(f'unknown unit type "{unit_type}"')
        self.unit_type = unit_type


class InsufficientFunds(ArmyOperationError):
    """The treasury cannot cover the cost of an operation."""

    def __init__(self, available: int, required: int) -> None:
        super().__init__(f"have {available}, need {required}")
        self.available = available
        self.required = required


class UpgradeNotAvailable(ArmyOperationError):
    """The unit type has no further tier."""


class UnitNotFoundInconsistency(ArmyOperationError):
    """A unit expected in the roster vanished before it could be replaced."""
