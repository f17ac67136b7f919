"""Constants used by the lateral trajectory optimizer.

Quantities with a physical meaning carry their unit and provenance through
:class:`PhysicalConstant`. Pure numerical settings are plain floats.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PhysicalConstant:
    """Typed constant with engineering metadata.

    Attributes:
        value: Numerical value of the constant
        unit: Unit string (arc-length based, e.g. "1/m")
        source: Where the value comes from
        notes: Additional documentation
    """

    value: float
    unit: str
    source: str
    notes: str = ""

    def __float__(self) -> float:
        return self.value


# =============================================================================
# Lateral dynamics limits
# =============================================================================

LATERAL_THIRD_ORDER_DERIVATIVE_MAX = PhysicalConstant(
    value=0.1,
    unit="1/m^2",
    source="Lattice planner lateral comfort limit",
    notes="Maximum magnitude of d''' (change of d'' per metre of arc length)",
)

LATERAL_DERIVATIVE_BOUND = PhysicalConstant(
    value=10.0,
    unit="dimensionless",
    source="Engineering choice, not a physical limit",
    notes="Symmetric box applied to d' and d'' variables; effectively unconstrained",
)

# =============================================================================
# Numerical tolerances
# =============================================================================

CONSTRAINT_TOLERANCE = 1e-6
