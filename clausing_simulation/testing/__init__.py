"""
Testing subpackage for the Clausing factor simulation.

This subpackage provides tools for checking the tracer against known
results:
- Tabulated straight-tube Clausing factors
- Validation functions comparing Monte Carlo estimates with the table

Example usage:
    from clausing_simulation.testing import straight_tube_clausing, run_quick_test

    expected = straight_tube_clausing(2.0)
    success = run_quick_test()
"""

from .reference import (
    STRAIGHT_TUBE_TABLE,
    straight_tube_clausing,
    straight_tube_parameters,
)

from .validation import (
    validate_straight_tube,
    validate_tracer,
    run_quick_test,
)

__all__ = [
    # Reference values
    "STRAIGHT_TUBE_TABLE",
    "straight_tube_clausing",
    "straight_tube_parameters",
    # Validation
    "validate_straight_tube",
    "validate_tracer",
    "run_quick_test",
]
