"""Exceptions raised while building and analyzing DC networks."""


class CircuitError(Exception):
    """Base class for all supernodal errors."""


class UnknownVoltageError(CircuitError, LookupError):
    """Voltage of a node was read before it is known (not ground, not solved)."""


class InvalidComponentError(CircuitError, ValueError):
    """A connection or component was built from malformed values."""


class SupernodeConflictError(InvalidComponentError):
    """A node already takes part in a supernode connection."""


class AssemblyError(CircuitError):
    """The equation system could not be assembled from the given unknowns."""


class SingularCircuitError(CircuitError):
    """The assembled system has no unique solution."""
