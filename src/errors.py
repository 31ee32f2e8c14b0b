"""Structured error hierarchy for kinsim."""


class KinsimError(Exception):
    """Base for all kinsim errors."""

    pass


class InvariantViolationError(KinsimError):
    """Programmer or data error: the family graph does not support the request."""

    pass


class UnknownRelationError(InvariantViolationError, NotImplementedError):
    """Relation tag outside the supported set."""

    def __init__(self, relation: object):
        self.relation = relation
        super().__init__(f"Unknown relation: {relation!r}")


class DegeneratePopulationError(KinsimError, ZeroDivisionError):
    """A strength share was requested for zero recipients."""

    def __init__(self, quantity: str, creature_id: int | None = None):
        self.quantity = quantity
        self.creature_id = creature_id
        super().__init__(f"No recipients for {quantity} (creature {creature_id})")


class ConfigurationError(KinsimError):
    """Population container configured in a way the model cannot run."""

    pass
