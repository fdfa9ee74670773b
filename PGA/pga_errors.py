from __future__ import annotations


class AssignmentError(ValueError):
    """Base class for every failure that aborts an assignment run."""


class ConfigurationError(AssignmentError):
    """max_size / min_size (or another run parameter) is missing or out of range."""


class MissingProjectSource(AssignmentError):
    """Project or member data could not be found at all."""


class EmptyOrMalformedData(AssignmentError):
    """No members, no projects, or rank cells left empty."""


class DuplicateProjectName(AssignmentError):
    pass


class BlankMemberName(AssignmentError):
    pass


class PreferenceCountMismatch(AssignmentError):
    """A member's rank row does not have exactly one rank per project."""


class InvalidPreferenceValue(AssignmentError):
    """A rank is not an integer in [1, N]."""


class DuplicatePreferenceValue(AssignmentError):
    pass


class InfeasibleMinimum(AssignmentError):
    """min_size * number of projects exceeds the number of members."""


class UnplaceableMember(AssignmentError):
    """Every project in a member's preference list was already at max_size."""


class RebalanceUnsatisfiable(AssignmentError):
    """The minimum-size repair loop ran out of passes or of preferences to try."""
