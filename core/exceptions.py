"""
Exception taxonomy for the Medication Reminder service.
"""


class MedicationReminderError(Exception):
    """Base class for all service errors."""


class ValidationError(MedicationReminderError, ValueError):
    """Input rejected before it reaches the store."""


class PersistenceError(MedicationReminderError):
    """A write to the local store could not be committed."""


class NotFoundError(MedicationReminderError, LookupError):
    """The referenced record or session does not exist."""


class FlowStateError(MedicationReminderError):
    """Operation not allowed in the selection flow's current step."""
