"""
Services module for the Medication Reminder service.

Contains the catalogue, dose ledger, dose scheduler, selection flow and the
local notification center.
"""

# Expose commonly used services for convenient imports
from .catalogue import CatalogueStore  # noqa: F401
from .dose_ledger import DoseLedger  # noqa: F401
from .dose_scheduler import DoseScheduler  # noqa: F401
from .notification_service import NotificationCenter, AuthorizationStatus  # noqa: F401
from .selection_flow import SelectionFlowController, FlowState, FlowStep  # noqa: F401
