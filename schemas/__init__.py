"""
Pydantic schemas for the Medication Reminder service.

Contains all API request/response schemas organized by module.
"""

from .medication import *
from .dose_event import *
from .notification import *
from .flow import *
from .responses import *
