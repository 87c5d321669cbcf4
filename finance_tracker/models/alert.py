"""
Alert and Admin Dashboard Models

Alerts are static examples: delivery over WhatsApp or in-app
notifications is not implemented.
"""

import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field


class AlertType(str, Enum):
    """What an alert is about."""
    DUE = "due"
    MATURITY = "maturity"
    PAYMENT = "payment"
    STATUS = "status"


class AlertChannel(str, Enum):
    """Where an alert would be delivered."""
    WHATSAPP = "WhatsApp"
    IN_APP = "In-App"


class Alert(BaseModel):
    """A financial reminder shown on the Alerts tab."""

    id: int
    title: str = Field(..., min_length=1)
    description: str
    date: dt.date
    type: AlertType
    channel: AlertChannel

    @property
    def is_warning(self) -> bool:
        """Due dates and payments need action; the rest are informational."""
        return self.type in (AlertType.DUE, AlertType.PAYMENT)


class AdminStats(BaseModel):
    """User statistics shown on the admin dashboard."""

    total_registered: int = Field(ge=0)
    daily_active: int = Field(ge=0)
    new_users_today: int = Field(ge=0)
    monthly_growth_percent: float
