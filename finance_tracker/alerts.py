"""
Example Alerts and Admin Statistics

Static content. Reminders are not generated from the user's data and
nothing is delivered over WhatsApp; the Alerts tab and the admin
dashboard show these fixed examples.
"""

from datetime import date
from typing import Optional

from finance_tracker.models.alert import AdminStats, Alert, AlertChannel, AlertType


EXAMPLE_ALERTS = (
    Alert(
        id=1,
        title="EMI Due Soon",
        description="Your home loan EMI of ₹15,000 is due next week.",
        date=date(2025, 5, 23),
        type=AlertType.DUE,
        channel=AlertChannel.WHATSAPP,
    ),
    Alert(
        id=2,
        title="Investment Matured",
        description="Your Fixed Deposit of ₹50,000 has matured.",
        date=date(2025, 5, 10),
        type=AlertType.MATURITY,
        channel=AlertChannel.IN_APP,
    ),
    Alert(
        id=3,
        title="Credit Card Payment",
        description="Credit card bill payment of ₹5,000 is due in 3 days.",
        date=date(2025, 5, 19),
        type=AlertType.PAYMENT,
        channel=AlertChannel.WHATSAPP,
    ),
    Alert(
        id=4,
        title="Loan Status Update",
        description="Your personal loan application has been approved.",
        date=date(2025, 5, 15),
        type=AlertType.STATUS,
        channel=AlertChannel.IN_APP,
    ),
)

EXAMPLE_ADMIN_STATS = AdminStats(
    total_registered=1250,
    daily_active=320,
    new_users_today=15,
    monthly_growth_percent=12,
)


def get_alerts(channel: Optional[AlertChannel] = None) -> list[Alert]:
    """Example alerts, optionally only those for one channel."""
    return [alert for alert in EXAMPLE_ALERTS if channel is None or alert.channel == channel]


def get_admin_stats() -> AdminStats:
    return EXAMPLE_ADMIN_STATS
