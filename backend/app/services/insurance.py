"""Insurance status derived from the stored expiry date."""
import calendar
from datetime import date
from enum import Enum
from typing import Optional

EXPIRING_SOON_MONTHS = 2


class InsuranceStatus(str, Enum):
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring-soon"
    ACTIVE = "active"


def add_months(day: date, months: int) -> date:
    """Shift by calendar months, clamping to the last day of the target month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def insurance_status(expiry: Optional[date], today: date) -> InsuranceStatus:
    """Classify a policy expiry date relative to ``today``.

    An unset expiry counts as expired. Anything ending before the date two
    calendar months out is expiring soon.
    """
    if expiry is None or expiry < today:
        return InsuranceStatus.EXPIRED
    if expiry < add_months(today, EXPIRING_SOON_MONTHS):
        return InsuranceStatus.EXPIRING_SOON
    return InsuranceStatus.ACTIVE
