# medication/services/dashboard.py
from dataclasses import dataclass
from datetime import date, time
from typing import List, Optional

from django.utils import timezone

from .adherence import AdherenceRate, RemainingMedicine, best_and_worst, list_remaining_medicine
from .alarms import (
    AlarmNotFound, MedicineAlarmRecord, MissedAlarm, UpcomingAlarm,
    find_upcoming_alarm, list_missed_alarms, list_today_records,
)


@dataclass(frozen=True)
class MainResponse:
    upcoming_alarm: Optional[UpcomingAlarm]
    missed_alarms: List[MissedAlarm]
    medicine_alarm_records: List[MedicineAlarmRecord]
    remaining_medicine: List[RemainingMedicine]
    best_record: AdherenceRate
    worst_record: AdherenceRate


def show_main(member, current_time: Optional[time] = None, today: Optional[date] = None) -> MainResponse:
    """Everything the home screen needs for one member, computed against a single clock reading."""
    now = timezone.localtime()
    current_time = current_time or now.time()
    today = today or now.date()

    try:
        upcoming = find_upcoming_alarm(member, current_time, today)
    except AlarmNotFound:
        # A member with nothing pending still gets a home screen
        upcoming = None

    best, worst = best_and_worst(member)

    return MainResponse(
        upcoming_alarm=upcoming,
        missed_alarms=list_missed_alarms(member, current_time, today),
        medicine_alarm_records=list_today_records(member, today),
        remaining_medicine=list_remaining_medicine(member, today),
        best_record=best,
        worst_record=worst,
    )
