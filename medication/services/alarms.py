# medication/services/alarms.py
import logging
from dataclasses import dataclass
from datetime import date, time
from typing import List, Optional, Sequence

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound

from ..models import Alarm, Prescription

logger = logging.getLogger(__name__)


class AlarmNotFound(NotFound):
    default_detail = 'No alarm available.'
    default_code = 'alarm_not_found'


class PrescriptionNotFound(NotFound):
    default_detail = 'Prescription not found.'
    default_code = 'prescription_not_found'


@dataclass(frozen=True)
class AlarmInfo:
    id: int
    name: str
    category: str
    amount: int
    times_per_day: int
    day: int
    time: time
    is_available: bool
    is_eaten: bool


@dataclass(frozen=True)
class UpcomingAlarm:
    medicine_name: str
    category: str
    time: time


@dataclass(frozen=True)
class MissedAlarm:
    name: str
    time: time


@dataclass(frozen=True)
class MedicineAlarmRecord:
    alarm_id: int
    medicine_id: int
    name: str
    time: time
    category: str
    is_eaten: bool


def _today(today: Optional[date]) -> date:
    return today or timezone.localdate()


def _now(current_time: Optional[time]) -> time:
    return current_time or timezone.localtime().time()


def _member_alarms(member):
    return Alarm.objects.filter(prescription__member=member).select_related(
        'prescription', 'prescription__medicine'
    )


def _active_alarms(member, today: date) -> List[Alarm]:
    """Alarms of the member's prescriptions that have not ended yet, sorted by time."""
    alarms = [alarm for alarm in _member_alarms(member) if alarm.prescription.is_active(today)]
    # sorted() is stable, so equal times keep primary key order
    return sorted(alarms, key=lambda alarm: alarm.time)


def _pending(alarms: Sequence[Alarm]) -> List[Alarm]:
    return [alarm for alarm in alarms if alarm.is_available and not alarm.is_eaten]


def list_active_alarms(member, today: Optional[date] = None) -> List[AlarmInfo]:
    """All alarms of active prescriptions, ascending by time of day."""
    return [
        AlarmInfo(
            id=alarm.id,
            name=alarm.medicine.name,
            category=alarm.medicine.category,
            amount=alarm.prescription.amount,
            times_per_day=alarm.prescription.times,
            day=alarm.prescription.day,
            time=alarm.time,
            is_available=alarm.is_available,
            is_eaten=alarm.is_eaten,
        )
        for alarm in _active_alarms(member, _today(today))
    ]


def find_upcoming_alarm(member, current_time: Optional[time] = None, today: Optional[date] = None) -> UpcomingAlarm:
    """
    Next alarm to remind the member about.

    Picks the earliest pending alarm later than ``current_time``; once today's
    alarms are done it wraps around to the earliest pending alarm, which is the
    first one tomorrow. Raises AlarmNotFound when nothing is pending.
    """
    current_time = _now(current_time)
    pending = _pending(_active_alarms(member, _today(today)))
    if not pending:
        raise AlarmNotFound()

    later = [alarm for alarm in pending if alarm.time > current_time]
    upcoming = later[0] if later else pending[0]

    return UpcomingAlarm(
        medicine_name=upcoming.medicine.name,
        category=upcoming.medicine.category,
        time=upcoming.time,
    )


def list_missed_alarms(member, current_time: Optional[time] = None, today: Optional[date] = None) -> List[MissedAlarm]:
    """Today's alarms whose time has already passed and which are still not taken."""
    current_time = _now(current_time)
    return [
        MissedAlarm(name=alarm.medicine.name, time=alarm.time)
        for alarm in _active_alarms(member, _today(today))
        if alarm.time < current_time and not alarm.is_eaten
    ]


def list_today_records(member, today: Optional[date] = None) -> List[MedicineAlarmRecord]:
    """Enabled alarms of active prescriptions with their taken flag, for today's checklist."""
    return [
        MedicineAlarmRecord(
            alarm_id=alarm.id,
            medicine_id=alarm.medicine.id,
            name=alarm.medicine.name,
            time=alarm.time,
            category=alarm.medicine.category,
            is_eaten=alarm.is_eaten,
        )
        for alarm in _active_alarms(member, _today(today))
        if alarm.is_available
    ]


def get_member_alarm(member, alarm_id) -> Alarm:
    try:
        return _member_alarms(member).get(id=alarm_id)
    except Alarm.DoesNotExist:
        raise AlarmNotFound(f"Alarm {alarm_id} not found")


def get_member_prescription(member, medicine_name: str) -> Prescription:
    try:
        return Prescription.objects.select_related('medicine').get(
            member=member, medicine__name=medicine_name
        )
    except Prescription.DoesNotExist:
        raise PrescriptionNotFound(f"No prescription for {medicine_name}")


@transaction.atomic
def set_availability(member, alarm_id, enabled: bool) -> Alarm:
    """Switch a single alarm on or off."""
    alarm = get_member_alarm(member, alarm_id)
    alarm.is_available = enabled
    alarm.save(update_fields=['is_available', 'updated_at'])

    logger.info(f"Alarm {alarm.id} availability set to {enabled}")
    return alarm


@transaction.atomic
def delete_alarms_for_medicine(member, medicine_name: str) -> int:
    """Delete every alarm the member has for the named medicine; the prescription is left with no daily intakes."""
    deleted, _ = Alarm.objects.filter(
        prescription__member=member,
        prescription__medicine__name=medicine_name,
    ).delete()
    Prescription.objects.filter(member=member, medicine__name=medicine_name).update(times=0)

    logger.info(f"Deleted {deleted} alarms for {medicine_name}")
    return deleted


def resize_alarms_for_schedule(member, medicine_name: str, time_slots: Sequence[time]) -> List[Alarm]:
    """
    Reconcile a prescription's alarms with a new list of daily time slots.

    Alarms are matched to slots by position: missing alarms are appended
    (enabled, not taken), surplus alarms are deleted, and every remaining
    alarm takes the time of the slot at its position. The whole
    reconciliation commits or rolls back as one unit.
    """
    time_slots = list(time_slots)

    with transaction.atomic():
        prescription = get_member_prescription(member, medicine_name)
        alarms = list(
            Alarm.objects.select_for_update().filter(prescription=prescription).order_by('id')
        )
        current_count = len(alarms)
        new_count = len(time_slots)

        # Append phase
        for position in range(current_count, new_count):
            alarms.append(Alarm(
                prescription=prescription,
                time=time_slots[position],
                is_available=True,
                is_eaten=False,
            ))

        # Truncate phase
        surplus = alarms[new_count:]
        if surplus:
            Alarm.objects.filter(id__in=[alarm.id for alarm in surplus]).delete()
        alarms = alarms[:new_count]

        # Overwrite phase
        for alarm, slot in zip(alarms, time_slots):
            alarm.time = slot
            alarm.save()

        if prescription.times != new_count:
            prescription.times = new_count
            prescription.save(update_fields=['times', 'updated_at'])

    logger.info(f"Resized alarms for {medicine_name} from {current_count} to {new_count}")
    return alarms


@transaction.atomic
def reset_daily_taken_flags() -> int:
    """Clear the taken flag of every alarm in the system."""
    updated = Alarm.objects.filter(is_eaten=True).update(is_eaten=False)
    logger.info(f"Reset taken flag on {updated} alarms")
    return updated
