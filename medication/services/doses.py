# medication/services/doses.py
import logging
from datetime import date, time
from typing import Optional, Sequence

from django.db import transaction
from django.utils import timezone

from ..models import Alarm, DoseRecord, Medicine, Prescription
from .alarms import get_member_alarm

logger = logging.getLogger(__name__)


def record_dose(member, alarm_id, today: Optional[date] = None) -> DoseRecord:
    """
    Mark an alarm's dose as taken and write it to the dose history.
    Recording the same alarm twice on one day keeps a single record.
    """
    today = today or timezone.localdate()

    with transaction.atomic():
        alarm = get_member_alarm(member, alarm_id)
        alarm.is_eaten = True
        alarm.save(update_fields=['is_eaten', 'updated_at'])

        record, created = DoseRecord.objects.update_or_create(
            alarm=alarm,
            date=today,
            defaults={
                'member': member,
                'medicine': alarm.medicine,
                'is_eaten': True,
            }
        )

    logger.info(f"Dose recorded for alarm {alarm.id} on {today} (new record: {created})")
    return record


def record_missed_doses(today: Optional[date] = None) -> int:
    """
    Write a not-taken record for every enabled alarm of an active
    prescription that is still pending today. Alarms that already have a
    record for the day are left alone, so running this twice is harmless.
    """
    today = today or timezone.localdate()

    pending = Alarm.objects.filter(is_available=True, is_eaten=False).select_related(
        'prescription', 'prescription__medicine', 'prescription__member'
    )

    created_count = 0
    with transaction.atomic():
        for alarm in pending:
            if not alarm.prescription.is_active(today):
                continue
            _, created = DoseRecord.objects.get_or_create(
                alarm=alarm,
                date=today,
                defaults={
                    'member': alarm.prescription.member,
                    'medicine': alarm.prescription.medicine,
                    'is_eaten': False,
                }
            )
            if created:
                created_count += 1

    logger.info(f"Recorded {created_count} missed doses for {today}")
    return created_count


@transaction.atomic
def register_prescription(member, medicine: Medicine, amount: int, day: int,
                          time_slots: Sequence[time], start_date: Optional[date] = None) -> Prescription:
    """Assign a medicine to a member and create one alarm per daily time slot."""
    prescription = Prescription.objects.create(
        member=member,
        medicine=medicine,
        amount=amount,
        times=len(time_slots),
        day=day,
        start_date=start_date or timezone.localdate(),
    )
    Alarm.objects.bulk_create([
        Alarm(prescription=prescription, time=slot, is_available=True, is_eaten=False)
        for slot in time_slots
    ])

    logger.info(f"Registered {medicine.name} for member {member.pk} with {len(time_slots)} alarms")
    return prescription
