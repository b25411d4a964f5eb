"""Tests for medication.services.doses."""

from datetime import date, time, timedelta

import pytest

from medication.models import Alarm, DoseRecord, Prescription
from medication.services.alarms import AlarmNotFound
from medication.services.doses import record_dose, record_missed_doses

from .conftest import TODAY

pytestmark = pytest.mark.django_db


class TestRegisterPrescription:
    def test_creates_one_alarm_per_slot(self, member, medicine, prescribe):
        prescription = prescribe(member, medicine, slots=[(8, 0), (20, 0)], amount=2, day=7)

        assert prescription.times == 2
        assert prescription.end_date == TODAY + timedelta(days=7)
        assert prescription.scheduled_amount == 28
        assert [a.time for a in prescription.alarms.all()] == [time(8, 0), time(20, 0)]
        assert all(a.is_available and not a.is_eaten for a in prescription.alarms.all())


class TestRecordDose:
    def test_marks_alarm_and_writes_history(self, member, medicine, prescribe):
        alarm = prescribe(member, medicine).alarms.get()

        record = record_dose(member, alarm.id, today=TODAY)

        alarm.refresh_from_db()
        assert alarm.is_eaten
        assert (record.medicine, record.date, record.is_eaten) == (medicine, TODAY, True)

    def test_twice_on_same_day_keeps_one_record(self, member, medicine, prescribe):
        alarm = prescribe(member, medicine).alarms.get()

        record_dose(member, alarm.id, today=TODAY)
        record_dose(member, alarm.id, today=TODAY)

        assert DoseRecord.objects.filter(alarm=alarm).count() == 1

    def test_overrides_missed_record(self, member, medicine, prescribe):
        alarm = prescribe(member, medicine).alarms.get()
        record_missed_doses(today=TODAY)

        record_dose(member, alarm.id, today=TODAY)

        assert DoseRecord.objects.get(alarm=alarm, date=TODAY).is_eaten

    def test_other_members_alarm(self, member, other_member, medicine, prescribe):
        alarm = prescribe(other_member, medicine).alarms.get()

        with pytest.raises(AlarmNotFound):
            record_dose(member, alarm.id, today=TODAY)
        assert not DoseRecord.objects.exists()


class TestRecordMissedDoses:
    def test_records_pending_alarms_only(self, member, medicine, prescribe):
        prescription = prescribe(member, medicine, slots=[(8, 0), (13, 0), (19, 0)])
        alarms = list(prescription.alarms.order_by("id"))
        Alarm.objects.filter(id=alarms[0].id).update(is_eaten=True)
        Alarm.objects.filter(id=alarms[1].id).update(is_available=False)

        created = record_missed_doses(today=TODAY)

        assert created == 1
        record = DoseRecord.objects.get()
        assert (record.alarm_id, record.is_eaten, record.member) == (alarms[2].id, False, member)

    def test_idempotent(self, member, medicine, prescribe):
        prescribe(member, medicine, slots=[(8, 0), (20, 0)])

        assert record_missed_doses(today=TODAY) == 2
        assert record_missed_doses(today=TODAY) == 0
        assert DoseRecord.objects.count() == 2

    def test_expired_prescriptions_skipped(self, member, medicine, prescribe):
        prescribe(member, medicine, day=2, start_date=date(2024, 1, 1))

        assert record_missed_doses(today=TODAY) == 0
        assert Prescription.objects.count() == 1
