"""Tests for medication.services.alarms."""

from datetime import time, timedelta
from unittest.mock import patch

import pytest

from medication.models import Alarm
from medication.services import alarms as alarm_service
from medication.services.alarms import AlarmNotFound, PrescriptionNotFound

from .conftest import TODAY

pytestmark = pytest.mark.django_db


@pytest.fixture
def three_slots(member, medicine, prescribe):
    return prescribe(member, medicine, slots=[(8, 0), (13, 0), (19, 0)])


class TestListActiveAlarms:
    def test_sorted_by_time(self, member, medicine, prescribe):
        prescribe(member, medicine, slots=[(19, 0), (8, 0), (13, 0)])

        alarms = alarm_service.list_active_alarms(member, today=TODAY)

        assert [a.time for a in alarms] == [time(8, 0), time(13, 0), time(19, 0)]
        assert alarms[0].name == "Tylenol"
        assert alarms[0].category == "pain_relief"
        assert alarms[0].times_per_day == 3

    def test_expired_prescription_excluded(self, member, medicine, prescribe):
        prescribe(member, medicine, day=5, start_date=TODAY - timedelta(days=10))

        assert alarm_service.list_active_alarms(member, today=TODAY) == []

    def test_prescription_active_on_end_date(self, member, medicine, prescribe):
        prescribe(member, medicine, day=5, start_date=TODAY - timedelta(days=5))

        assert len(alarm_service.list_active_alarms(member, today=TODAY)) == 1

    def test_other_members_alarms_hidden(self, member, other_member, medicine, prescribe):
        prescribe(other_member, medicine)

        assert alarm_service.list_active_alarms(member, today=TODAY) == []


class TestFindUpcomingAlarm:
    def test_next_alarm_after_current_time(self, member, three_slots):
        Alarm.objects.filter(time=time(13, 0)).update(is_eaten=True)

        upcoming = alarm_service.find_upcoming_alarm(member, time(15, 0), TODAY)

        assert upcoming.time == time(19, 0)
        assert upcoming.medicine_name == "Tylenol"

    def test_wraps_to_earliest_pending(self, member, three_slots):
        Alarm.objects.filter(time=time(8, 0)).update(is_eaten=True)

        upcoming = alarm_service.find_upcoming_alarm(member, time(20, 0), TODAY)

        assert upcoming.time == time(13, 0)

    def test_disabled_alarms_skipped(self, member, three_slots):
        Alarm.objects.filter(time=time(19, 0)).update(is_available=False)

        upcoming = alarm_service.find_upcoming_alarm(member, time(15, 0), TODAY)

        assert upcoming.time == time(8, 0)

    def test_nothing_pending_raises(self, member, three_slots):
        Alarm.objects.update(is_eaten=True)

        with pytest.raises(AlarmNotFound):
            alarm_service.find_upcoming_alarm(member, time(15, 0), TODAY)

    def test_no_alarms_raises(self, member):
        with pytest.raises(AlarmNotFound):
            alarm_service.find_upcoming_alarm(member, time(15, 0), TODAY)


class TestListMissedAlarms:
    def test_past_untaken_alarms(self, member, three_slots):
        Alarm.objects.filter(time=time(8, 0)).update(is_eaten=True)

        missed = alarm_service.list_missed_alarms(member, time(15, 0), TODAY)

        assert [(m.name, m.time) for m in missed] == [("Tylenol", time(13, 0))]

    def test_all_pending(self, member, three_slots):
        missed = alarm_service.list_missed_alarms(member, time(15, 0), TODAY)

        assert [m.time for m in missed] == [time(8, 0), time(13, 0)]

    def test_alarm_at_current_time_not_missed(self, member, three_slots):
        missed = alarm_service.list_missed_alarms(member, time(8, 0), TODAY)

        assert missed == []


class TestResizeAlarms:
    def test_grow(self, member, three_slots):
        slots = [time(7, 0), time(11, 0), time(15, 0), time(19, 0), time(23, 0)]

        alarm_service.resize_alarms_for_schedule(member, "Tylenol", slots)

        alarms = Alarm.objects.filter(prescription=three_slots).order_by("id")
        assert [a.time for a in alarms] == slots
        assert all(a.is_available and not a.is_eaten for a in alarms[3:])
        three_slots.refresh_from_db()
        assert three_slots.times == 5

    def test_shrink_keeps_leading_alarms(self, member, three_slots):
        first_id = Alarm.objects.filter(prescription=three_slots).order_by("id").first().id

        alarm_service.resize_alarms_for_schedule(member, "Tylenol", [time(10, 0)])

        alarms = list(Alarm.objects.filter(prescription=three_slots))
        assert [(a.id, a.time) for a in alarms] == [(first_id, time(10, 0))]

    def test_same_count_overwrites_times(self, member, three_slots):
        ids = list(Alarm.objects.filter(prescription=three_slots).values_list("id", flat=True))
        slots = [time(6, 0), time(12, 0), time(18, 0)]

        alarm_service.resize_alarms_for_schedule(member, "Tylenol", slots)

        alarms = Alarm.objects.filter(prescription=three_slots).order_by("id")
        assert [a.id for a in alarms] == ids
        assert [a.time for a in alarms] == slots

    def test_empty_schedule_removes_all(self, member, three_slots):
        alarm_service.resize_alarms_for_schedule(member, "Tylenol", [])

        assert not Alarm.objects.filter(prescription=three_slots).exists()

    def test_overwrite_keeps_flags(self, member, three_slots):
        Alarm.objects.filter(time=time(8, 0)).update(is_eaten=True)

        alarm_service.resize_alarms_for_schedule(member, "Tylenol", [time(9, 0), time(14, 0)])

        first = Alarm.objects.filter(prescription=three_slots).order_by("id").first()
        assert first.time == time(9, 0)
        assert first.is_eaten

    @pytest.mark.parametrize("hours", [[6, 10, 14, 18, 22], [6, 10]])
    def test_failure_rolls_back_everything(self, member, three_slots, hours):
        before = list(Alarm.objects.filter(prescription=three_slots).order_by("id").values_list("id", "time"))
        original_save = Alarm.save
        saved = []

        def failing_save(alarm, *args, **kwargs):
            saved.append(alarm)
            if len(saved) == 2:
                raise RuntimeError("database went away")
            return original_save(alarm, *args, **kwargs)

        slots = [time(hour, 0) for hour in hours]
        with patch.object(Alarm, "save", failing_save):
            with pytest.raises(RuntimeError):
                alarm_service.resize_alarms_for_schedule(member, "Tylenol", slots)

        after = list(Alarm.objects.filter(prescription=three_slots).order_by("id").values_list("id", "time"))
        assert after == before
        three_slots.refresh_from_db()
        assert three_slots.times == 3

    def test_unknown_medicine(self, member, three_slots):
        with pytest.raises(PrescriptionNotFound):
            alarm_service.resize_alarms_for_schedule(member, "Aspirin", [time(9, 0)])


class TestSetAvailability:
    def test_toggle(self, member, three_slots):
        alarm = Alarm.objects.filter(prescription=three_slots).first()

        alarm_service.set_availability(member, alarm.id, False)

        alarm.refresh_from_db()
        assert alarm.is_available is False

    def test_unknown_alarm(self, member):
        with pytest.raises(AlarmNotFound):
            alarm_service.set_availability(member, 9999, False)

    def test_other_members_alarm(self, member, other_member, medicine, prescribe):
        prescription = prescribe(other_member, medicine)
        alarm = prescription.alarms.first()

        with pytest.raises(AlarmNotFound):
            alarm_service.set_availability(member, alarm.id, False)

        alarm.refresh_from_db()
        assert alarm.is_available is True


class TestDeleteAlarms:
    def test_deletes_only_named_medicine(self, member, three_slots, make_medicine, prescribe):
        prescribe(member, make_medicine("Aspirin"), slots=[(10, 0)])

        deleted = alarm_service.delete_alarms_for_medicine(member, "Tylenol")

        assert deleted == 3
        three_slots.refresh_from_db()
        assert three_slots.times == 0
        assert three_slots.scheduled_amount == 0
        assert list(Alarm.objects.values_list("prescription__medicine__name", flat=True)) == ["Aspirin"]

    def test_unknown_medicine_deletes_nothing(self, member, three_slots):
        assert alarm_service.delete_alarms_for_medicine(member, "Aspirin") == 0
        assert Alarm.objects.count() == 3


class TestResetDailyTakenFlags:
    def test_clears_every_flag(self, member, other_member, medicine, prescribe, three_slots):
        prescribe(other_member, medicine)
        Alarm.objects.update(is_eaten=True)

        assert alarm_service.reset_daily_taken_flags() == 4
        assert not Alarm.objects.filter(is_eaten=True).exists()

    def test_second_run_is_noop(self, three_slots):
        Alarm.objects.update(is_eaten=True)
        alarm_service.reset_daily_taken_flags()

        assert alarm_service.reset_daily_taken_flags() == 0
