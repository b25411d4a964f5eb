"""Tests for diary.services."""

from datetime import timedelta

import pytest

from diary.models import Diary
from diary.services import DiaryAlreadyExists, DiaryNotFound, create_diary, edit_diary, show_diary

from .conftest import TODAY

pytestmark = pytest.mark.django_db


class TestCreateDiary:
    def test_create(self, member):
        diary = create_diary(member, TODAY, ["headache"], 4, "slept badly")

        assert (diary.date, diary.symptoms, diary.score) == (TODAY, ["headache"], 4)

    def test_duplicate_date(self, member):
        create_diary(member, TODAY, [], 1)

        with pytest.raises(DiaryAlreadyExists):
            create_diary(member, TODAY, [], 2)
        assert Diary.objects.count() == 1

    def test_same_date_for_different_members(self, member, other_member):
        create_diary(member, TODAY, [], 1)
        create_diary(other_member, TODAY, [], 1)

        assert Diary.objects.count() == 2


class TestEditDiary:
    def test_partial_update(self, member):
        create_diary(member, TODAY, ["cough"], 3, "note")

        diary = edit_diary(member, TODAY, score=6)

        assert (diary.symptoms, diary.score, diary.record) == (["cough"], 6, "note")

    def test_missing(self, member):
        with pytest.raises(DiaryNotFound):
            edit_diary(member, TODAY, score=6)

    def test_other_members_diary(self, member, other_member):
        create_diary(other_member, TODAY, [], 1)

        with pytest.raises(DiaryNotFound):
            edit_diary(member, TODAY, score=6)


class TestShowDiary:
    def test_overview(self, member):
        create_diary(member, TODAY - timedelta(days=20), ["fever"], 8)
        create_diary(member, TODAY - timedelta(days=2), ["cough", "fever"], 5)
        create_diary(member, TODAY - timedelta(days=1), ["cough"], 4)
        create_diary(member, TODAY, ["cough", "headache"], 2)

        overview = show_diary(member, today=TODAY)

        assert [(p.date, p.score) for p in overview.pains_per_day] == [
            (TODAY - timedelta(days=2), 5),
            (TODAY - timedelta(days=1), 4),
            (TODAY, 2),
        ]
        assert overview.duration == 21
        assert [(s.symptom, s.count) for s in overview.total_info] == [
            ("cough", 3), ("fever", 1), ("headache", 1),
        ]
        assert overview.today.score == 2

    def test_no_entry_today(self, member):
        create_diary(member, TODAY - timedelta(days=1), [], 3)

        overview = show_diary(member, today=TODAY)

        assert overview.today is None
        assert overview.duration == 2

    def test_empty(self, member):
        overview = show_diary(member, today=TODAY)

        assert overview.pains_per_day == []
        assert overview.duration == 0
        assert overview.total_info == []
