# diary/services.py
import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Sequence

from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from .models import Diary

logger = logging.getLogger(__name__)


class DiaryNotFound(NotFound):
    default_detail = 'Diary not found.'
    default_code = 'diary_not_found'


class DiaryAlreadyExists(ValidationError):
    default_detail = 'A diary already exists for this date.'
    default_code = 'diary_exists'


@dataclass(frozen=True)
class PainInfo:
    date: date
    score: int


@dataclass(frozen=True)
class SymptomCount:
    symptom: str
    count: int


@dataclass(frozen=True)
class DiaryOverview:
    pains_per_day: List[PainInfo]
    duration: int
    total_info: List[SymptomCount]
    today: Optional[Diary]


def create_diary(member, date: date, symptoms: Sequence[str], score: int, record: str = '') -> Diary:
    try:
        with transaction.atomic():
            diary = Diary.objects.create(
                member=member,
                date=date,
                symptoms=list(symptoms),
                score=score,
                record=record,
            )
    except IntegrityError:
        raise DiaryAlreadyExists(f"A diary already exists for {date}")

    logger.info(f"Diary created for member {member.pk} on {date}")
    return diary


@transaction.atomic
def edit_diary(member, date: date, symptoms: Optional[Sequence[str]] = None,
               score: Optional[int] = None, record: Optional[str] = None) -> Diary:
    """Update the fields that were given; the others keep their values."""
    try:
        diary = Diary.objects.select_for_update().get(member=member, date=date)
    except Diary.DoesNotExist:
        raise DiaryNotFound(f"No diary for {date}")

    if symptoms is not None:
        diary.symptoms = list(symptoms)
    if score is not None:
        diary.score = score
    if record is not None:
        diary.record = record
    diary.save()

    logger.info(f"Diary updated for member {member.pk} on {date}")
    return diary


def show_diary(member, today: Optional[date] = None, days: int = 7) -> DiaryOverview:
    """
    Diary overview for the last ``days`` days ending today.

    ``duration`` counts the days since the member's first entry, both ends
    included, and is 0 when there are no entries at all.
    """
    today = today or timezone.localdate()
    window_start = today - timedelta(days=days - 1)

    entries = list(
        Diary.objects.filter(member=member, date__gte=window_start, date__lte=today).order_by('date')
    )

    first_entry = Diary.objects.filter(member=member).order_by('date').first()
    duration = (today - first_entry.date).days + 1 if first_entry and first_entry.date <= today else 0

    counts = Counter(symptom for entry in entries for symptom in entry.symptoms)
    total_info = [
        SymptomCount(symptom=symptom, count=count)
        for symptom, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    ]

    return DiaryOverview(
        pains_per_day=[PainInfo(date=entry.date, score=entry.score) for entry in entries],
        duration=duration,
        total_info=total_info,
        today=next((entry for entry in entries if entry.date == today), None),
    )
