# medication/services/adherence.py
import calendar
import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional

from django.db.models import Count
from django.utils import timezone

from ..models import DoseRecord, Prescription

logger = logging.getLogger(__name__)

# Lower bound of each compliance band, highest first
GRADE_THRESHOLDS = [
    (95, 'excellent'),
    (90, 'good'),
    (70, 'average'),
    (50, 'poor'),
]
LOWEST_GRADE = 'very poor'


@dataclass(frozen=True)
class AdherenceRate:
    medicine_name: Optional[str]
    taken: int
    scheduled: int
    rate: float

    @classmethod
    def empty(cls) -> 'AdherenceRate':
        return cls(medicine_name=None, taken=0, scheduled=0, rate=0.0)

    @property
    def is_empty(self) -> bool:
        return self.medicine_name is None


@dataclass(frozen=True)
class MonthlyCompliance:
    year: int
    month: int
    days_in_month: int
    taken_days: int
    uneaten_days: int
    rate: int
    grade: str


@dataclass(frozen=True)
class RemainingMedicine:
    name: str
    category: str
    day: int


def _rate(taken: int, scheduled: int) -> float:
    if scheduled == 0:
        return 0.0
    return taken / scheduled


def count_taken_doses(member, medicine) -> int:
    return DoseRecord.objects.filter(member=member, medicine=medicine, is_eaten=True).count()


def compute_adherence_rates(member) -> List[AdherenceRate]:
    """
    Taken versus scheduled doses for each of the member's prescriptions,
    highest rate first. Prescriptions with nothing scheduled rate 0.
    """
    prescriptions = Prescription.objects.filter(member=member).select_related('medicine')

    rates = []
    for prescription in prescriptions:
        scheduled = prescription.scheduled_amount
        taken = count_taken_doses(member, prescription.medicine)
        rates.append(AdherenceRate(
            medicine_name=prescription.medicine.name,
            taken=taken,
            scheduled=scheduled,
            rate=_rate(taken, scheduled),
        ))

    return sorted(rates, key=lambda entry: entry.rate, reverse=True)


def _best(rates: List[AdherenceRate]) -> AdherenceRate:
    return next((entry for entry in rates if entry.taken != 0), AdherenceRate.empty())


def _worst(rates: List[AdherenceRate], best: AdherenceRate) -> AdherenceRate:
    if not rates:
        return AdherenceRate.empty()

    worst = rates[-1]
    # Best and worst must never point at the same medicine
    if worst == best:
        worst = rates[-2] if len(rates) > 1 else AdherenceRate.empty()
    return worst


def best_record(member) -> AdherenceRate:
    """Highest-rate medicine the member has actually taken, or the empty record."""
    return _best(compute_adherence_rates(member))


def worst_record(member) -> AdherenceRate:
    """Lowest-rate medicine, skipping the one already reported as best."""
    rates = compute_adherence_rates(member)
    return _worst(rates, _best(rates))


def best_and_worst(member):
    """Both records from a single pass over the rates."""
    rates = compute_adherence_rates(member)
    best = _best(rates)
    return best, _worst(rates, best)


def grade_for_rate(rate: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if rate >= threshold:
            return grade
    return LOWEST_GRADE


def compliance_rate(days_in_month: int, uneaten_days: int) -> int:
    """100 minus the share of uneaten days, rounded half up."""
    return 100 - math.floor(100 / days_in_month * uneaten_days + 0.5)


def count_uneaten_days(member, start: date, end: date) -> int:
    """Distinct dates in [start, end] with a missed dose and no dose taken."""
    records = DoseRecord.objects.filter(member=member, date__gte=start, date__lte=end).order_by()
    taken_dates = records.filter(is_eaten=True).values('date')
    return (
        records.filter(is_eaten=False)
        .exclude(date__in=taken_dates)
        .values('date')
        .distinct()
        .count()
    )


def count_taken_days(member, start: date, end: date) -> int:
    """Distinct dates in [start, end] with at least one dose taken."""
    return (
        DoseRecord.objects.filter(member=member, is_eaten=True, date__gte=start, date__lte=end)
        .order_by()
        .values('date')
        .distinct()
        .count()
    )


def monthly_compliance(member, today: Optional[date] = None) -> MonthlyCompliance:
    """
    Compliance for the current month, from the first of the month up to
    yesterday. On the first day of a month the window is empty and the
    member scores 100.
    """
    today = today or timezone.localdate()
    month_start = today.replace(day=1)
    yesterday = today - timedelta(days=1)
    days_in_month = calendar.monthrange(today.year, today.month)[1]

    if yesterday < month_start:
        uneaten_days = taken_days = 0
    else:
        uneaten_days = count_uneaten_days(member, month_start, yesterday)
        taken_days = count_taken_days(member, month_start, yesterday)

    rate = compliance_rate(days_in_month, uneaten_days)
    logger.info(f"Monthly compliance for member {member.pk}: {rate}% over {uneaten_days} uneaten days")

    return MonthlyCompliance(
        year=today.year,
        month=today.month,
        days_in_month=days_in_month,
        taken_days=taken_days,
        uneaten_days=uneaten_days,
        rate=rate,
        grade=grade_for_rate(rate),
    )


def monthly_intake_calendar(member, year: int, month: int) -> Dict[date, int]:
    """Number of doses taken on each day of the month; days without doses map to 0."""
    days_in_month = calendar.monthrange(year, month)[1]
    first = date(year, month, 1)
    last = date(year, month, days_in_month)

    counts = (
        DoseRecord.objects.filter(member=member, is_eaten=True, date__gte=first, date__lte=last)
        .order_by()
        .values('date')
        .annotate(taken=Count('id'))
    )
    calendar_counts = {first + timedelta(days=offset): 0 for offset in range(days_in_month)}
    for row in counts:
        calendar_counts[row['date']] = row['taken']
    return calendar_counts


def remaining_days(prescription: Prescription, today: Optional[date] = None) -> int:
    return prescription.days_remaining(today)


def list_remaining_medicine(member, today: Optional[date] = None) -> List[RemainingMedicine]:
    today = today or timezone.localdate()
    prescriptions = Prescription.objects.filter(member=member).select_related('medicine')
    return [
        RemainingMedicine(
            name=prescription.medicine.name,
            category=prescription.medicine.category,
            day=remaining_days(prescription, today),
        )
        for prescription in prescriptions
    ]
