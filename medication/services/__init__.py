# medication/services/__init__.py
from .alarms import (
    AlarmNotFound,
    PrescriptionNotFound,
    delete_alarms_for_medicine,
    find_upcoming_alarm,
    list_active_alarms,
    list_missed_alarms,
    list_today_records,
    reset_daily_taken_flags,
    resize_alarms_for_schedule,
    set_availability,
)
from .adherence import (
    best_record,
    compute_adherence_rates,
    monthly_compliance,
    monthly_intake_calendar,
    remaining_days,
    worst_record,
)
from .doses import record_dose, record_missed_doses, register_prescription
from .dashboard import show_main

# Export the main functions for external use
__all__ = [
    'AlarmNotFound',
    'PrescriptionNotFound',
    'best_record',
    'compute_adherence_rates',
    'delete_alarms_for_medicine',
    'find_upcoming_alarm',
    'list_active_alarms',
    'list_missed_alarms',
    'list_today_records',
    'monthly_compliance',
    'monthly_intake_calendar',
    'record_dose',
    'record_missed_doses',
    'register_prescription',
    'remaining_days',
    'reset_daily_taken_flags',
    'resize_alarms_for_schedule',
    'set_availability',
    'show_main',
    'worst_record',
]
