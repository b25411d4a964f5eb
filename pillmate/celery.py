import os
from celery import Celery
from celery.schedules import crontab
from django.conf import settings

# Set the default Django settings module for the 'celery' program
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'pillmate.settings')

app = Celery('pillmate')

# Using a string means the worker doesn't have to serialize the configuration
# object to child processes
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django app configs
app.autodiscover_tasks(lambda: settings.INSTALLED_APPS)

MEDICATION_SETTINGS = settings.MEDICATION_SETTINGS

# Configure Celery beat schedule for periodic tasks
app.conf.beat_schedule = {
    # Medication tasks
    'record-missed-doses': {
        'task': 'medication.tasks.record_missed_doses',
        'schedule': crontab(
            hour=MEDICATION_SETTINGS['MISSED_DOSE_HOUR'],
            minute=MEDICATION_SETTINGS['MISSED_DOSE_MINUTE'],
        ),
    },
    'reset-daily-taken-flags': {
        'task': 'medication.tasks.reset_daily_taken_flags',
        'schedule': crontab(
            hour=MEDICATION_SETTINGS['DAILY_RESET_HOUR'],
            minute=MEDICATION_SETTINGS['DAILY_RESET_MINUTE'],
        ),
    },
}

# Configure task time limits
app.conf.task_time_limit = 600  # 10 minutes max runtime
app.conf.task_soft_time_limit = 540

# Configure task routes for different queues
app.conf.task_routes = {
    'medication.tasks.reset_daily_taken_flags': {'queue': 'high_priority', 'priority': 9},
    'medication.tasks.record_missed_doses': {'queue': 'high_priority', 'priority': 8},
}

# Configure result backend and expire time
app.conf.result_expires = 3600  # Results expire after 1 hour
