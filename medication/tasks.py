from celery import shared_task
import logging

logger = logging.getLogger(__name__)


@shared_task(autoretry_for=(Exception,), retry_backoff=True, max_retries=3)
def reset_daily_taken_flags():
    """
    Clear the taken flag of every alarm.
    Runs once a day at the configured local time; safe to retry or run twice.
    """
    # Import services here to avoid circular imports
    from .services.alarms import reset_daily_taken_flags as reset_flags

    logger.info("Resetting daily taken flags")

    updated = reset_flags()

    logger.info(f"Reset {updated} alarms")
    return f"Reset {updated} alarms"


@shared_task
def record_missed_doses():
    """
    Write today's still-pending alarms to the dose history as not taken.
    Runs shortly before the daily reset.
    """
    from .services.doses import record_missed_doses as record_missed

    logger.info("Recording missed doses")

    try:
        created = record_missed()
    except Exception as e:
        logger.error(f"Error recording missed doses: {str(e)}")
        raise

    logger.info(f"Recorded {created} missed doses")
    return f"Recorded {created} missed doses"
