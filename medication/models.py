from datetime import timedelta

from django.db import models
from django.conf import settings
from django.utils import timezone
from django.core.validators import MinValueValidator

from .categories import normalize_category


class Medicine(models.Model):
    """
    Catalogue entry for a medicine that can be prescribed to members.
    """
    name = models.CharField(max_length=255, unique=True)
    classification = models.CharField(
        max_length=255, blank=True, default='',
        help_text="Raw classification label from the drug catalogue"
    )
    image_url = models.URLField(blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name

    @property
    def category(self):
        """User-facing category derived from the raw classification."""
        return normalize_category(self.classification)

    class Meta:
        ordering = ['name']
        verbose_name = "Medicine"
        verbose_name_plural = "Medicines"


class Prescription(models.Model):
    """
    A medicine assigned to a member: dosage per intake, intakes per day,
    duration in days and start date.
    """
    member = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='prescriptions')
    medicine = models.ForeignKey(Medicine, on_delete=models.CASCADE, related_name='prescriptions')

    amount = models.PositiveSmallIntegerField(default=1, help_text="Dosage taken per intake")
    times = models.PositiveSmallIntegerField(default=1, help_text="Intakes per day")
    day = models.PositiveIntegerField(validators=[MinValueValidator(1)], help_text="Duration in days")
    start_date = models.DateField(default=timezone.localdate)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.medicine.name} for {self.member}"

    @property
    def end_date(self):
        return self.start_date + timedelta(days=self.day)

    @property
    def scheduled_amount(self):
        """Total doses expected over the whole prescription."""
        return self.amount * self.times * self.day

    def is_active(self, today=None):
        """A prescription stays active up to and including its end date."""
        today = today or timezone.localdate()
        return self.end_date >= today

    def days_remaining(self, today=None):
        """Days left until the end date, never negative."""
        today = today or timezone.localdate()
        return max(0, (self.end_date - today).days)

    class Meta:
        ordering = ['start_date', 'id']
        verbose_name = "Prescription"
        verbose_name_plural = "Prescriptions"
        constraints = [
            models.UniqueConstraint(fields=['member', 'medicine'], name='unique_member_medicine'),
        ]


class Alarm(models.Model):
    """
    One daily reminder slot for a prescription. The taken flag is cleared
    every day; the history lives in DoseRecord.
    """
    prescription = models.ForeignKey(Prescription, on_delete=models.CASCADE, related_name='alarms')
    time = models.TimeField(help_text="Time of day the reminder fires")
    is_available = models.BooleanField(default=True, help_text="Reminder switched on")
    is_eaten = models.BooleanField(default=False, help_text="Dose taken today")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.prescription.medicine.name} at {self.time:%H:%M}"

    @property
    def member(self):
        return self.prescription.member

    @property
    def medicine(self):
        return self.prescription.medicine

    class Meta:
        # Position within a prescription is insertion order
        ordering = ['id']
        verbose_name = "Alarm"
        verbose_name_plural = "Alarms"


class DoseRecord(models.Model):
    """
    Historical fact of whether a scheduled dose was taken on a given date.
    """
    member = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='dose_records')
    medicine = models.ForeignKey(Medicine, on_delete=models.CASCADE, related_name='dose_records')
    alarm = models.ForeignKey(
        Alarm,
        on_delete=models.SET_NULL,
        related_name='dose_records',
        null=True, blank=True
    )
    date = models.DateField()
    is_eaten = models.BooleanField(default=False)

    recorded_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        status = "Taken" if self.is_eaten else "Missed"
        return f"{self.medicine.name} - {self.date} - {status}"

    class Meta:
        ordering = ['-date', 'id']
        verbose_name = "Dose Record"
        verbose_name_plural = "Dose Records"
        constraints = [
            models.UniqueConstraint(fields=['alarm', 'date'], name='unique_alarm_date'),
        ]
        indexes = [
            models.Index(fields=['member', 'date'], name='idx_dose_member_date'),
        ]
