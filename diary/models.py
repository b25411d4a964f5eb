from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator


class Diary(models.Model):
    """
    A member's daily note on symptoms and pain while taking medication.
    """
    member = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='diaries')
    date = models.DateField()
    symptoms = models.JSONField(default=list, blank=True, help_text="List of symptom names")
    score = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(0), MaxValueValidator(10)],
        help_text="Pain score from 0 (none) to 10 (worst)"
    )
    record = models.TextField(blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Diary {self.date} - score {self.score}"

    class Meta:
        ordering = ['-date']
        verbose_name = "Diary"
        verbose_name_plural = "Diaries"
        constraints = [
            models.UniqueConstraint(fields=['member', 'date'], name='unique_member_diary_date'),
        ]
