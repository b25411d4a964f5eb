from django.contrib import admin
from .models import Diary


@admin.register(Diary)
class DiaryAdmin(admin.ModelAdmin):
    """Admin interface for symptom diaries."""
    list_display = ('member', 'date', 'score')
    list_filter = ('date',)
    search_fields = ('member__username', 'record')
    readonly_fields = ('created_at', 'updated_at')
    date_hierarchy = 'date'
