from django.contrib import admin
from .models import Medicine, Prescription, Alarm, DoseRecord


class AlarmInline(admin.TabularInline):
    """Inline admin for a prescription's alarms."""
    model = Alarm
    extra = 0
    fields = ('time', 'is_available', 'is_eaten')


@admin.register(Medicine)
class MedicineAdmin(admin.ModelAdmin):
    """Admin interface for medicines."""
    list_display = ('name', 'classification', 'category_display')
    search_fields = ('name', 'classification')

    def category_display(self, obj):
        return obj.category
    category_display.short_description = 'Category'


@admin.register(Prescription)
class PrescriptionAdmin(admin.ModelAdmin):
    """Admin interface for prescriptions."""
    list_display = ('medicine', 'member', 'amount', 'times', 'day', 'start_date', 'end_date')
    list_filter = ('start_date',)
    search_fields = ('medicine__name', 'member__username', 'member__email')
    readonly_fields = ('created_at', 'updated_at')
    date_hierarchy = 'start_date'
    inlines = [AlarmInline]


@admin.register(Alarm)
class AlarmAdmin(admin.ModelAdmin):
    """Admin interface for alarms."""
    list_display = ('prescription', 'time', 'is_available', 'is_eaten')
    list_filter = ('is_available', 'is_eaten')
    search_fields = ('prescription__medicine__name', 'prescription__member__username')
    actions = ['reset_taken_flags']

    def reset_taken_flags(self, request, queryset):
        updated = queryset.update(is_eaten=False)
        self.message_user(request, f"{updated} alarms reset.")
    reset_taken_flags.short_description = "Reset taken flag"


@admin.register(DoseRecord)
class DoseRecordAdmin(admin.ModelAdmin):
    """Admin interface for dose records."""
    list_display = ('medicine', 'member', 'date', 'is_eaten', 'recorded_at')
    list_filter = ('is_eaten', 'date')
    search_fields = ('medicine__name', 'member__username')
    date_hierarchy = 'date'
