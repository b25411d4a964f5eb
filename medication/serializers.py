from rest_framework import serializers

from .models import Medicine, Prescription, DoseRecord


class AlarmInfoSerializer(serializers.Serializer):
    """Serializer for an alarm of an active prescription."""
    id = serializers.IntegerField()
    name = serializers.CharField()
    category = serializers.CharField()
    amount = serializers.IntegerField()
    times_per_day = serializers.IntegerField()
    day = serializers.IntegerField()
    time = serializers.TimeField(format='%H:%M')
    is_available = serializers.BooleanField()
    is_eaten = serializers.BooleanField()


class UpcomingAlarmSerializer(serializers.Serializer):
    medicine_name = serializers.CharField()
    category = serializers.CharField()
    time = serializers.TimeField(format='%H:%M')


class MissedAlarmSerializer(serializers.Serializer):
    name = serializers.CharField()
    time = serializers.TimeField(format='%H:%M')


class MedicineAlarmRecordSerializer(serializers.Serializer):
    alarm_id = serializers.IntegerField()
    medicine_id = serializers.IntegerField()
    name = serializers.CharField()
    time = serializers.TimeField(format='%H:%M')
    category = serializers.CharField()
    is_eaten = serializers.BooleanField()


class RemainingMedicineSerializer(serializers.Serializer):
    name = serializers.CharField()
    category = serializers.CharField()
    day = serializers.IntegerField()


class AdherenceRateSerializer(serializers.Serializer):
    """Serializer for a per-medicine adherence rate; the empty record has no name."""
    medicine_name = serializers.CharField(allow_null=True)
    taken = serializers.IntegerField()
    scheduled = serializers.IntegerField()
    rate = serializers.FloatField()


class AdherenceSummarySerializer(serializers.Serializer):
    rates = AdherenceRateSerializer(many=True)
    best_record = AdherenceRateSerializer()
    worst_record = AdherenceRateSerializer()


class MonthlyComplianceSerializer(serializers.Serializer):
    year = serializers.IntegerField()
    month = serializers.IntegerField()
    days_in_month = serializers.IntegerField()
    taken_days = serializers.IntegerField()
    uneaten_days = serializers.IntegerField()
    rate = serializers.IntegerField()
    grade = serializers.CharField()


class CalendarDaySerializer(serializers.Serializer):
    date = serializers.DateField()
    taken = serializers.IntegerField()


class MainResponseSerializer(serializers.Serializer):
    """Serializer for the home screen summary."""
    upcoming_alarm = UpcomingAlarmSerializer(allow_null=True)
    missed_alarms = MissedAlarmSerializer(many=True)
    medicine_alarm_records = MedicineAlarmRecordSerializer(many=True)
    remaining_medicine = RemainingMedicineSerializer(many=True)
    best_record = AdherenceRateSerializer()
    worst_record = AdherenceRateSerializer()


class AvailabilitySerializer(serializers.Serializer):
    is_available = serializers.BooleanField()


class ScheduleSerializer(serializers.Serializer):
    """Input for replacing a medicine's daily alarm times."""
    medicine_name = serializers.CharField(max_length=255)
    time_slots = serializers.ListField(child=serializers.TimeField(), allow_empty=True)


class MonthQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=1, max_value=9999)
    month = serializers.IntegerField(min_value=1, max_value=12)


class MedicineSerializer(serializers.ModelSerializer):
    """Serializer for medicines."""
    category = serializers.CharField(read_only=True)

    class Meta:
        model = Medicine
        fields = ('id', 'name', 'classification', 'category', 'image_url')


class PrescriptionCreateSerializer(serializers.Serializer):
    """Input for assigning a medicine to the requesting member."""
    medicine_name = serializers.CharField(max_length=255)
    amount = serializers.IntegerField(min_value=1)
    day = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField(required=False)
    time_slots = serializers.ListField(child=serializers.TimeField(), min_length=1)

    def validate_medicine_name(self, value):
        try:
            medicine = Medicine.objects.get(name=value)
        except Medicine.DoesNotExist:
            raise serializers.ValidationError(f"Unknown medicine: {value}")

        member = self.context['request'].user
        if Prescription.objects.filter(member=member, medicine=medicine).exists():
            raise serializers.ValidationError(f"{value} is already prescribed")
        return value


class PrescriptionSerializer(serializers.ModelSerializer):
    """Serializer for prescriptions."""
    medicine_details = MedicineSerializer(source='medicine', read_only=True)
    end_date = serializers.DateField(read_only=True)
    days_remaining = serializers.SerializerMethodField()

    class Meta:
        model = Prescription
        fields = ('id', 'medicine', 'medicine_details', 'amount', 'times', 'day',
                  'start_date', 'end_date', 'days_remaining', 'created_at')
        read_only_fields = fields

    def get_days_remaining(self, obj):
        return obj.days_remaining()


class DoseRecordSerializer(serializers.ModelSerializer):
    """Serializer for dose history entries."""
    medicine_name = serializers.CharField(source='medicine.name', read_only=True)

    class Meta:
        model = DoseRecord
        fields = ('id', 'medicine', 'medicine_name', 'alarm', 'date', 'is_eaten', 'recorded_at')
        read_only_fields = fields
