from rest_framework import serializers

from .models import Diary

# Longest window the diary overview can cover
MAX_OVERVIEW_DAYS = 366


class DiarySerializer(serializers.ModelSerializer):
    """Serializer for a single diary entry."""
    symptoms = serializers.ListField(child=serializers.CharField(max_length=100), required=False)

    class Meta:
        model = Diary
        fields = ('id', 'date', 'symptoms', 'score', 'record', 'created_at', 'updated_at')
        read_only_fields = ('id', 'created_at', 'updated_at')
        # Uniqueness per member is enforced by the service
        validators = []


class DiaryQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(min_value=1, max_value=MAX_OVERVIEW_DAYS, default=7)


class EditDiarySerializer(serializers.Serializer):
    date = serializers.DateField()
    symptoms = serializers.ListField(child=serializers.CharField(max_length=100), required=False)
    score = serializers.IntegerField(min_value=0, max_value=10, required=False)
    record = serializers.CharField(allow_blank=True, required=False)


class PainInfoSerializer(serializers.Serializer):
    date = serializers.DateField()
    score = serializers.IntegerField()


class SymptomCountSerializer(serializers.Serializer):
    symptom = serializers.CharField()
    count = serializers.IntegerField()


class DiaryOverviewSerializer(serializers.Serializer):
    """Serializer for the diary screen."""
    pains_per_day = PainInfoSerializer(many=True)
    duration = serializers.IntegerField()
    total_info = SymptomCountSerializer(many=True)
    today = DiarySerializer(allow_null=True)
