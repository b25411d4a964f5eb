from rest_framework import viewsets, status, filters, mixins
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView
from rest_framework import serializers as drf_serializers
from django_filters.rest_framework import DjangoFilterBackend

from .models import Medicine, Prescription, DoseRecord
from .serializers import (
    AlarmInfoSerializer, UpcomingAlarmSerializer, MissedAlarmSerializer,
    AvailabilitySerializer, ScheduleSerializer, DoseRecordSerializer,
    PrescriptionSerializer, PrescriptionCreateSerializer, AdherenceSummarySerializer,
    MonthlyComplianceSerializer, MonthQuerySerializer, CalendarDaySerializer,
    MainResponseSerializer,
)
from .filters import DoseRecordFilter, PrescriptionFilter
from .services import alarms as alarm_service
from .services import adherence as adherence_service
from .services.doses import record_dose, register_prescription
from .services.dashboard import show_main


def _current_time_param(request):
    """Optional ?current_time=HH:MM override, used by clients in other time zones."""
    value = request.query_params.get('current_time')
    if not value:
        return None
    return drf_serializers.TimeField().to_internal_value(value)


class MainView(APIView):
    """Home screen summary for the requesting member."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        main = show_main(request.user, current_time=_current_time_param(request))
        return Response(MainResponseSerializer(main).data)


class AlarmViewSet(viewsets.ViewSet):
    """API viewset for the requesting member's alarms."""
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    def list(self, request):
        alarms = alarm_service.list_active_alarms(request.user)
        return Response(AlarmInfoSerializer(alarms, many=True).data)

    @action(detail=False, methods=['get'])
    def upcoming(self, request):
        """Next alarm to remind the member about; 404 when nothing is pending."""
        upcoming = alarm_service.find_upcoming_alarm(request.user, _current_time_param(request))
        return Response(UpcomingAlarmSerializer(upcoming).data)

    @action(detail=False, methods=['get'])
    def missed(self, request):
        missed = alarm_service.list_missed_alarms(request.user, _current_time_param(request))
        return Response(MissedAlarmSerializer(missed, many=True).data)

    @action(detail=True, methods=['patch'])
    def availability(self, request, pk=None):
        """Switch an alarm on or off."""
        serializer = AvailabilitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        alarm_service.set_availability(request.user, pk, serializer.validated_data['is_available'])
        return Response({"detail": "Alarm availability updated."})

    @action(detail=True, methods=['post'])
    def take(self, request, pk=None):
        """Mark the alarm's dose as taken today."""
        record = record_dose(request.user, pk)
        return Response(DoseRecordSerializer(record).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['put', 'delete'])
    def schedule(self, request):
        """Replace a medicine's daily alarm times, or delete all of its alarms."""
        if request.method == 'DELETE':
            medicine_name = request.query_params.get('medicine_name')
            if not medicine_name:
                return Response(
                    {"detail": "medicine_name is required"},
                    status=status.HTTP_400_BAD_REQUEST
                )
            deleted = alarm_service.delete_alarms_for_medicine(request.user, medicine_name)
            return Response({"detail": f"Deleted {deleted} alarms."})

        serializer = ScheduleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        alarm_service.resize_alarms_for_schedule(
            request.user,
            serializer.validated_data['medicine_name'],
            serializer.validated_data['time_slots'],
        )
        alarms = alarm_service.list_active_alarms(request.user)
        return Response(AlarmInfoSerializer(alarms, many=True).data)


class PrescriptionViewSet(mixins.CreateModelMixin, viewsets.ReadOnlyModelViewSet):
    """API viewset for the requesting member's prescriptions."""
    serializer_class = PrescriptionSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = PrescriptionFilter
    ordering_fields = ['start_date', 'created_at']
    ordering = ['start_date']
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        # Check if this is a schema generation request
        if getattr(self, 'swagger_fake_view', False):
            return Prescription.objects.none()
        return Prescription.objects.filter(member=self.request.user).select_related('medicine')

    def create(self, request, *args, **kwargs):
        serializer = PrescriptionCreateSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        prescription = register_prescription(
            request.user,
            Medicine.objects.get(name=data['medicine_name']),
            amount=data['amount'],
            day=data['day'],
            time_slots=data['time_slots'],
            start_date=data.get('start_date'),
        )
        return Response(PrescriptionSerializer(prescription).data, status=status.HTTP_201_CREATED)


class AdherenceViewSet(viewsets.ViewSet):
    """API viewset for adherence statistics."""
    permission_classes = [IsAuthenticated]

    def list(self, request):
        rates = adherence_service.compute_adherence_rates(request.user)
        best, worst = adherence_service.best_and_worst(request.user)
        summary = {'rates': rates, 'best_record': best, 'worst_record': worst}
        return Response(AdherenceSummarySerializer(summary).data)

    @action(detail=False, methods=['get'])
    def monthly(self, request):
        """Compliance grade for the current month."""
        compliance = adherence_service.monthly_compliance(request.user)
        return Response(MonthlyComplianceSerializer(compliance).data)

    @action(detail=False, methods=['get'])
    def calendar(self, request):
        """Doses taken per day for ?year=&month=."""
        query = MonthQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        counts = adherence_service.monthly_intake_calendar(
            request.user, query.validated_data['year'], query.validated_data['month']
        )
        days = [{'date': day, 'taken': taken} for day, taken in counts.items()]
        return Response(CalendarDaySerializer(days, many=True).data)


class DoseRecordViewSet(viewsets.ReadOnlyModelViewSet):
    """API viewset for the requesting member's dose history."""
    serializer_class = DoseRecordSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = DoseRecordFilter
    ordering_fields = ['date', 'recorded_at']
    ordering = ['-date']
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        if getattr(self, 'swagger_fake_view', False):
            return DoseRecord.objects.none()
        return DoseRecord.objects.filter(member=self.request.user).select_related('medicine')
