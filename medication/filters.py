# medication/filters.py
from django_filters import rest_framework as filters
from .models import DoseRecord, Prescription


class DoseRecordFilter(filters.FilterSet):
    medicine = filters.NumberFilter(field_name='medicine_id')
    medicine_name = filters.CharFilter(field_name='medicine__name')
    start_date = filters.DateFilter(field_name='date', lookup_expr='gte')
    end_date = filters.DateFilter(field_name='date', lookup_expr='lte')

    class Meta:
        model = DoseRecord
        fields = ['medicine', 'medicine_name', 'is_eaten', 'start_date', 'end_date']


class PrescriptionFilter(filters.FilterSet):
    medicine_name = filters.CharFilter(field_name='medicine__name', lookup_expr='icontains')

    class Meta:
        model = Prescription
        fields = ['medicine_name']
