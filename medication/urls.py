from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import (
    MainView, AlarmViewSet, PrescriptionViewSet, AdherenceViewSet, DoseRecordViewSet
)


router = DefaultRouter()
router.register(r'alarms', AlarmViewSet, basename='alarm')
router.register(r'prescriptions', PrescriptionViewSet, basename='prescription')
router.register(r'adherence', AdherenceViewSet, basename='adherence')
router.register(r'dose-records', DoseRecordViewSet, basename='doserecord')

urlpatterns = [
    path('', include(router.urls)),
    path('main/', MainView.as_view(), name='main'),
]
