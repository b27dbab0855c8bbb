# apps/availabilityapp/urls.py
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from apps.availabilityapp.views import AvailabilityWindowViewSet

router = DefaultRouter()
router.register(r"availability", AvailabilityWindowViewSet, basename="availability")

urlpatterns = [
    path("", include(router.urls)),
]
