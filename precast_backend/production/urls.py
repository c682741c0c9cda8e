# production/urls.py

"""
PRODUCTION URLS

Provides (under /api/production/):
- reports/                 list / create
- reports/<uuid>/          retrieve / replace (PUT) / discard (DELETE)
- reports/<uuid>/submit/   POST
- reports/<uuid>/preview/  GET
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from production.views import DailyReportViewSet

router = DefaultRouter()

router.register(r"reports", DailyReportViewSet, basename="daily-reports")

urlpatterns = [
    path("", include(router.urls)),
]
