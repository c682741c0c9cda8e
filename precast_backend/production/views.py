# production/views.py

"""
======================================================
PATH: production/views.py
======================================================
DAILY REPORT VIEWSET

Purpose:
- CRUD over DRAFT daily reports (create / replace / discard).
- submit/  runs the submission workflow (stock movements + freeze).
- preview/ returns the plain-text daily summary.

Security:
- Requires reports.create
- Authors see their own reports; reports.view_all sees (and may submit) all
======================================================
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.api import workflow_error_response
from core.exceptions import WorkflowError
from permissions.roles import CAP_REPORTS_CREATE, HasCapability
from production.filters import DailyReportFilter
from production.serializers import (
    DailyReportInputSerializer,
    DailyReportSerializer,
    DailyReportUpdateSerializer,
    ReportPreviewSerializer,
)
from production.services.preview import render_report_preview
from production.services.reports import (
    create_report,
    discard_report,
    get_report_for,
    reports_visible_to,
    update_report,
)
from production.services.submission import submit_report


class DailyReportViewSet(viewsets.GenericViewSet):
    serializer_class = DailyReportSerializer
    filterset_class = DailyReportFilter
    required_capability = CAP_REPORTS_CREATE

    def get_permissions(self):
        return [IsAuthenticated(), HasCapability()]

    def get_queryset(self):
        return reports_visible_to(self.request.user).prefetch_related(
            "pba_lines__product",
            "material_lines__material",
            "armature_lines__armature",
            "personnel_lines",
        )

    def _detail(self, report, http_status=status.HTTP_200_OK):
        fresh = self.get_queryset().get(pk=report.pk)
        return Response(DailyReportSerializer(fresh).data, status=http_status)

    # ======================================================
    # LIST / RETRIEVE
    # ======================================================

    def list(self, request):
        qs = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(DailyReportSerializer(page, many=True).data)
        return Response(DailyReportSerializer(qs, many=True).data)

    def retrieve(self, request, pk=None):
        try:
            report = get_report_for(actor=request.user, report_id=pk)
        except WorkflowError as exc:
            return workflow_error_response(exc)
        return self._detail(report)

    # ======================================================
    # DRAFT WRITES
    # ======================================================

    @extend_schema(request=DailyReportInputSerializer, responses={201: DailyReportSerializer})
    def create(self, request):
        ser = DailyReportInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            report = create_report(actor=request.user, **ser.validated_data)
        except WorkflowError as exc:
            return workflow_error_response(exc)

        return self._detail(report, http_status=status.HTTP_201_CREATED)

    @extend_schema(request=DailyReportUpdateSerializer, responses={200: DailyReportSerializer})
    def update(self, request, pk=None):
        ser = DailyReportUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            report = update_report(report_id=pk, actor=request.user, **ser.validated_data)
        except WorkflowError as exc:
            return workflow_error_response(exc)

        return self._detail(report)

    def destroy(self, request, pk=None):
        try:
            discard_report(report_id=pk, actor=request.user)
        except WorkflowError as exc:
            return workflow_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ======================================================
    # WORKFLOW
    # ======================================================

    @extend_schema(
        request=None,
        responses={200: serializers.DictField()},
        description="Submit a draft report: applies its stock movements and freezes it.",
    )
    @action(detail=True, methods=["post"], url_path="submit")
    def submit(self, request, pk=None):
        try:
            result = submit_report(report_id=pk, actor=request.user)
        except WorkflowError as exc:
            return workflow_error_response(exc)

        return Response(
            {
                "report_id": str(result.report.id),
                "status": result.report.status,
                "movements": result.movement_count,
                "clamped_materials": [
                    {
                        "material": r.movement.material.code,
                        "requested": str(r.quantity),
                        "applied": str(r.applied_quantity),
                    }
                    for r in result.clamped
                ],
                "detail": "Report submitted successfully.",
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(responses={200: ReportPreviewSerializer})
    @action(detail=True, methods=["get"], url_path="preview")
    def preview(self, request, pk=None):
        try:
            report = get_report_for(actor=request.user, report_id=pk)
        except WorkflowError as exc:
            return workflow_error_response(exc)

        return Response({"report_id": str(report.id), "preview": render_report_preview(report)})
