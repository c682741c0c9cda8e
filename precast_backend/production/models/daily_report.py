# production/models/daily_report.py

"""
DAILY PRODUCTION REPORT

One report per (user, calendar date).

GUARANTEES:
- status moves draft -> submitted only (submission is one-way)
- a submitted report and its lines are frozen (save/delete raise)
- stock is touched ONLY at submission, by production.services.submission
"""

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

User = settings.AUTH_USER_MODEL


class DailyReport(models.Model):
    STATUS_DRAFT = "draft"
    STATUS_SUBMITTED = "submitted"

    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_SUBMITTED, "Submitted"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        related_name="daily_reports",
        help_text="Author of the report",
    )

    report_date = models.DateField()

    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)

    status = models.CharField(
        max_length=16, choices=STATUS_CHOICES, default=STATUS_DRAFT
    )

    observations = models.TextField(blank=True, default="")

    submitted_at = models.DateTimeField(null=True, blank=True)
    submitted_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="submitted_daily_reports",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-report_date", "-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "report_date"],
                name="uniq_daily_report_per_user_day",
            ),
        ]
        indexes = [
            models.Index(fields=["report_date"], name="prod_report_date_idx"),
            models.Index(fields=["status"], name="prod_report_status_idx"),
        ]

    @property
    def is_draft(self) -> bool:
        return self.status == self.STATUS_DRAFT

    def _is_persisted_submitted(self) -> bool:
        if self._state.adding:
            return False
        return (
            DailyReport.objects.filter(pk=self.pk, status=self.STATUS_SUBMITTED)
            .exists()
        )

    def save(self, *args, **kwargs):
        if self._is_persisted_submitted():
            raise ValidationError("Submitted reports are frozen and cannot be edited")
        if self._state.adding and self.status != self.STATUS_DRAFT:
            raise ValidationError("Reports are created as drafts")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        if self._is_persisted_submitted():
            raise ValidationError("Submitted reports cannot be deleted")
        return super().delete(*args, **kwargs)

    def __str__(self):
        return f"Report {self.report_date} ({self.status})"
