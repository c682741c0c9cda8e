# production/admin.py

from django.contrib import admin

from production.models import (
    ArmatureProductionLine,
    DailyReport,
    MaterialUsageLine,
    PbaProductionLine,
    PersonnelLine,
)


class _LineInline(admin.TabularInline):
    extra = 0

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class PbaLineInline(_LineInline):
    model = PbaProductionLine


class MaterialLineInline(_LineInline):
    model = MaterialUsageLine


class ArmatureLineInline(_LineInline):
    model = ArmatureProductionLine


class PersonnelLineInline(_LineInline):
    model = PersonnelLine


@admin.register(DailyReport)
class DailyReportAdmin(admin.ModelAdmin):
    """Read-only: submission must go through the workflow service."""

    list_display = ("report_date", "user", "status", "submitted_at")
    list_filter = ("status", "report_date")
    search_fields = ("user__email", "first_name", "last_name")
    inlines = [PbaLineInline, MaterialLineInline, ArmatureLineInline, PersonnelLineInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
