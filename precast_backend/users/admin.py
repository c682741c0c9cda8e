# users/admin.py

"""
USERS ADMIN

Staff accounts are email-based; role drives API capabilities
(permissions/roles.py), is_superuser grants all of them.
"""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from permissions.roles import capabilities_for
from users.models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    ordering = ("email",)
    list_display = ("email", "full_name", "role", "is_active", "is_superuser")
    list_filter = ("role", "is_active", "is_superuser")
    search_fields = ("email", "first_name", "last_name")
    readonly_fields = ("capability_list", "last_login", "created_at")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Report author block", {"fields": ("first_name", "last_name")}),
        ("Access", {"fields": ("role", "capability_list", "is_active", "is_staff", "is_superuser")}),
        ("Activity", {"fields": ("last_login", "created_at")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "first_name", "last_name", "role", "password1", "password2"),
            },
        ),
    )

    @admin.display(description="Capabilities")
    def capability_list(self, obj):
        return ", ".join(sorted(capabilities_for(obj))) or "-"
