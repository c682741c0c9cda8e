# catalog/admin.py

from django.contrib import admin

from catalog.models import Armature, Client, Material, PbaProduct


@admin.register(PbaProduct)
class PbaProductAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "category", "unit_price", "is_active")
    list_filter = ("category", "is_active")
    search_fields = ("code", "name")


@admin.register(Material)
class MaterialAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "category", "unit", "unit_price", "is_active")
    list_filter = ("category", "unit", "is_active")
    search_fields = ("code", "name")


@admin.register(Armature)
class ArmatureAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "pba_product", "unit_price", "is_active")
    list_filter = ("is_active",)
    search_fields = ("code", "name")


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("name", "contact_person", "phone", "city", "is_active")
    list_filter = ("is_active", "city")
    search_fields = ("name", "contact_person", "email", "phone")
