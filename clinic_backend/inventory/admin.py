"""
=====================================================
PATH: inventory/admin.py
=====================================================

Admin rules:
- Medicines are never hard-deleted (order lines reference them).
- Bulk actions soft-delete / restore through the catalog service.
"""

from __future__ import annotations

from django.contrib import admin

from inventory.models import Medicine
from inventory.services.catalog import restore_medicine, soft_delete_medicine


@admin.register(Medicine)
class MedicineAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "name",
        "unit",
        "price",
        "quantity",
        "is_low_stock",
        "active",
        "updated_at",
    )
    list_filter = ("active", "updated_at")
    search_fields = ("name",)
    ordering = ("id",)
    readonly_fields = ("created_at", "updated_at")
    actions = ("deactivate_selected", "restore_selected")

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(boolean=True, description="Low stock")
    def is_low_stock(self, obj):
        return obj.is_low_stock

    @admin.action(description="Deactivate selected medicines (soft delete)")
    def deactivate_selected(self, request, queryset):
        for medicine in queryset:
            soft_delete_medicine(medicine)

    @admin.action(description="Restore selected medicines")
    def restore_selected(self, request, queryset):
        for medicine in queryset:
            restore_medicine(medicine)
