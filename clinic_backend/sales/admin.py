# sales/admin.py

from django.contrib import admin

from sales.models import Order, OrderLine


# ======================================================
# ORDER ADMIN (READ-ONLY: orders come only from checkout)
# ======================================================


class OrderLineInline(admin.TabularInline):
    model = OrderLine
    extra = 0
    can_delete = False
    fields = ("position", "medicine", "quantity", "unit_price", "line_total")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "invoice_no",
        "total_amount",
        "created_by",
        "created_at",
    )
    readonly_fields = (
        "invoice_no",
        "total_amount",
        "created_by",
        "created_at",
    )
    search_fields = ("invoice_no",)
    list_filter = ("created_at",)
    inlines = [OrderLineInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
