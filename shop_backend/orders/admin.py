# orders/admin.py

"""
ORDERS ADMIN

Orders are financial snapshots: admin is read-only except for the status
field, and status changes go through the workflow service so cancellation
restocks exactly once.
"""

from django.contrib import admin, messages

from backend.exceptions import DomainError
from orders.models import Order, OrderItem
from orders.services.order_lifecycle import update_order_status


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ("product", "quantity", "price", "created_at")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "status", "total", "created_at")
    list_filter = ("status",)
    search_fields = ("id", "user__email")
    ordering = ("-created_at",)
    inlines = [OrderItemInline]
    readonly_fields = (
        "user",
        "subtotal",
        "shipping",
        "tax",
        "total",
        "shipping_address",
        "payment_method",
        "stock_restored_at",
        "created_at",
        "updated_at",
    )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def save_model(self, request, obj, form, change):
        if not change or "status" not in form.changed_data:
            return
        try:
            update_order_status(order_id=obj.id, new_status=obj.status)
        except DomainError as exc:
            self.message_user(request, str(exc), level=messages.ERROR)
