# orders/admin.py

from django.contrib import admin

from orders.models import Order, OrderDetail


class OrderDetailInline(admin.TabularInline):
    model = OrderDetail
    extra = 0
    readonly_fields = ("journal",)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "facility", "user", "ordered_at")
    list_filter = ("facility",)
    inlines = [OrderDetailInline]


@admin.register(OrderDetail)
class OrderDetailAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "order",
        "product",
        "account",
        "quantity",
        "total",
        "state",
        "fulfilled_at",
        "journal",
    )
    list_filter = ("state", "product__facility")
    search_fields = ("account__account_number", "product__name")
    readonly_fields = ("journal", "created_at", "updated_at")
