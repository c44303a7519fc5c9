# facilities/admin.py

from django.contrib import admin

from facilities.models import Facility, FacilityAccount, FundingAccount, Product


@admin.register(Facility)
class FacilityAdmin(admin.ModelAdmin):
    list_display = ("name", "abbreviation", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "abbreviation")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("name",)


@admin.register(FacilityAccount)
class FacilityAccountAdmin(admin.ModelAdmin):
    list_display = ("revenue_account", "facility", "description", "is_active")
    list_filter = ("is_active", "facility")
    search_fields = ("revenue_account", "description")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "facility", "facility_account", "is_archived")
    list_filter = ("facility", "is_archived")
    search_fields = ("name",)
    readonly_fields = ("created_at", "updated_at")


@admin.register(FundingAccount)
class FundingAccountAdmin(admin.ModelAdmin):
    list_display = ("account_number", "description", "expires_at", "suspended_at")
    search_fields = ("account_number", "description")
    readonly_fields = ("created_at", "updated_at")
