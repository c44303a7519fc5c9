# journals/admin.py

from django.contrib import admin

from journals.models import Journal, JournalRow
from journals.services.amounts import journal_amount
from journals.services.reconciliation import status_string

# ============================================================
# JOURNAL (READ-ONLY)
# ============================================================


class JournalRowInline(admin.TabularInline):
    model = JournalRow
    extra = 0
    can_delete = False
    readonly_fields = ("order_detail", "account", "amount", "description", "created_at")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Journal)
class JournalAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "facility",
        "status",
        "reconciliation_status",
        "billed_amount",
        "reference",
        "created_by",
        "created_at",
    )
    list_filter = ("status", "facility")
    search_fields = ("reference",)
    ordering = ("-created_at",)
    inlines = [JournalRowInline]

    readonly_fields = (
        "facility",
        "status",
        "reference",
        "created_by",
        "updated_by",
        "file",
        "created_at",
        "updated_at",
    )

    @admin.display(description="Reconciliation")
    def reconciliation_status(self, obj):
        return status_string(obj).label

    @admin.display(description="Amount")
    def billed_amount(self, obj):
        return journal_amount(obj)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# JOURNAL ROW (STRICTLY IMMUTABLE)
# ============================================================


@admin.register(JournalRow)
class JournalRowAdmin(admin.ModelAdmin):
    list_display = ("id", "journal", "order_detail", "account", "amount", "created_at")
    list_filter = ("journal__status",)
    search_fields = ("account", "description")
    ordering = ("journal", "id")

    readonly_fields = (
        "journal",
        "order_detail",
        "account",
        "amount",
        "description",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
