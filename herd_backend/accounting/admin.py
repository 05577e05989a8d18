# accounting/admin.py

from django.contrib import admin

from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry


class ReadOnlyAdminMixin:
    """Ledger rows are written by the engine only."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class LedgerEntryInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = LedgerEntry
    extra = 0
    fields = ("account_code", "account_name", "entry_type", "amount", "asset_id")
    readonly_fields = fields


# ============================================================
# JOURNAL ENTRY (READ-ONLY)
# ============================================================


@admin.register(JournalEntry)
class JournalEntryAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = (
        "id",
        "reference",
        "entry_type",
        "entry_date",
        "total_amount",
        "created_at",
    )
    list_filter = ("entry_type", "entry_date")
    search_fields = ("description", "reference")
    ordering = ("-entry_date", "-id")
    date_hierarchy = "entry_date"
    inlines = [LedgerEntryInline]

    readonly_fields = (
        "reference",
        "entry_type",
        "description",
        "entry_date",
        "total_amount",
        "created_at",
    )


# ============================================================
# LEDGER ENTRY (STRICTLY IMMUTABLE)
# ============================================================


@admin.register(LedgerEntry)
class LedgerEntryAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = (
        "id",
        "journal_entry",
        "account_code",
        "entry_type",
        "amount",
        "asset_id",
        "created_at",
    )
    list_filter = ("entry_type", "account_code")
    search_fields = ("journal_entry__reference", "account_code")
    ordering = ("created_at",)

    readonly_fields = (
        "journal_entry",
        "account_code",
        "account_name",
        "entry_type",
        "amount",
        "asset_id",
        "created_at",
    )
