# herd/admin.py

from django.contrib import admin

from accounting.admin import ReadOnlyAdminMixin
from herd.models import Cow, CowDisposition, MonthlyDepreciation


class MonthlyDepreciationInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = MonthlyDepreciation
    extra = 0
    fields = (
        "year",
        "month",
        "amount",
        "accumulated_after",
        "book_value_after",
        "is_partial",
        "journal_entry",
    )
    readonly_fields = fields
    ordering = ("year", "month")


@admin.register(Cow)
class CowAdmin(admin.ModelAdmin):
    """
    Cows are registered through the API (acquisition entry is posted there).
    Admin only edits descriptive fields.
    """

    list_display = (
        "tag_number",
        "name",
        "status",
        "depreciation_method",
        "purchase_price",
        "total_depreciation",
        "current_value",
        "depreciated_through",
    )
    list_filter = ("status", "depreciation_method", "acquisition_type")
    search_fields = ("tag_number", "name")
    ordering = ("tag_number",)
    inlines = [MonthlyDepreciationInline]

    readonly_fields = (
        "tag_number",
        "freshen_date",
        "purchase_price",
        "salvage_value",
        "depreciation_method",
        "acquisition_type",
        "status",
        "total_depreciation",
        "current_value",
        "depreciated_through",
        "created_at",
        "updated_at",
    )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(CowDisposition)
class CowDispositionAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = (
        "cow",
        "disposition_type",
        "disposition_date",
        "sale_amount",
        "final_book_value",
        "gain_loss",
    )
    list_filter = ("disposition_type",)
    search_fields = ("cow__tag_number",)
    ordering = ("-disposition_date",)
