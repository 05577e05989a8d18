# herd/api/serializers.py

"""
HERD API SERIALIZERS

Read serializers mirror DB truth (cached totals included, they are kept in
sync with the ledger by the engine). Command serializers only validate shape;
business rules live in the services.
"""

from decimal import Decimal

from rest_framework import serializers

from herd.models import Cow, CowDisposition, MonthlyDepreciation


# ======================================================
# READ
# ======================================================


class CowDispositionSerializer(serializers.ModelSerializer):
    class Meta:
        model = CowDisposition
        fields = [
            "id",
            "disposition_date",
            "disposition_type",
            "sale_amount",
            "accumulated_depreciation",
            "partial_month_depreciation",
            "final_book_value",
            "gain_loss",
            "notes",
            "journal_entry",
            "created_at",
        ]
        read_only_fields = fields


class CowSerializer(serializers.ModelSerializer):
    depreciable_amount = serializers.DecimalField(
        max_digits=14, decimal_places=2, read_only=True
    )
    disposition = serializers.SerializerMethodField()

    class Meta:
        model = Cow
        fields = [
            "id",
            "tag_number",
            "name",
            "birth_date",
            "freshen_date",
            "purchase_price",
            "salvage_value",
            "depreciable_amount",
            "depreciation_method",
            "acquisition_type",
            "status",
            "total_depreciation",
            "current_value",
            "depreciated_through",
            "disposition",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_disposition(self, obj):
        disposition = getattr(obj, "disposition", None) if obj.is_disposed else None
        if disposition is None:
            return None
        return CowDispositionSerializer(disposition).data


class MonthlyDepreciationSerializer(serializers.ModelSerializer):
    class Meta:
        model = MonthlyDepreciation
        fields = [
            "year",
            "month",
            "amount",
            "accumulated_after",
            "book_value_after",
            "is_partial",
            "journal_entry",
        ]
        read_only_fields = fields


# ======================================================
# COMMANDS
# ======================================================


class CowCreateSerializer(serializers.Serializer):
    tag_number = serializers.CharField(max_length=50)
    name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    birth_date = serializers.DateField(required=False, allow_null=True)
    freshen_date = serializers.DateField()
    purchase_price = serializers.DecimalField(max_digits=14, decimal_places=2)
    salvage_value = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, allow_null=True
    )
    depreciation_method = serializers.ChoiceField(
        choices=Cow.DEPRECIATION_METHODS, default=Cow.STRAIGHT_LINE
    )
    acquisition_type = serializers.ChoiceField(
        choices=Cow.ACQUISITION_TYPES, default=Cow.PURCHASED
    )


class ReconcileCommandSerializer(serializers.Serializer):
    as_of = serializers.DateField(required=False, allow_null=True)


class DispositionCommandSerializer(serializers.Serializer):
    disposition_date = serializers.DateField()
    disposition_type = serializers.ChoiceField(choices=CowDisposition.DISPOSITION_TYPES)
    sale_amount = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, default=Decimal("0.00")
    )
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


# ======================================================
# RESULTS (service dataclasses)
# ======================================================


class ReconcileResultSerializer(serializers.Serializer):
    asset_id = serializers.IntegerField()
    periods_created = serializers.IntegerField()
    entries_created = serializers.IntegerField()
    accumulated_depreciation = serializers.DecimalField(max_digits=14, decimal_places=2)
    current_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    fully_depreciated = serializers.BooleanField()


class DispositionResultSerializer(serializers.Serializer):
    asset_id = serializers.IntegerField()
    disposition_id = serializers.IntegerField()
    journal_entry_id = serializers.IntegerField()
    final_book_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    gain_loss = serializers.DecimalField(max_digits=14, decimal_places=2)
    accumulated_depreciation = serializers.DecimalField(max_digits=14, decimal_places=2)
    partial_month_depreciation = serializers.DecimalField(
        max_digits=14, decimal_places=2
    )
    periods_created = serializers.IntegerField()
    lines_removed = serializers.IntegerField()
    entries_removed = serializers.IntegerField()


class FiscalYearDepreciationSerializer(serializers.Serializer):
    fiscal_year = serializers.IntegerField()
    start = serializers.DateField()
    end = serializers.DateField()
    months = serializers.IntegerField()
    depreciation = serializers.DecimalField(max_digits=14, decimal_places=2)
    accumulated_end = serializers.DecimalField(max_digits=14, decimal_places=2)
    book_value_end = serializers.DecimalField(max_digits=14, decimal_places=2)


class DepreciationSummarySerializer(serializers.Serializer):
    cow_id = serializers.IntegerField()
    tag_number = serializers.CharField()
    purchase_price = serializers.DecimalField(max_digits=14, decimal_places=2)
    salvage_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_depreciation = serializers.DecimalField(max_digits=14, decimal_places=2)
    book_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    fiscal_year_start_month = serializers.IntegerField()
    years = FiscalYearDepreciationSerializer(many=True)
