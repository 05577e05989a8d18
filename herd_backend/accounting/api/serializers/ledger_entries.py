# accounting/api/serializers/ledger_entries.py

from rest_framework import serializers

from accounting.models.ledger import LedgerEntry


class LedgerEntrySerializer(serializers.ModelSerializer):
    journal_entry_reference = serializers.CharField(
        source="journal_entry.reference", read_only=True
    )
    entry_date = serializers.DateField(source="journal_entry.entry_date", read_only=True)

    class Meta:
        model = LedgerEntry
        fields = [
            "id",
            "journal_entry",
            "journal_entry_reference",
            "entry_date",
            "account_code",
            "account_name",
            "entry_type",
            "amount",
            "asset_id",
            "created_at",
        ]
        read_only_fields = fields
