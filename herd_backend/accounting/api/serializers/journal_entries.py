# accounting/api/serializers/journal_entries.py

from rest_framework import serializers

from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry


class JournalLineSerializer(serializers.ModelSerializer):
    class Meta:
        model = LedgerEntry
        fields = [
            "id",
            "account_code",
            "account_name",
            "entry_type",
            "amount",
            "asset_id",
        ]
        read_only_fields = fields


class JournalEntrySerializer(serializers.ModelSerializer):
    """
    Journal entry with its lines inlined (read-only, audit view).
    """

    lines = JournalLineSerializer(source="ledger_entries", many=True, read_only=True)

    class Meta:
        model = JournalEntry
        fields = [
            "id",
            "reference",
            "entry_type",
            "description",
            "entry_date",
            "total_amount",
            "created_at",
            "lines",
        ]
        read_only_fields = fields
