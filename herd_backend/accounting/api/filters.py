# accounting/api/filters.py

"""
Query filters for the read-only ledger endpoints.

    /accounting/journal-entries/?entry_type=depreciation&cow=12
    /accounting/journal-entries/?date_from=2025-01-01&date_to=2025-03-31
    /accounting/ledger-entries/?account_code=1500.1&cow=12
"""

import django_filters

from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry


class JournalEntryFilter(django_filters.FilterSet):
    entry_type = django_filters.ChoiceFilter(choices=JournalEntry.ENTRY_TYPES)
    cow = django_filters.NumberFilter(method="filter_cow")
    date_from = django_filters.DateFilter(field_name="entry_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="entry_date", lookup_expr="lte")
    reference = django_filters.CharFilter(lookup_expr="startswith")

    class Meta:
        model = JournalEntry
        fields = ["entry_type", "cow", "date_from", "date_to", "reference"]

    def filter_cow(self, queryset, name, value):
        return queryset.filter(ledger_entries__asset_id=value).distinct()


class LedgerEntryFilter(django_filters.FilterSet):
    cow = django_filters.NumberFilter(field_name="asset_id")
    account_code = django_filters.CharFilter()
    entry_type = django_filters.ChoiceFilter(choices=LedgerEntry.ENTRY_TYPES)
    journal_entry = django_filters.NumberFilter(field_name="journal_entry_id")
    date_from = django_filters.DateFilter(
        field_name="journal_entry__entry_date", lookup_expr="gte"
    )
    date_to = django_filters.DateFilter(
        field_name="journal_entry__entry_date", lookup_expr="lte"
    )

    class Meta:
        model = LedgerEntry
        fields = ["cow", "account_code", "entry_type", "journal_entry", "date_from", "date_to"]
