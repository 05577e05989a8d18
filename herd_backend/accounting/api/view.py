# PATH: accounting/api/view.py

"""
PATH: accounting/api/view.py

ACCOUNTING API VIEWSETS (READ-ONLY / AUDIT SAFE)

Journal entries and ledger lines are append-only. They are written by the
herd engine, never through the API:
    /accounting/journal-entries/?entry_type=disposition&cow=12
    /accounting/ledger-entries/?account_code=1500.1&date_to=2025-06-30

Security rules:
- JournalEntry list requires accounting.view_journalentry
- LedgerEntry list requires accounting.view_ledgerentry
"""

from drf_spectacular.utils import extend_schema
from rest_framework.exceptions import PermissionDenied
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import IsAuthenticated
from rest_framework.viewsets import ReadOnlyModelViewSet
from django_filters.rest_framework import DjangoFilterBackend

from accounting.api.filters import JournalEntryFilter, LedgerEntryFilter
from accounting.api.serializers import JournalEntrySerializer, LedgerEntrySerializer
from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry


@extend_schema(tags=["accounting"])
class JournalEntryViewSet(ReadOnlyModelViewSet):
    """
    Read-only access to journal entries, lines inlined.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = JournalEntrySerializer
    http_method_names = ["get", "head", "options"]

    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = JournalEntryFilter
    ordering_fields = ["entry_date", "created_at"]
    ordering = ["-entry_date", "-id"]

    queryset = JournalEntry.objects.prefetch_related("ledger_entries")

    def get_queryset(self):
        if not self.request.user.has_perm("accounting.view_journalentry"):
            raise PermissionDenied(
                "You do not have permission to view journal entries."
            )
        return super().get_queryset()


@extend_schema(tags=["accounting"])
class LedgerEntryViewSet(ReadOnlyModelViewSet):
    """
    Read-only access to ledger lines.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = LedgerEntrySerializer
    http_method_names = ["get", "head", "options"]

    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = LedgerEntryFilter
    ordering_fields = ["created_at", "journal_entry__entry_date"]
    ordering = ["-created_at", "-id"]

    queryset = LedgerEntry.objects.select_related("journal_entry")

    def get_queryset(self):
        if not self.request.user.has_perm("accounting.view_ledgerentry"):
            raise PermissionDenied("You do not have permission to view ledger entries.")
        return super().get_queryset()
