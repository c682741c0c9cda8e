# sales/management/commands/expire_documents.py

from __future__ import annotations

from datetime import date

from django.core.management.base import BaseCommand, CommandError

from sales.services.order_service import expire_quotes, mark_overdue_invoices


class Command(BaseCommand):
    help = "Expire pending quotes past validity and mark unpaid invoices past due as overdue."

    def add_arguments(self, parser):
        parser.add_argument(
            "--date",
            type=str,
            default="",
            help="Reference day (YYYY-MM-DD). Defaults to today.",
        )

    def handle(self, *args, **options):
        raw = (options.get("date") or "").strip()
        today = None
        if raw:
            try:
                today = date.fromisoformat(raw)
            except ValueError as exc:
                raise CommandError(f"--date must be YYYY-MM-DD, got {raw!r}") from exc

        expired = expire_quotes(today=today)
        overdue = mark_overdue_invoices(today=today)

        self.stdout.write(f"Quotes expired: {expired}")
        self.stdout.write(f"Invoices marked overdue: {overdue}")
