# inventory/management/commands/reconcile_stock.py

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from inventory.services.reconciliation import reconcile_all


class Command(BaseCommand):
    help = "Compare every ledger row with a replay of its movement log."

    def add_arguments(self, parser):
        parser.add_argument(
            "--verbose-lines",
            action="store_true",
            help="Print matching items too (default: only drift).",
        )

    def handle(self, *args, **options):
        show_all = bool(options.get("verbose_lines"))

        lines = reconcile_all()
        drifted = [line for line in lines if not line.matches]

        for line in lines:
            if line.matches and not show_all:
                continue
            marker = "OK   " if line.matches else "DRIFT"
            self.stdout.write(
                f"{marker} {line.item_class:<16} {line.code:<12} "
                f"ledger={line.ledger_stock} replay={line.replayed_stock}"
            )

        self.stdout.write(f"Checked {len(lines)} items, {len(drifted)} drifted.")

        if drifted:
            raise CommandError(f"{len(drifted)} ledger rows disagree with their movements")
