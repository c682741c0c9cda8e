# users/management/commands/seed_users.py

"""
Demo staff accounts, one per plant role.

Re-running is safe: existing accounts keep their password unless
--force-password is given, but role and superuser flag are realigned.
"""

from __future__ import annotations

from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from permissions.roles import ROLE_ADMIN, ROLE_MANAGER, ROLE_PRODUCTION, ROLE_USER, STAFF_ROLES

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class StaffSeed:
    role: str
    email: str
    first_name: str
    last_name: str

    @property
    def superuser(self) -> bool:
        return self.role == ROLE_ADMIN


STAFF_SEEDS = (
    StaffSeed(ROLE_ADMIN, "admin@example.com", "System", "Admin"),
    StaffSeed(ROLE_MANAGER, "manager@example.com", "Plant", "Manager"),
    StaffSeed(ROLE_PRODUCTION, "foreman@example.com", "Yard", "Foreman"),
    StaffSeed(ROLE_USER, "clerk@example.com", "Office", "Clerk"),
)


class Command(BaseCommand):
    help = "Create one demo staff account per role."

    def add_arguments(self, parser):
        parser.add_argument("--password", default="Pass1234!")
        parser.add_argument(
            "--role",
            action="append",
            choices=sorted(STAFF_ROLES),
            help="Only seed these roles (repeatable).",
        )
        parser.add_argument(
            "--force-password",
            action="store_true",
            help="Also reset the password of accounts that already exist.",
        )

    def _sync(self, seed: StaffSeed, *, password: str, force_password: bool) -> str:
        User = get_user_model()
        user = User.objects.filter(email=seed.email).first()

        if user is None:
            user = User(
                email=seed.email,
                first_name=seed.first_name,
                last_name=seed.last_name,
                is_staff=True,
            )
            outcome = "created"
        else:
            outcome = "unchanged"

        if (user.role, user.is_superuser) != (seed.role, seed.superuser):
            user.role = seed.role
            user.is_superuser = seed.superuser
            if outcome == "unchanged":
                outcome = "realigned"

        if outcome == "created" or force_password:
            user.set_password(password)
            if outcome == "unchanged":
                outcome = "password reset"

        if outcome != "unchanged":
            user.save()
        return outcome

    @transaction.atomic
    def handle(self, *args, **options):
        password = options["password"] or ""
        if len(password) < MIN_PASSWORD_LENGTH:
            raise CommandError(f"--password must be at least {MIN_PASSWORD_LENGTH} characters.")

        roles = set(options["role"] or STAFF_ROLES)
        tally: dict[str, int] = {}

        for seed in STAFF_SEEDS:
            if seed.role not in roles:
                continue
            outcome = self._sync(seed, password=password, force_password=options["force_password"])
            tally[outcome] = tally.get(outcome, 0) + 1
            self.stdout.write(f"{outcome:<15}{seed.role:<12}{seed.email}")

        summary = ", ".join(f"{key}={value}" for key, value in sorted(tally.items()))
        self.stdout.write(f"Staff accounts: {summary or 'none'}")
