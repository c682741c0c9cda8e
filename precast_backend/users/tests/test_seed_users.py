# users/tests/test_seed_users.py

from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

User = get_user_model()


class SeedUsersCommandTests(TestCase):
    """
    Tests for the seed_users command.

    GUARANTEES:
    - One account per role, only admin is superuser
    - Re-running keeps passwords unless --force-password
    - Drifted roles are realigned
    """

    def _run(self, *args):
        out = StringIO()
        call_command("seed_users", *args, stdout=out)
        return out.getvalue()

    def test_creates_one_account_per_role(self):
        output = self._run()

        self.assertEqual(User.objects.count(), 4)
        self.assertEqual(
            set(User.objects.values_list("role", flat=True)),
            {"admin", "manager", "production", "user"},
        )
        self.assertEqual(list(User.objects.filter(is_superuser=True).values_list("email", flat=True)), ["admin@example.com"])
        self.assertIn("created=4", output)

    def test_rerun_keeps_password(self):
        self._run()
        self._run("--password", "another-secret")

        foreman = User.objects.get(email="foreman@example.com")
        self.assertTrue(foreman.check_password("Pass1234!"))

        self._run("--password", "another-secret", "--force-password")
        foreman.refresh_from_db()
        self.assertTrue(foreman.check_password("another-secret"))

    def test_role_drift_is_realigned(self):
        self._run()
        User.objects.filter(email="clerk@example.com").update(role="manager")

        output = self._run("--role", "user")

        self.assertEqual(User.objects.get(email="clerk@example.com").role, "user")
        self.assertIn("realigned=1", output)

    def test_short_password_rejected(self):
        with self.assertRaises(CommandError):
            self._run("--password", "abc")
        self.assertFalse(User.objects.exists())
