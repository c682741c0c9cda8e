# users/tests/test_permissions.py

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase
from rest_framework.test import APIClient, APIRequestFactory

from permissions.roles import (
    ALL_CAPABILITIES,
    CAP_CATALOG_EDIT,
    CAP_INVENTORY_ADJUST,
    CAP_INVENTORY_VIEW,
    CAP_ORDERS_CANCEL,
    CAP_ORDERS_MANAGE,
    CAP_REPORTS_CREATE,
    CAP_REPORTS_VIEW_ALL,
    HasAnyCapability,
    HasCapability,
    capabilities_for,
)

User = get_user_model()


class _View:
    def __init__(self, required=None, required_any=None):
        self.required_capability = required
        self.required_any_capabilities = required_any


class CapabilityTests(TestCase):
    """
    Tests for role -> capability mapping.

    GUARANTEES:
    - admin has everything, manager everything but orders.cancel
    - production and user roles only file reports (production also reads stock)
    - Anonymous users and views without a declared capability are denied
    """

    def setUp(self):
        self.factory = APIRequestFactory()

        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")
        self.manager = User.objects.create_user(email="manager@example.com", password="pass", role="manager")
        self.foreman = User.objects.create_user(email="foreman@example.com", password="pass", role="production")
        self.clerk = User.objects.create_user(email="clerk@example.com", password="pass", role="user")

    # --------------------------------------------------
    # Helpers
    # --------------------------------------------------

    def _request_for(self, user=None):
        request = self.factory.get("/")
        request.user = user
        return request

    # --------------------------------------------------
    # ROLE MAP
    # --------------------------------------------------

    def test_role_capabilities(self):
        self.assertEqual(capabilities_for(self.admin), ALL_CAPABILITIES)
        self.assertEqual(capabilities_for(self.manager), ALL_CAPABILITIES - {CAP_ORDERS_CANCEL})
        self.assertEqual(capabilities_for(self.foreman), {CAP_REPORTS_CREATE, CAP_INVENTORY_VIEW})
        self.assertEqual(capabilities_for(self.clerk), {CAP_REPORTS_CREATE})

    def test_superuser_has_all_capabilities(self):
        root = User.objects.create_superuser(email="root@example.com", password="pass")
        self.assertEqual(capabilities_for(root), ALL_CAPABILITIES)

    # --------------------------------------------------
    # PERMISSION CLASSES
    # --------------------------------------------------

    def test_has_capability(self):
        perm = HasCapability()

        self.assertTrue(perm.has_permission(self._request_for(self.manager), _View(CAP_ORDERS_MANAGE)))
        self.assertFalse(perm.has_permission(self._request_for(self.manager), _View(CAP_ORDERS_CANCEL)))
        self.assertFalse(perm.has_permission(self._request_for(self.clerk), _View(CAP_CATALOG_EDIT)))

    def test_has_any_capability(self):
        perm = HasAnyCapability()
        view = _View(required_any={CAP_INVENTORY_VIEW, CAP_INVENTORY_ADJUST})

        self.assertTrue(perm.has_permission(self._request_for(self.foreman), view))
        self.assertFalse(perm.has_permission(self._request_for(self.clerk), view))

    def test_deny_by_default(self):
        self.assertFalse(HasCapability().has_permission(self._request_for(self.admin), _View()))
        self.assertFalse(HasAnyCapability().has_permission(self._request_for(self.admin), _View()))

    def test_anonymous_denied(self):
        request = self._request_for(AnonymousUser())
        self.assertFalse(HasCapability().has_permission(request, _View(CAP_REPORTS_VIEW_ALL)))


class MeEndpointTests(TestCase):
    """
    GUARANTEES:
    - /api/auth/me/ returns the caller's role and sorted capabilities
    """

    def test_me(self):
        user = User.objects.create_user(
            email="foreman@example.com", password="pass", role="production", first_name="Jean"
        )
        client = APIClient()
        client.force_authenticate(user)

        res = client.get("/api/auth/me/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["role"], "production")
        self.assertEqual(res.data["capabilities"], sorted([CAP_INVENTORY_VIEW, CAP_REPORTS_CREATE]))

    def test_me_requires_authentication(self):
        res = APIClient().get("/api/auth/me/")
        self.assertEqual(res.status_code, 401)
