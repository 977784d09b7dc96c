from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase
from rest_framework.test import APIRequestFactory

from permissions.roles import IsAdmin, IsAdminOrReadOnly, is_admin

User = get_user_model()


class PermissionRoleTests(TestCase):
    """
    Tests for role-based permissions.

    GUARANTEES:
    - Admins (role or superuser) pass admin checks
    - Customers never escalate to admin
    - Anonymous users may only read the catalog
    """

    def setUp(self):
        self.factory = APIRequestFactory()

        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="pass",
            role="admin",
        )
        self.customer = User.objects.create_user(
            email="customer@example.com",
            password="pass",
        )
        self.superuser = User.objects.create_superuser(
            email="root@example.com",
            password="pass",
            role="customer",
        )

    # --------------------------------------------------
    # Helpers
    # --------------------------------------------------

    def _request_for(self, user=None, method="get"):
        request = getattr(self.factory, method)("/")
        request.user = user if user is not None else AnonymousUser()
        return request

    # --------------------------------------------------
    # ADMIN
    # --------------------------------------------------

    def test_admin_permissions(self):
        request = self._request_for(self.admin)

        self.assertTrue(IsAdmin().has_permission(request, None))
        self.assertTrue(is_admin(self.admin))

    def test_superuser_counts_as_admin(self):
        request = self._request_for(self.superuser, method="post")

        self.assertTrue(IsAdmin().has_permission(request, None))
        self.assertTrue(IsAdminOrReadOnly().has_permission(request, None))

    # --------------------------------------------------
    # CUSTOMER
    # --------------------------------------------------

    def test_customer_permissions(self):
        request = self._request_for(self.customer)

        self.assertFalse(is_admin(self.customer))
        self.assertFalse(IsAdmin().has_permission(request, None))

    def test_customer_cannot_write_catalog(self):
        read = self._request_for(self.customer)
        write = self._request_for(self.customer, method="post")

        self.assertTrue(IsAdminOrReadOnly().has_permission(read, None))
        self.assertFalse(IsAdminOrReadOnly().has_permission(write, None))

    # --------------------------------------------------
    # ANONYMOUS
    # --------------------------------------------------

    def test_anonymous_denied(self):
        request = self._request_for(None)

        self.assertFalse(IsAdmin().has_permission(request, None))
        self.assertFalse(is_admin(AnonymousUser()))
        self.assertTrue(IsAdminOrReadOnly().has_permission(request, None))
        self.assertFalse(
            IsAdminOrReadOnly().has_permission(self._request_for(None, method="delete"), None)
        )
