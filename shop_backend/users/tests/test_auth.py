# users/tests/test_auth.py

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

User = get_user_model()


class AuthApiTests(TestCase):
    """
    Registration / login / profile endpoints.

    GUARANTEES:
    - Registration always creates a customer and returns a token pair
    - Bad credentials answer 401 in the error envelope
    - /me/ requires authentication
    """

    def setUp(self):
        self.client = APIClient()

    def test_register_creates_customer_with_tokens(self):
        res = self.client.post(
            "/api/auth/register/",
            {
                "email": "Jane@Example.com",
                "password": "s3cret-pass",
                "first_name": "Jane",
                "role": "admin",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertIn("access", res.data["tokens"])
        self.assertIn("refresh", res.data["tokens"])
        self.assertEqual(res.data["user"]["role"], "customer")

        user = User.objects.get(email__iexact="jane@example.com")
        self.assertEqual(user.role, "customer")
        self.assertTrue(user.check_password("s3cret-pass"))

    def test_register_duplicate_email_is_validation_error(self):
        User.objects.create_user(email="dup@example.com", password="pass")

        res = self.client.post(
            "/api/auth/register/",
            {"email": "dup@example.com", "password": "another-pass"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")
        self.assertIn("email", res.data["error"]["details"])

    def test_login_returns_tokens(self):
        User.objects.create_user(email="login@example.com", password="pass1234")

        res = self.client.post(
            "/api/auth/login/",
            {"email": "login@example.com", "password": "pass1234"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["user"]["email"], "login@example.com")
        self.assertTrue(res.data["tokens"]["access"])

    def test_login_bad_password_is_unauthorized(self):
        User.objects.create_user(email="login@example.com", password="pass1234")

        res = self.client.post(
            "/api/auth/login/",
            {"email": "login@example.com", "password": "wrong"},
            format="json",
        )

        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.data["error"]["code"], "UNAUTHORIZED")

    def test_me_requires_auth(self):
        res = self.client.get("/api/auth/me/")

        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.data["error"]["code"], "UNAUTHORIZED")

    def test_me_with_bearer_token(self):
        User.objects.create_user(email="me@example.com", password="pass1234")
        login = self.client.post(
            "/api/auth/login/",
            {"email": "me@example.com", "password": "pass1234"},
            format="json",
        )

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['tokens']['access']}")
        res = self.client.get("/api/auth/me/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["email"], "me@example.com")

    def test_email_is_case_insensitive(self):
        self.client.post(
            "/api/auth/register/",
            {"email": "Mixed@Example.com", "password": "s3cret-pass"},
            format="json",
        )

        self.assertTrue(User.objects.filter(email="mixed@example.com").exists())

        res = self.client.post(
            "/api/auth/login/",
            {"email": "MIXED@example.com", "password": "s3cret-pass"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)

        dup = self.client.post(
            "/api/auth/register/",
            {"email": "mixed@EXAMPLE.com", "password": "s3cret-pass"},
            format="json",
        )
        self.assertEqual(dup.status_code, 400)


class ProfileApiTests(TestCase):
    """
    GUARANTEES:
    - Users edit their own name, never their role
    - Password change requires the current password
    """

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="me@example.com", password="old-pass-123")
        self.client.force_authenticate(self.user)

    def test_update_profile(self):
        res = self.client.patch(
            "/api/auth/me/", {"firstName": "Ada", "last_name": "Lovelace", "role": "admin"}, format="json"
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["full_name"], "Ada Lovelace")
        self.user.refresh_from_db()
        self.assertEqual(self.user.role, "customer")

    def test_change_password(self):
        res = self.client.patch(
            "/api/auth/me/password/",
            {"currentPassword": "old-pass-123", "newPassword": "new-pass-456"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("new-pass-456"))

    def test_change_password_wrong_current(self):
        res = self.client.patch(
            "/api/auth/me/password/",
            {"current_password": "nope-nope-1", "new_password": "new-pass-456"},
            format="json",
        )

        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.data["error"]["code"], "UNAUTHORIZED")
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("old-pass-123"))

    def test_change_password_must_differ(self):
        res = self.client.patch(
            "/api/auth/me/password/",
            {"current_password": "old-pass-123", "new_password": "old-pass-123"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertIn("new_password", res.data["error"]["details"])
