from .auth import LoginView, RegisterView
from .profile import ChangePasswordView, MeView

__all__ = ["ChangePasswordView", "LoginView", "MeView", "RegisterView"]
