from boilerplate.db.models.user import User
from boilerplate.db.models.forgot_password import ForgotPassword

__all__ = ["User", "ForgotPassword"]
