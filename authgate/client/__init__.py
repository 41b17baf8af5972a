"""
AUTHGATE Client - Combined Auth Form

Client-side state for the login/registration page and the form-post
abstraction it submits through.
"""

from authgate.client.forms import Form, Visit
from authgate.client.login_and_register import ActiveTab, LoginAndRegister, PageRedirect
from authgate.client.routes import RouteTable

__all__ = ["Form", "Visit", "ActiveTab", "LoginAndRegister", "PageRedirect", "RouteTable"]
