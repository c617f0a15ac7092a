"""
Admin session guard.

The admin UI asks this before rendering a protected page (and again on a
timer) whether its stored token still looks usable. The check decodes the
token WITHOUT verifying its signature: it is a UX shortcut to send stale
sessions back to the login page early. Authorization happens only in
CookieJWTAuthentication/IsAdminToken on every API call.
"""
import time

import jwt
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .authentication import ADMIN_TOKEN_COOKIE

LOADING = "loading"
AUTHORIZED = "authorized"
REDIRECTING = "redirecting"

LOGIN_PATH = "/admin"


def decode_token_payload(token):
    """Claims of `token`, signature and expiry not checked."""
    return jwt.decode(token, options={"verify_signature": False})


class CookieTokenStore:
    """Token store over one request: Bearer header first, then the cookie."""

    def __init__(self, request):
        self.request = request
        self.cleared = False

    def get(self):
        if self.cleared:
            return None
        header = self.request.META.get("HTTP_AUTHORIZATION", "")
        if header.startswith("Bearer "):
            return header[len("Bearer "):].strip() or None
        return self.request.COOKIES.get(ADMIN_TOKEN_COOKIE) or None

    def clear(self):
        self.cleared = True

    def apply(self, response):
        if self.cleared:
            response.delete_cookie(ADMIN_TOKEN_COOKIE, path="/")
        return response


class AdminSessionGuard:
    """
    loading -> authorized | redirecting.

    Any failure (no token, undecodable token, expired, missing isAdmin or
    username) clears the store and ends in `redirecting`.
    """

    def __init__(self, store, now=None, login_path=LOGIN_PATH):
        self.store = store
        self.now = now or time.time
        self.login_path = login_path
        self.state = LOADING
        self.payload = None
        self.reason = None

    def check(self):
        token = self.store.get()
        if not token:
            return self._redirect("missing")

        try:
            payload = decode_token_payload(token)
        except jwt.PyJWTError:
            return self._redirect("malformed")

        exp = payload.get("exp")
        if not isinstance(exp, (int, float)) or exp < int(self.now()):
            return self._redirect("expired")
        if not payload.get("isAdmin") or not payload.get("username"):
            return self._redirect("not_admin")

        self.payload = payload
        self.state = AUTHORIZED
        return self.state

    def _redirect(self, reason):
        self.store.clear()
        self.payload = None
        self.reason = reason
        self.state = REDIRECTING
        return self.state

    @property
    def authorized(self):
        return self.state == AUTHORIZED

    @property
    def redirect_to(self):
        return self.login_path if self.state == REDIRECTING else None

    @property
    def seconds_remaining(self):
        if not self.authorized:
            return 0
        return max(0, int(self.payload["exp"] - self.now()))


class AdminSessionAPIView(APIView):
    """GET /api/admin/session/ -> the guard's verdict for the caller's token."""
    authentication_classes = ()
    permission_classes = [AllowAny]

    def get(self, request):
        store = CookieTokenStore(request)
        guard = AdminSessionGuard(store)
        guard.check()

        data = {
            "state": guard.state,
            "authorized": guard.authorized,
            "redirectTo": guard.redirect_to,
            "reason": guard.reason,
            "username": guard.payload.get("username") if guard.authorized else None,
            "expiresAt": guard.payload.get("exp") if guard.authorized else None,
            "expiresIn": guard.seconds_remaining,
        }
        return store.apply(Response({"success": True, "data": data}))
