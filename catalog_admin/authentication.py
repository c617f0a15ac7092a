from rest_framework_simplejwt.authentication import JWTAuthentication

ADMIN_TOKEN_COOKIE = "admin-token"


class CookieJWTAuthentication(JWTAuthentication):
    """
    Bearer header first, then the HttpOnly `admin-token` cookie set at login.
    Either way the token signature, expiry, issuer and audience are checked.
    """

    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            return super().authenticate(request)

        raw_token = request.COOKIES.get(ADMIN_TOKEN_COOKIE)
        if not raw_token:
            return None

        validated_token = self.get_validated_token(raw_token)
        return self.get_user(validated_token), validated_token
