import logging

from django.conf import settings
from django.http import JsonResponse
from django.middleware.csrf import get_token
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_protect, ensure_csrf_cookie
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, Throttled
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.views import TokenRefreshView

from .authentication import ADMIN_TOKEN_COOKIE
from .throttling import LoginThrottle, minutes_until

logger = logging.getLogger(__name__)

COOKIE_NAME = "refresh_token"
COOKIE_PATH = "/api/token/"
COOKIE_SECURE = not settings.DEBUG
COOKIE_SAMESITE = "Lax"
COOKIE_MAX_AGE = 7 * 24 * 60 * 60


def _set_access_cookie(response, access):
    response.set_cookie(
        ADMIN_TOKEN_COOKIE, access,
        max_age=settings.SESSION_EXPIRE_HOURS * 60 * 60,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="Strict",
        path="/",
    )


@ensure_csrf_cookie
def csrf(request):
    """
    GET /api/csrf/ -> sets csrftoken cookie and returns it as JSON
    """
    return JsonResponse({"csrfToken": get_token(request)})


class AdminTokenObtainPairSerializer(TokenObtainPairSerializer):
    default_error_messages = {"no_active_account": "Invalid credentials"}

    def validate(self, attrs):
        data = super().validate(attrs)
        if not self.user.is_staff:
            raise AuthenticationFailed("Invalid credentials")
        return data

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token["username"] = user.get_username()
        token["isAdmin"] = bool(user.is_staff)
        return token


class AdminAuthAPIView(APIView):
    """
    POST   {"username", "password"} -> access token (body + admin-token cookie),
           refresh token in an HttpOnly cookie.
    DELETE -> logout, clears both cookies.
    """
    authentication_classes = ()
    permission_classes = [AllowAny]

    def get_throttles(self):
        if self.request.method == "POST":
            return [LoginThrottle()]
        return []

    def get_authenticate_header(self, request):
        # bad credentials answer 401, not 403
        return 'Bearer realm="api"'

    def throttled(self, request, wait):
        raise Throttled(
            wait,
            detail=f"Too many login attempts. Please try again in {minutes_until(wait)} minute(s).",
        )

    def post(self, request):
        serializer = AdminTokenObtainPairSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        access = serializer.validated_data["access"]
        refresh = serializer.validated_data["refresh"]
        username = serializer.user.get_username()
        logger.info("Admin '%s' logged in", username)

        res = Response({
            "success": True,
            "message": "Login successful",
            "token": access,
            "user": {"username": username, "isAdmin": True},
        }, status=status.HTTP_200_OK)
        _set_access_cookie(res, access)
        res.set_cookie(
            COOKIE_NAME, refresh,
            max_age=COOKIE_MAX_AGE,
            httponly=True,
            secure=COOKIE_SECURE,
            samesite=COOKIE_SAMESITE,
            path=COOKIE_PATH,
        )
        return res

    def delete(self, request):
        res = Response({"success": True, "message": "Logout successful"})
        res.delete_cookie(ADMIN_TOKEN_COOKIE, path="/")
        res.delete_cookie(COOKIE_NAME, path=COOKIE_PATH)
        return res


@method_decorator(csrf_protect, name="post")
class CookieTokenRefreshView(TokenRefreshView):
    """
    POST /api/token/refresh/ -> new access token from the HttpOnly refresh cookie.
    Requires X-CSRFToken header (double submit).
    """

    def post(self, request, *args, **kwargs):
        refresh = request.COOKIES.get(COOKIE_NAME) or request.data.get("refresh")
        serializer = self.get_serializer(data={"refresh": refresh})
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError as e:
            raise InvalidToken(e.args[0])

        access = serializer.validated_data["access"]
        res = Response({"success": True, "token": access})
        _set_access_cookie(res, access)
        return res
