from django.urls import path

from .auth_views import AdminAuthAPIView, CookieTokenRefreshView, csrf
from .session import AdminSessionAPIView

urlpatterns = [
    path("api/csrf/", csrf, name="csrf"),
    path("api/admin/auth/", AdminAuthAPIView.as_view(), name="admin_auth"),
    path("api/token/refresh/", CookieTokenRefreshView.as_view(), name="token_refresh"),
    path("api/admin/session/", AdminSessionAPIView.as_view(), name="admin_session"),
]
