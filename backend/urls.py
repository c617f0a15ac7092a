"""
URL configuration for backend project.
"""
from django.contrib import admin
from django.contrib.sitemaps.views import sitemap
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

from catalog_admin.sitemaps import SITEMAPS

urlpatterns = [
    path('admin/', admin.site.urls),

    # Catalog, contacts, dashboard and upload API
    path('api/', include('catalog_admin.urls')),

    # Admin login/logout, token refresh, session check
    path('', include('catalog_admin.auth_urls')),

    path('sitemap.xml', sitemap, {'sitemaps': SITEMAPS}, name='sitemap'),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
