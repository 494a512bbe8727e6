"""
URL configuration for ticketdesk project.

- admin/       Django admin
- api/         tracker REST API
- api/schema/  OpenAPI schema (drf-spectacular) and Swagger UI
"""
# ticketdesk/urls.py
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("tracker.urls")),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
]
