from django.contrib import admin as dj_admin
from django.urls import path, include
from django.views.generic import RedirectView
from django.conf.urls.static import static
from django.conf import settings

urlpatterns = [
    # Django's admin stays reachable for superusers; day-to-day work happens in /backoffice/.
    path("dj-admin/", dj_admin.site.urls),
    path("", RedirectView.as_view(pattern_name="blog:blog_list", permanent=False), name="home"),
    path("accounts/", include("accounts.urls")),
    path("backoffice/", include("backoffice.urls", namespace="backoffice")),
    path("backoffice/sports/", include("sports.urls")),
    path("backoffice/players/", include("players.urls")),
    path("", include("blog.urls")),
    path("api/", include("club_portal.api_urls")),
]

if settings.DEBUG:
    # This must match MEDIA_URL exactly (leading/trailing slashes matter)
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
