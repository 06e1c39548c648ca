# JSON endpoints consumed by the admin and public pages. No trailing slashes.
# Like the original CMS these are open: staff gating applies to the server-rendered back-office only.
from django.urls import path

from backoffice.api import UploadApiView
from blog.api import BlogApiView
from events.api import EventAdminApiView, EventFeedApiView
from players.api import PlayerApiView, TeamApiView
from sports.api import SportApiView

urlpatterns = [
    path("admin/sports", SportApiView.as_view(), name="api_sports"),
    path("admin/teams", TeamApiView.as_view(), name="api_teams"),
    path("admin/players", PlayerApiView.as_view(), name="api_players"),
    path("admin/events", EventAdminApiView.as_view(), name="api_admin_events"),
    path("admin/blogs", BlogApiView.as_view(), name="api_blogs"),
    path("events", EventFeedApiView.as_view(), name="api_events"),
    path("upload", UploadApiView.as_view(), name="api_upload"),
]
