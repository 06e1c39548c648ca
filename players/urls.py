from django.urls import path

from . import views

app_name = "players"

urlpatterns = [
    path("new/", views.PlayerEditorView.as_view(), name="player_new"),
    path("<int:pk>/edit/", views.PlayerEditorView.as_view(), name="player_edit"),
]
