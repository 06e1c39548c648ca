from django.urls import path

from . import views

app_name = "sports"

urlpatterns = [
    path("", views.SportListView.as_view(), name="sport_list"),
    path("new/", views.SportBuilderView.as_view(), name="sport_new"),
    path("<int:pk>/edit/", views.SportBuilderView.as_view(), name="sport_edit"),
]
