from django.urls import path

from . import views

app_name = "blog"

urlpatterns = [
    path("blogs/", views.blog_list, name="blog_list"),
    path("blogs/tag/<str:tag>/", views.blog_tag, name="blog_tag"),
    path("blog/<slug:slug>/", views.blog_detail, name="blog_detail"),
]
