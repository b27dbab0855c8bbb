# apps/profileapp/urls.py
from django.urls import path

from apps.profileapp.views import MyProfileView

urlpatterns = [
    path("me/", MyProfileView.as_view(), name="profile-me"),
]
