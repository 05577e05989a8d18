# herd/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from herd.api.views import CowViewSet

router = DefaultRouter()
router.register("cows", CowViewSet, basename="cow")

urlpatterns = [
    path("", include(router.urls)),
]
