from django.urls import path
from . import api_views

urlpatterns = [
    path(
        "block-renderer/<slug:namespace>/<slug:name>/",
        api_views.BlockRendererAPI.as_view(),
        name="block-renderer",
    ),
]
