from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include(("site_counts.urls", "site_counts"), namespace="site_counts")),
    path("blog/", include(("blog.urls", "blog"), namespace="blog")),
]
