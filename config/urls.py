from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("accounts/", include("django.contrib.auth.urls")),
    path("", include("loads.urls")),
]


# admin customisation
admin.site.site_header = "LoadTracker"
admin.site.site_title = "LoadTracker"
admin.site.index_title = "LoadTracker Portal"
