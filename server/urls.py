from django.urls import include, path

urlpatterns = [
    path("api/", include("server.portfolio_sim.urls")),
]
