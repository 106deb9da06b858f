from django.urls import path

from trip_planner import views

urlpatterns = [
    path("api/v1/health", views.health_view, name="health"),
    path("api/v1/trip-plan", views.trip_plan_view, name="trip-plan"),
    path("api/v1/history", views.history_view, name="history"),
]
