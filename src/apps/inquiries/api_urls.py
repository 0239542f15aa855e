"""API URL configuration for inquiry endpoints."""

from django.urls import path

from . import api_views

app_name = "inquiries_api"

urlpatterns = [
    path("inquiries", api_views.SubmitInquiryView.as_view(), name="submit"),
    path("api/public/inquiries", api_views.SubmitInquiryView.as_view(), name="submit_legacy"),
    path("authenticate", api_views.AuthenticateView.as_view(), name="authenticate"),
    path("admin/inquiries", api_views.AdminInquiryListView.as_view(), name="admin_list"),
    path("admin/inquiries/<str:pk>", api_views.AdminInquiryDeleteView.as_view(), name="admin_delete"),
    path("health", api_views.HealthView.as_view(), name="health"),
]
