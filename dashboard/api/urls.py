"""
Dashboard API URLs.
"""

from django.urls import path

from .viewsets import ClientDashboardView, FreelancerDashboardView

app_name = 'dashboard'

urlpatterns = [
    path('client/', ClientDashboardView.as_view(), name='client'),
    path('freelancer/', FreelancerDashboardView.as_view(), name='freelancer'),
]
