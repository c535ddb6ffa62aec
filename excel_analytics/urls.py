"""
URL configuration for the Excel Analytics project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.0/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include
from sheet_processor.utils.token_issuance import RoleTokenObtainPairView
from rest_framework_simplejwt.views import TokenRefreshView

urlpatterns = [
    path('admin/', admin.site.urls),
    # Include the sheet_processor app's URLs under 'api/'.
    path('api/', include('sheet_processor.urls')),
    # For JWT token obtain. The access token carries the caller's role.
    path('api/token/', RoleTokenObtainPairView.as_view(), name='token_obtain_pair'),
    # For JWT token refresh
    path('api/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
]
