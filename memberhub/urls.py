"""
URL configuration for memberhub project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import include, path

from . import views

urlpatterns = [
    path('admin/', admin.site.urls),
    path('ping/', views.PingView.as_view(), name='ping'),
    path('profiles/', include('profiles.urls')),
    path('conversations/', include('conversations.urls')),
    path('site-updates/', include('site_updates.urls')),
]
