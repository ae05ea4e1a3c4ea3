from django.urls import path

from . import views

app_name = 'site_updates'

urlpatterns = [
    path('', views.SiteUpdateListView.as_view(), name='site-update-list'),
    path('read-all/', views.SiteUpdateReadAllView.as_view(), name='site-update-read-all'),
    path('indicator/', views.InboxIndicatorView.as_view(), name='inbox-indicator'),
    path('admin/', views.AdminSiteUpdateListView.as_view(), name='admin-site-update-list'),
    path('admin/<uuid:site_update_id>/', views.AdminSiteUpdateDetailView.as_view(), name='admin-site-update-detail'),
    path('<uuid:site_update_id>/read/', views.SiteUpdateReadView.as_view(), name='site-update-read'),
]
