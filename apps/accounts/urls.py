from django.urls import path
from . import views

urlpatterns = [
    path('login', views.admin_collection, name='admin_collection'),
    path('login/<str:id>', views.admin_detail, name='admin_detail'),
    path('auth/login', views.login, name='login'),
    path('auth/logout', views.logout, name='logout'),
    path('me', views.me, name='me'),
]
