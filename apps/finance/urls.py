from django.urls import path
from . import views

urlpatterns = [
    path('bpkpad/belanja', views.belanja, name='belanja'),
]
