from django.urls import path
from . import views

urlpatterns = [
    path('ref-kecamatan', views.kecamatan_collection, name='kecamatan_collection'),
    path('ref-kecamatan/<str:id>', views.kecamatan_detail, name='kecamatan_detail'),
    path('ref-desa', views.desa_collection, name='desa_collection'),
    path('ref-desa/<str:id>', views.desa_detail, name='desa_detail'),
    path('ref-opd', views.opd_collection, name='opd_collection'),
    path('ref-opd/<str:id>', views.opd_detail, name='opd_detail'),
    path('ref-penduduk', views.penduduk_collection, name='penduduk_collection'),
    path('ref-penduduk/<str:id>', views.penduduk_detail, name='penduduk_detail'),
]
