from django.urls import path
from .views import bridges, irrigation, roads, utilities

urlpatterns = [
    # Reference tables
    path('ref-jalan', roads.ruas_collection, name='ruas_collection'),
    path('ref-jalan/<str:noruas>', roads.ruas_detail, name='ruas_detail'),
    path('ref-jembatan', bridges.ref_jembatan_collection, name='ref_jembatan_collection'),
    path('ref-jembatan/<str:kdjembatan>', bridges.ref_jembatan_detail, name='ref_jembatan_detail'),
    path('ref-irigasi', irrigation.ref_irigasi_collection, name='ref_irigasi_collection'),
    path('ref-irigasi/<str:kdirigasi>', irrigation.ref_irigasi_detail, name='ref_irigasi_detail'),

    # Yearly condition tables
    path('infrastuktur/2jalanmantap', roads.kondisi_collection, name='jalan_kondisi_collection'),
    path('infrastuktur/2jalanmantap/<str:noruas>/<str:tahun>', roads.kondisi_detail, name='jalan_kondisi_detail'),
    path('infrastuktur/3jembatan', bridges.jembatan_collection, name='jembatan_collection'),
    path('infrastuktur/3jembatan/<str:jembatan_id>/<str:tahun>', bridges.jembatan_detail, name='jembatan_detail'),
    path('infrastuktur/4irigasikondisibaik', irrigation.irigasi_collection, name='irigasi_collection'),
    path('infrastuktur/4irigasikondisibaik-prev', irrigation.irigasi_previous_year, name='irigasi_previous_year'),
    path('infrastuktur/4irigasikondisibaik/<str:kdirigasi>/<str:tahun>', irrigation.irigasi_detail, name='irigasi_detail'),
    path('infrastuktur/5aksesairminum', utilities.air_minum_collection, name='air_minum_collection'),
    path('infrastuktur/5aksesairminum/<str:id>', utilities.air_minum_detail, name='air_minum_detail'),
    path('infrastuktur/6ketersediaanlistrik', utilities.listrik_collection, name='listrik_collection'),
    path('infrastuktur/6ketersediaanlistrik/<str:id>', utilities.listrik_detail, name='listrik_detail'),
    path('infrastuktur/7telekomunikasi', utilities.telekomunikasi_collection, name='telekomunikasi_collection'),
    path(
        'infrastuktur/7telekomunikasi/<str:kdtelekomunikasi>/<str:tahun>',
        utilities.telekomunikasi_detail,
        name='telekomunikasi_detail',
    ),
]
