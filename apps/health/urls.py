from django.urls import path
from . import views

urlpatterns = [
    path('keseheatanmasyarakat/1usiaharapanhidup', views.kematian_collection, name='kematian_collection'),
    path('keseheatanmasyarakat/1usiaharapanhidup/<str:id>', views.kematian_detail, name='kematian_detail'),
    path('keseheatanmasyarakat/3stunting', views.stunting_collection, name='stunting_collection'),
    path('keseheatanmasyarakat/3stunting/<str:id>', views.stunting_detail, name='stunting_detail'),
]
