from django.urls import path
from . import views

urlpatterns = [
    # Composite summaries
    path('infrastuktur', views.infrastruktur_summary, name='infrastruktur_summary'),
    path('kualitassdm', views.kualitas_sdm, name='kualitas_sdm'),
    path('lingkunganhidup', views.lingkungan_hidup, name='lingkungan_hidup'),
    path('lingkunganhidup/<str:id>', views.kualitas_sdm_detail, name='lingkungan_hidup_detail'),
    path('capaianrtlh', views.capaian_rtlh, name='capaian_rtlh'),
    path('capaianrtlh/<str:id>', views.kualitas_sdm_detail, name='capaian_rtlh_detail'),
    path('rtlh', views.rtlh, name='rtlh'),
    path('keseheatanmasyarakat', views.kesehatan_masyarakat, name='kesehatan_masyarakat'),
    path('kesejahteraanmasyarakat', views.kesejahteraan_masyarakat, name='kesejahteraan_masyarakat'),
    path('perkapita', views.perkapita, name='perkapita'),

    # Targets and scores
    path('tblperkapita', views.perkapita_targets, name='perkapita_targets'),
    path('akip', views.akip_targets, name='akip_targets'),
    path('akip/<str:id>', views.kualitas_sdm_detail, name='akip_detail'),
    path('tblakip', views.akip_scores, name='akip_scores'),
    path('indexdayasaing', views.index_daya_saing, name='index_daya_saing'),
    path('indexdayasaing/<str:id>', views.index_daya_saing_detail, name='index_daya_saing_detail'),
    path('tbltargetdayasaing', views.target_daya_saing, name='target_daya_saing'),
]
