from django.contrib import admin
from .models import Anggaran, Realisasi, Rekening3, Skpd


class SitaridaAdmin(admin.ModelAdmin):
    """Read and write the finance tables on the SITARIDA database"""

    using = 'sitarida'

    def get_queryset(self, request):
        return super().get_queryset(request).using(self.using)


@admin.register(Skpd)
class SkpdAdmin(SitaridaAdmin):
    list_display = ('kd_skpd', 'nm_skpd')
    search_fields = ('kd_skpd', 'nm_skpd')


@admin.register(Rekening3)
class Rekening3Admin(SitaridaAdmin):
    list_display = ('kd_rek3', 'nm_rek3')
    search_fields = ('kd_rek3', 'nm_rek3')


@admin.register(Anggaran)
class AnggaranAdmin(SitaridaAdmin):
    list_display = ('kd_skpd', 'kd_sub_kegiatan', 'kd_rek6', 'nilai_ubah')
    list_filter = ('kd_skpd',)
    search_fields = ('kd_rek6', 'nm_sub_kegiatan')


@admin.register(Realisasi)
class RealisasiAdmin(SitaridaAdmin):
    list_display = ('kd_skpd', 'kd_sub_kegiatan', 'kd_rek6', 'debet', 'kredit', 'get_netto')
    list_filter = ('kd_skpd',)
    search_fields = ('kd_rek6', 'nm_sub_kegiatan')

    def get_netto(self, obj):
        return obj.debet - obj.kredit

    get_netto.short_description = 'Realisasi'
