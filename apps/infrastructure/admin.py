from django.contrib import admin
from .models import (
    AksesAirMinum, CakupanTelekomunikasi, DayaListrik, Irigasi, JalanKondisi,
    Jembatan, RefIrigasi, RefJembatan, RuasJalan,
)


@admin.register(RuasJalan)
class RuasJalanAdmin(admin.ModelAdmin):
    list_display = ('noruas', 'namaruasjalan', 'kdkecamatan', 'nmkecamatan', 'panjangruas')
    search_fields = ('namaruasjalan', 'nmkecamatan')
    list_filter = ('kdkecamatan',)


@admin.register(JalanKondisi)
class JalanKondisiAdmin(admin.ModelAdmin):
    list_display = ('noruas', 'namaruasjalan', 'tahun', 'kondisibaik', 'kondisirusakberat', 'verif')
    list_filter = ('tahun', 'verif')
    search_fields = ('namaruasjalan', 'nmkecamatan')


@admin.register(RefJembatan)
class RefJembatanAdmin(admin.ModelAdmin):
    list_display = ('kdjembatan', 'nmjembatan', 'kdkecamatan')
    search_fields = ('nmjembatan',)


@admin.register(Jembatan)
class JembatanAdmin(admin.ModelAdmin):
    list_display = ('jembatan_id', 'nama_jembatan', 'tahun', 'kondisi', 'aktif', 'updated_at')
    list_filter = ('tahun', 'kondisi', 'aktif')
    search_fields = ('nama_jembatan', 'nmkecamatan')


@admin.register(RefIrigasi)
class RefIrigasiAdmin(admin.ModelAdmin):
    list_display = ('kdirigasi', 'msirigasi', 'kdkecamatan')
    search_fields = ('msirigasi',)


@admin.register(Irigasi)
class IrigasiAdmin(admin.ModelAdmin):
    list_display = ('kdirigasi', 'nmirigasi', 'tahun', 'luas', 'konirigasibaik', 'get_baik_persen')
    list_filter = ('tahun', 'verif')
    search_fields = ('nmirigasi', 'nmkecamatan')

    def get_baik_persen(self, obj):
        if obj.luas:
            return f"{(obj.konirigasibaik or 0) / obj.luas * 100:.2f}%"
        return "N/A"

    get_baik_persen.short_description = 'Kondisi Baik'


@admin.register(AksesAirMinum)
class AksesAirMinumAdmin(admin.ModelAdmin):
    list_display = ('nmkecamatan', 'tahun', 'jmlpenduduk', 'jmlairminumlayak', 'persentaseairminum')
    list_filter = ('tahun',)
    search_fields = ('nmkecamatan',)


@admin.register(DayaListrik)
class DayaListrikAdmin(admin.ModelAdmin):
    list_display = ('nmkecamatan', 'tahun', 'dayatersedia', 'dayadibutuhkan', 'rasiopersen')
    list_filter = ('tahun',)
    readonly_fields = ('rasiopersen',)


@admin.register(CakupanTelekomunikasi)
class CakupanTelekomunikasiAdmin(admin.ModelAdmin):
    list_display = ('kdtelekomunikasi', 'tahun', 'totaldesa', 'desaterlayani', 'username', 'aksi')
    list_filter = ('tahun',)
