from django.contrib import admin
from .models import Desa, Kecamatan, Opd, Penduduk


@admin.register(Kecamatan)
class KecamatanAdmin(admin.ModelAdmin):
    list_display = ('kdkecamatan', 'nmkecamatan', 'kddesa')
    search_fields = ('nmkecamatan', 'kdkecamatan')


@admin.register(Desa)
class DesaAdmin(admin.ModelAdmin):
    list_display = ('kddesa', 'nmdesa')
    search_fields = ('nmdesa', 'kddesa')


@admin.register(Opd)
class OpdAdmin(admin.ModelAdmin):
    list_display = ('kdopd', 'nmopd')
    search_fields = ('nmopd',)


@admin.register(Penduduk)
class PendudukAdmin(admin.ModelAdmin):
    list_display = ('nmkecamatan', 'tahun', 'laki_laki', 'perempuan', 'total', 'get_sex_ratio')
    list_filter = ('tahun',)
    search_fields = ('nmkecamatan',)
    ordering = ('-tahun', 'kdkecamatan')

    def get_sex_ratio(self, obj):
        """Males per 100 females"""
        if obj.perempuan:
            return f"{obj.laki_laki / obj.perempuan * 100:.1f}"
        return "N/A"

    get_sex_ratio.short_description = 'Rasio Jenis Kelamin'
