from django.contrib import admin
from .models import Akip, KualitasSdm, RealisasiIndikator, RtlhKecamatan, TargetDayaSaing, TargetIndikator


@admin.register(TargetIndikator)
class TargetIndikatorAdmin(admin.ModelAdmin):
    list_display = ('kdiku', 'nmiku', 'tahun', 'target', 'satuan')
    list_filter = ('tahun', 'kdiku')
    search_fields = ('kdiku', 'nmiku')


@admin.register(RealisasiIndikator)
class RealisasiIndikatorAdmin(admin.ModelAdmin):
    list_display = ('kdiku', 'tahun', 'capaian')
    list_filter = ('tahun', 'kdiku')


@admin.register(KualitasSdm)
class KualitasSdmAdmin(admin.ModelAdmin):
    list_display = ('id_data', 'kdiku', 'tahun', 'nilai')
    list_filter = ('tahun',)


@admin.register(RtlhKecamatan)
class RtlhKecamatanAdmin(admin.ModelAdmin):
    list_display = ('nmkecamatan', 'tahun', 'jltotalrt', 'jlrtlh', 'presentasitlh')
    list_filter = ('tahun',)
    search_fields = ('nmkecamatan',)
    readonly_fields = ('presentasitlh',)


@admin.register(TargetDayaSaing)
class TargetDayaSaingAdmin(admin.ModelAdmin):
    list_display = ('iddys', 'nmdys', 'kdiku', 'nmiku', 'tahun', 'target', 'capaian', 'get_capaian_persen')
    list_filter = ('tahun',)
    search_fields = ('nmdys', 'nmiku', 'kdiku')

    def get_capaian_persen(self, obj):
        if obj.target:
            return f"{(obj.capaian or 0) / obj.target * 100:.1f}%"
        return "N/A"

    get_capaian_persen.short_description = 'Capaian (%)'


@admin.register(Akip)
class AkipAdmin(admin.ModelAdmin):
    list_display = ('kodesasaran', 'indikator', 'tahun', 'reformasi', 'spi', 'sakip')
    list_filter = ('tahun', 'reformasi')
    search_fields = ('indikator',)
