from django.contrib import admin
from .models import Kematian, PrevalensiStunting


@admin.register(Kematian)
class KematianAdmin(admin.ModelAdmin):
    list_display = ('nmkecamatan', 'tahun', 'jumkem0_4tahun', 'jumkem5_9tahun', 'get_total', 'verif')
    list_filter = ('tahun', 'verif')
    search_fields = ('nmkecamatan',)

    def get_total(self, obj):
        return obj.total

    get_total.short_description = 'Total Kematian'


@admin.register(PrevalensiStunting)
class PrevalensiStuntingAdmin(admin.ModelAdmin):
    list_display = ('nmkecamatan', 'tahun', 'jumlah_balita', 'balita_stunting', 'persentase')
    list_filter = ('tahun',)
    search_fields = ('nmkecamatan',)
    readonly_fields = ('persentase',)
