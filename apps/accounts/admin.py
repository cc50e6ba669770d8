from django.contrib import admin
from .models import Admin


@admin.register(Admin)
class AdminAccountAdmin(admin.ModelAdmin):
    list_display = ('username', 'nmpengguna', 'nipid', 'kdopd', 'level', 'lockuser', 'datecreate')
    list_filter = ('level', 'lockuser')
    search_fields = ('username', 'nmpengguna', 'nipid')
    exclude = ('password',)
