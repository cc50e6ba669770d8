from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', RedirectView.as_view(url='/api/infrastuktur', permanent=False)),
    path('api/', include('apps.accounts.urls')),
    path('api/', include('apps.regions.urls')),
    path('api/', include('apps.infrastructure.urls')),
    path('api/', include('apps.health.urls')),
    path('api/', include('apps.indicators.urls')),
    path('api/', include('apps.finance.urls')),
]
