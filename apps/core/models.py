from django.db import models
from django.utils import timezone


class Aksi(models.TextChoices):
    CREATE = 'CREATE'
    EDIT = 'EDIT'
    DELETE = 'DELETE'


class AuditFields(models.Model):
    """Who touched a row last and how"""

    username = models.CharField(max_length=100, null=True, blank=True)
    aksi = models.CharField(max_length=10, choices=Aksi.choices, null=True, blank=True)
    datecreate = models.DateTimeField(default=timezone.now, null=True, blank=True)

    class Meta:
        abstract = True


class VerifiedAuditFields(AuditFields):
    verif = models.BooleanField(null=True, blank=True)

    class Meta:
        abstract = True
