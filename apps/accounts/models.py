from django.db import models
from django.utils import timezone


class Level(models.TextChoices):
    DEVELOPER = 'DEVELOPER'
    ADMIN = 'ADMIN'
    VERIFIKATOR = 'VERIFIKATOR'
    OPERATOR = 'OPERATOR'


class LockStatus(models.TextChoices):
    AKTIF = 'AKTIF'
    NONAKTIF = 'NONAKTIF'


class Admin(models.Model):
    """Dashboard operator account; password holds a bcrypt hash"""

    nipid = models.CharField(max_length=30, unique=True, null=True, blank=True)
    nmpengguna = models.CharField(max_length=100)
    username = models.CharField(max_length=50, unique=True)
    password = models.CharField(max_length=100)
    kdopd = models.CharField(max_length=20, null=True, blank=True)
    nmopd = models.CharField(max_length=255, null=True, blank=True)
    level = models.CharField(max_length=20, choices=Level.choices, null=True, blank=True)
    datecreate = models.DateTimeField(default=timezone.now)
    lockuser = models.CharField(max_length=10, choices=LockStatus.choices, default=LockStatus.AKTIF)

    class Meta:
        db_table = 'admin'
        ordering = ['-datecreate']

    def __str__(self):
        return f"{self.username} ({self.nmpengguna})"

    @property
    def is_locked(self):
        return self.lockuser == LockStatus.NONAKTIF
