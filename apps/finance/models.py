"""Regional budget tables of the SITARIDA finance database (routed to the 'sitarida' alias)"""
from django.db import models


def amount(**kwargs):
    return models.DecimalField(max_digits=20, decimal_places=2, default=0, **kwargs)


class Skpd(models.Model):
    """Regional work unit (OPD) as known to the finance system"""

    kd_skpd = models.CharField(max_length=30, unique=True)
    nm_skpd = models.CharField(max_length=255)

    class Meta:
        db_table = 'ms_skpd'
        ordering = ['kd_skpd']
        verbose_name = 'SKPD'
        verbose_name_plural = 'SKPD'

    def __str__(self):
        return f"{self.kd_skpd} - {self.nm_skpd}"


class Rekening3(models.Model):
    kd_rek3 = models.CharField(max_length=12, unique=True)
    nm_rek3 = models.CharField(max_length=255)

    class Meta:
        db_table = 'ms_rek3'
        ordering = ['kd_rek3']
        verbose_name = 'rekening'
        verbose_name_plural = 'rekening'

    def __str__(self):
        return f"{self.kd_rek3} - {self.nm_rek3}"


class Anggaran(models.Model):
    """Budget line (RKA) per sub-activity and 6th level account"""

    kd_skpd = models.CharField(max_length=30, db_index=True)
    kd_sub_kegiatan = models.CharField(max_length=30)
    nm_sub_kegiatan = models.CharField(max_length=255, null=True, blank=True)
    kd_rek6 = models.CharField(max_length=20)
    nilai_ubah = amount()

    class Meta:
        db_table = 'trdrka'
        verbose_name_plural = 'anggaran'

    def __str__(self):
        return f"{self.kd_skpd} {self.kd_rek6}: {self.nilai_ubah}"


class Realisasi(models.Model):
    """Posted spending per sub-activity and account"""

    kd_skpd = models.CharField(max_length=30, db_index=True)
    kd_sub_kegiatan = models.CharField(max_length=30)
    nm_sub_kegiatan = models.CharField(max_length=255, null=True, blank=True)
    kd_rek6 = models.CharField(max_length=20)
    debet = amount()
    kredit = amount()

    class Meta:
        db_table = 'trdmaping_skpd'
        verbose_name_plural = 'realisasi'

    def __str__(self):
        return f"{self.kd_skpd} {self.kd_rek6}: {self.debet - self.kredit}"
