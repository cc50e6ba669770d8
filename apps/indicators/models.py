from decimal import Decimal

from django.db import models
from django.utils import timezone


def value(**kwargs):
    return models.DecimalField(max_digits=18, decimal_places=2, null=True, blank=True, **kwargs)


class TargetIndikator(models.Model):
    """Yearly target of one IKU (key performance indicator)"""

    kdiku = models.CharField(max_length=10)
    nmiku = models.CharField(max_length=255)
    tahun = models.IntegerField()
    target = value()
    satuan = models.CharField(max_length=50, null=True, blank=True)

    class Meta:
        db_table = 'tbltargetindikator'
        ordering = ['kdiku', 'tahun']
        unique_together = ['kdiku', 'tahun']
        verbose_name_plural = 'target indikator'

    def __str__(self):
        return f"{self.kdiku} {self.nmiku} - {self.tahun}"


class RealisasiIndikator(models.Model):
    """Yearly achieved value of one IKU"""

    kdiku = models.CharField(max_length=10)
    tahun = models.IntegerField()
    capaian = value()

    class Meta:
        db_table = 'tblrealikhk'
        ordering = ['kdiku', 'tahun']
        unique_together = ['kdiku', 'tahun']
        verbose_name_plural = 'realisasi indikator'

    def __str__(self):
        return f"{self.kdiku} - {self.tahun}"


class KualitasSdm(models.Model):
    id_data = models.AutoField(primary_key=True)
    kdiku = models.CharField(max_length=10)
    tahun = models.IntegerField()
    nilai = value()

    class Meta:
        db_table = 'tblkualitassdm'
        ordering = ['tahun', 'kdiku']
        verbose_name_plural = 'kualitas SDM'

    def __str__(self):
        return f"{self.kdiku} - {self.tahun}"


class RtlhKecamatan(models.Model):
    """Uninhabitable houses (RTLH) per kecamatan and year"""

    kdkecamatan = models.IntegerField()
    nmkecamatan = models.CharField(max_length=100)
    tahun = models.IntegerField()
    jltotalrt = models.IntegerField(default=0)
    jlrtlh = models.IntegerField(default=0)
    presentasitlh = models.DecimalField(max_digits=7, decimal_places=2, default=Decimal('0.00'))

    class Meta:
        db_table = 'tblrtlhkec'
        ordering = ['kdkecamatan', 'tahun']
        unique_together = ['kdkecamatan', 'tahun']
        verbose_name_plural = 'RTLH kecamatan'

    def __str__(self):
        return f"{self.nmkecamatan} - {self.tahun}"

    def save(self, *args, **kwargs):
        if self.jltotalrt:
            ratio = Decimal(self.jlrtlh or 0) * 100 / Decimal(self.jltotalrt)
            self.presentasitlh = ratio.quantize(Decimal('0.01'))
        else:
            self.presentasitlh = Decimal('0.00')
        super().save(*args, **kwargs)


class TargetDayaSaing(models.Model):
    """Regional competitiveness index: target and achievement per sub-indicator"""

    iddys = models.CharField(max_length=20)
    nmdys = models.CharField(max_length=255)
    kdiku = models.CharField(max_length=10)
    nmiku = models.CharField(max_length=255)
    tahun = models.IntegerField()
    target = value()
    capaian = value()

    class Meta:
        db_table = 'tbltargetdayasaing'
        ordering = ['iddys', 'kdiku', 'tahun']
        unique_together = ['kdiku', 'tahun']
        verbose_name_plural = 'index daya saing'

    def __str__(self):
        return f"{self.nmdys} / {self.nmiku} - {self.tahun}"


class Akip(models.Model):
    """Performance accountability (AKIP) scores per target code"""

    kodesasaran = models.IntegerField()
    indikator = models.CharField(max_length=255)
    tahun = models.IntegerField()
    reformasi = models.CharField(max_length=10, null=True, blank=True)
    spi = value()
    sakip = value()
    created_at = models.DateTimeField(db_column='createdAt', default=timezone.now)

    class Meta:
        db_table = 'tblakip'
        ordering = ['kodesasaran', 'tahun']
        unique_together = ['kodesasaran', 'tahun']
        verbose_name_plural = 'AKIP'

    def __str__(self):
        return f"{self.kodesasaran} {self.indikator} - {self.tahun}"
