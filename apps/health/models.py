from decimal import Decimal

from django.db import models

from apps.core.models import VerifiedAuditFields


class Kematian(VerifiedAuditFields):
    """Child deaths per age band, per kecamatan and year"""

    tahun = models.IntegerField()
    idkecamatan = models.IntegerField()
    nmkecamatan = models.CharField(max_length=100, blank=True, default='')
    jumkem0_4tahun = models.IntegerField(db_column='jumkem0_4Tahun', null=True, blank=True)
    jumkem5_9tahun = models.IntegerField(db_column='jumkem5_9Tahun', null=True, blank=True)
    jumkem10_14tahun = models.IntegerField(db_column='jumkem10_14Tahun', null=True, blank=True)
    jumkem15_19tahun = models.IntegerField(db_column='jumkem15_19Tahun', null=True, blank=True)

    class Meta:
        db_table = 'tblkematian'
        ordering = ['-tahun', 'id']
        unique_together = ['tahun', 'idkecamatan']
        verbose_name_plural = 'kematian'

    def __str__(self):
        return f"{self.nmkecamatan or self.idkecamatan} - {self.tahun}"

    @property
    def total(self):
        bands = (self.jumkem0_4tahun, self.jumkem5_9tahun, self.jumkem10_14tahun, self.jumkem15_19tahun)
        return sum(band or 0 for band in bands)


class PrevalensiStunting(models.Model):
    kdkecamatan = models.IntegerField()
    nmkecamatan = models.CharField(max_length=100)
    tahun = models.IntegerField()
    jumlah_balita = models.IntegerField(db_column='jumlahBalita', default=0)
    balita_stunting = models.IntegerField(db_column='balitaStunting', default=0)
    persentase = models.DecimalField(max_digits=7, decimal_places=2, default=Decimal('0.00'))

    class Meta:
        db_table = 'tblPrevalensiStunting'
        ordering = ['-tahun', 'kdkecamatan']
        unique_together = ['kdkecamatan', 'tahun']
        verbose_name_plural = 'prevalensi stunting'

    def __str__(self):
        return f"{self.nmkecamatan} - {self.tahun}"

    def save(self, *args, **kwargs):
        if self.jumlah_balita and self.jumlah_balita > 0:
            ratio = Decimal(self.balita_stunting or 0) * 100 / Decimal(self.jumlah_balita)
            self.persentase = ratio.quantize(Decimal('0.01'))
        else:
            self.persentase = Decimal('0.00')
        super().save(*args, **kwargs)
