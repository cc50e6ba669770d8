from django.db import models


class Kecamatan(models.Model):
    kddesa = models.IntegerField(null=True, blank=True)
    kdkecamatan = models.IntegerField(db_index=True)
    nmkecamatan = models.CharField(max_length=100)

    class Meta:
        db_table = 'refkecamatan'
        ordering = ['-kdkecamatan']
        verbose_name_plural = 'kecamatan'

    def __str__(self):
        return f"{self.kdkecamatan} - {self.nmkecamatan}"


class Desa(models.Model):
    kddesa = models.BigIntegerField(unique=True)
    nmdesa = models.CharField(max_length=100)

    class Meta:
        db_table = 'refdesa'
        ordering = ['-kddesa']
        verbose_name_plural = 'desa'

    def __str__(self):
        return self.nmdesa


class Opd(models.Model):
    kdopd = models.IntegerField(unique=True)
    nmopd = models.CharField(max_length=255)

    class Meta:
        db_table = 'refopd'
        ordering = ['kdopd']
        verbose_name = 'OPD'
        verbose_name_plural = 'OPD'

    def __str__(self):
        return self.nmopd


class Penduduk(models.Model):
    """Population of one kecamatan in one year"""

    tahun = models.IntegerField()
    kdkecamatan = models.IntegerField()
    nmkecamatan = models.CharField(max_length=100)
    laki_laki = models.IntegerField(db_column='lakiLaki', default=0)
    perempuan = models.IntegerField(default=0)
    total = models.IntegerField(default=0)
    jumlahkk = models.IntegerField(default=0)
    pop04tahun = models.IntegerField(default=0)
    pop59tahun = models.IntegerField(default=0)
    pop1014tahun = models.IntegerField(default=0)
    pop1519tahun = models.IntegerField(default=0)

    class Meta:
        db_table = 'refpenduduk'
        ordering = ['-tahun', 'kdkecamatan']
        unique_together = ['kdkecamatan', 'tahun']
        verbose_name_plural = 'penduduk'

    def __str__(self):
        return f"{self.nmkecamatan} - {self.tahun}"

    def save(self, *args, **kwargs):
        self.total = (self.laki_laki or 0) + (self.perempuan or 0)
        super().save(*args, **kwargs)
