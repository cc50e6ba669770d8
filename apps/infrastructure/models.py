from decimal import Decimal

from django.db import models

from apps.core.models import AuditFields, VerifiedAuditFields


def measure(**kwargs):
    return models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True, **kwargs)


class RuasJalan(models.Model):
    """Road segment reference"""

    noruas = models.AutoField(primary_key=True)
    namaruasjalan = models.CharField(max_length=255)
    kdkecamatan = models.CharField(max_length=10)
    nmkecamatan = models.CharField(max_length=100, null=True, blank=True)
    hotmix = measure()
    lapenmakadam = measure()
    lebarruas = measure()
    panjangruas = measure()
    perkerasanbeton = measure()
    tanahbelumtembus = measure()
    telfordkerikil = measure()

    class Meta:
        db_table = 'tblruasjalan'
        ordering = ['kdkecamatan', 'namaruasjalan', 'noruas']
        verbose_name_plural = 'ruas jalan'

    def __str__(self):
        return f"{self.noruas} - {self.namaruasjalan}"


class JalanKondisi(VerifiedAuditFields):
    """Condition of one road segment in one year (lengths in km)"""

    noruas = models.IntegerField(db_index=True)
    namaruasjalan = models.CharField(max_length=255, null=True, blank=True)
    kdkecamatan = models.CharField(max_length=10)
    nmkecamatan = models.CharField(max_length=100, null=True, blank=True)
    tahun = models.IntegerField()
    kondisibaik = measure()
    kondisisedang = measure()
    kondisirusakringan = measure()
    kondisirusakberat = measure()
    lhr = models.IntegerField(null=True, blank=True)
    akses = models.CharField(max_length=100, null=True, blank=True)

    class Meta:
        db_table = 'tbljalankondisi'
        ordering = ['-noruas', '-tahun']
        unique_together = ['noruas', 'tahun']
        verbose_name_plural = 'kondisi jalan'

    def __str__(self):
        return f"Ruas {self.noruas} - {self.tahun}"


class RefJembatan(models.Model):
    kdjembatan = models.AutoField(primary_key=True)
    nmjembatan = models.CharField(max_length=255)
    kdkecamatan = models.CharField(max_length=10)

    class Meta:
        db_table = 'refjembatan'
        ordering = ['kdkecamatan', 'nmjembatan', 'kdjembatan']
        verbose_name_plural = 'referensi jembatan'

    def __str__(self):
        return self.nmjembatan


class Kondisi(models.TextChoices):
    BAIK = 'BAIK'
    SEDANG = 'SEDANG'
    RUSAK = 'RUSAK'


class Jembatan(AuditFields):
    """Condition of one bridge in one year"""

    kdkecamatan = models.BigIntegerField()
    nmkecamatan = models.CharField(max_length=100, null=True, blank=True)
    jembatan_id = models.BigIntegerField(db_index=True)
    nama_jembatan = models.CharField(max_length=150)
    panjang_m = measure()
    tahun_bangun = models.IntegerField(null=True, blank=True)
    kondisi = models.CharField(max_length=10, choices=Kondisi.choices)
    aktif = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    tahun = models.IntegerField()

    class Meta:
        db_table = 'tbljembatan'
        ordering = ['-updated_at', '-id']
        unique_together = ['jembatan_id', 'tahun']
        verbose_name_plural = 'kondisi jembatan'

    def __str__(self):
        return f"{self.nama_jembatan} - {self.tahun}"


class RefIrigasi(models.Model):
    kdirigasi = models.AutoField(primary_key=True)
    msirigasi = models.CharField(max_length=255)
    kdkecamatan = models.CharField(max_length=10)

    class Meta:
        db_table = 'refirigasi'
        ordering = ['kdkecamatan', 'kdirigasi']
        verbose_name_plural = 'referensi irigasi'

    def __str__(self):
        return self.msirigasi


class Irigasi(VerifiedAuditFields):
    """Condition of one irrigation network in one year (areas in ha)"""

    kdirigasi = models.IntegerField()
    nmirigasi = models.CharField(max_length=255, null=True, blank=True)
    kdkecamatan = models.CharField(max_length=10)
    nmkecamatan = models.CharField(max_length=100, null=True, blank=True)
    luas = measure()
    tahun = models.IntegerField()
    konirigasibaik = measure()
    konirigasisedang = measure()
    konirigasirusakringan = measure()
    konirigasirusakberat = measure()

    class Meta:
        db_table = 'tblirigasi'
        ordering = ['-tahun', 'kdirigasi']
        unique_together = ['kdirigasi', 'tahun']
        verbose_name_plural = 'kondisi irigasi'

    def __str__(self):
        return f"{self.nmirigasi or self.kdirigasi} - {self.tahun}"


class AksesAirMinum(models.Model):
    kdkecamatan = models.CharField(max_length=10)
    nmkecamatan = models.CharField(max_length=100)
    jmlpenduduk = models.IntegerField()
    jmlairminumlayak = models.IntegerField()
    persentaseairminum = models.DecimalField(max_digits=7, decimal_places=2)
    tahun = models.IntegerField()

    class Meta:
        db_table = 'tblaksesairminum'
        ordering = ['-tahun', 'kdkecamatan']
        unique_together = ['kdkecamatan', 'tahun']
        verbose_name_plural = 'akses air minum'

    def __str__(self):
        return f"{self.nmkecamatan} - {self.tahun}"


class DayaListrik(models.Model):
    """Electricity supply against demand; rasiopersen is derived, never written by clients"""

    nmkecamatan = models.CharField(max_length=100)
    tahun = models.IntegerField()
    dayatersedia = models.DecimalField(max_digits=14, decimal_places=2)
    dayadibutuhkan = models.DecimalField(max_digits=14, decimal_places=2)
    rasiopersen = models.DecimalField(max_digits=9, decimal_places=2, null=True, blank=True, editable=False)

    class Meta:
        db_table = 'tbldayalistrik'
        ordering = ['-tahun', 'nmkecamatan']
        unique_together = ['nmkecamatan', 'tahun']
        verbose_name_plural = 'ketersediaan listrik'

    def __str__(self):
        return f"{self.nmkecamatan} - {self.tahun}"

    def save(self, *args, **kwargs):
        tersedia = Decimal(self.dayatersedia or 0)
        if tersedia:
            ratio = Decimal(self.dayadibutuhkan or 0) / tersedia * 100
            self.rasiopersen = ratio.quantize(Decimal('0.01'))
        else:
            self.rasiopersen = Decimal('0.00')
        super().save(*args, **kwargs)


class CakupanTelekomunikasi(AuditFields):
    kdtelekomunikasi = models.CharField(max_length=20)
    tahun = models.IntegerField()
    totaldesa = models.IntegerField(default=0)
    desaterlayani = models.IntegerField(default=0)

    class Meta:
        db_table = 'tblikucakupantelekomunikasi'
        ordering = ['-tahun', 'id']
        unique_together = ['kdtelekomunikasi', 'tahun']
        verbose_name_plural = 'cakupan telekomunikasi'

    def __str__(self):
        return f"{self.kdtelekomunikasi} - {self.tahun}"
