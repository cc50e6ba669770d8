from decimal import Decimal

import pytest

from apps.core.errors import BadRequest
from apps.core.parsing import Coerce, path_id, path_year, require_int, require_str
from apps.core.serialization import MAX_SAFE_INTEGER, json_safe


class TestCoerce:
    def test_to_str_trims_and_blanks_to_none(self):
        assert Coerce.to_str('  Sipirok ') == 'Sipirok'
        assert Coerce.to_str('   ') is None
        assert Coerce.to_str(None) is None

    def test_to_str_enforces_max_length(self):
        with pytest.raises(BadRequest) as exc:
            Coerce.to_str('abcdef', max_length=3, field='kdkecamatan')
        assert exc.value.message == 'kdkecamatan maksimal 3 karakter'

    @pytest.mark.parametrize('value,expected', [
        ('12', 12),
        (' 7 ', 7),
        (2024.0, 2024),
        ('3.5', None),
        ('abc', None),
        ('9007199254740993', 9007199254740993),
        ('12.0', 12),
        ('', None),
        (True, None),
    ])
    def test_to_int(self, value, expected):
        assert Coerce.to_int(value) == expected

    def test_to_number_handles_driver_types(self):
        assert Coerce.to_number(Decimal('10')) == 10
        assert Coerce.to_number(Decimal('12.50')) == 12.5
        assert Coerce.to_number('3.25') == 3.25
        assert Coerce.to_number(None) is None

    def test_to_decimal_accepts_comma(self):
        assert Coerce.to_decimal('12,5') == Decimal('12.5')
        assert Coerce.to_decimal(None) is None

    def test_to_decimal_rejects_garbage(self):
        with pytest.raises(BadRequest):
            Coerce.to_decimal('12a')

    def test_to_bigint_digits_only(self):
        assert Coerce.to_bigint('9007199254740993') == 9007199254740993
        assert Coerce.to_bigint('-1') is None
        assert Coerce.to_bigint('1e3') is None

    def test_to_bool(self):
        assert Coerce.to_bool('true') is True
        assert Coerce.to_bool('1') is True
        assert Coerce.to_bool(False) is False
        assert Coerce.to_bool(None) is None

    def test_to_year_needs_four_digits(self):
        assert Coerce.to_year('2025') == 2025
        assert Coerce.to_year('25') is None

    def test_safe_helpers_fall_back(self):
        assert Coerce.safe_int('NA') == 0
        assert Coerce.safe_decimal('x') == Decimal('0.00')


class TestRequestHelpers:
    def test_require_int_message(self):
        with pytest.raises(BadRequest) as exc:
            require_int({'kddesa': 'x'}, 'kddesa', minimum=1)
        assert exc.value.message == 'kddesa wajib integer >= 1'

    def test_require_str(self):
        assert require_str({'nama': ' Arse '}, 'nama') == 'Arse'
        with pytest.raises(BadRequest):
            require_str({}, 'nama', max_length=10)

    def test_path_id(self):
        assert path_id('15') == 15
        with pytest.raises(BadRequest):
            path_id('0')
        with pytest.raises(BadRequest):
            path_id('abc')

    def test_path_year_range(self):
        assert path_year('2024') == 2024
        with pytest.raises(BadRequest):
            path_year('1800')


class TestJsonSafe:
    def test_large_integers_become_strings(self):
        data = {'id': MAX_SAFE_INTEGER + 2, 'rows': [1, True]}
        assert json_safe(data) == {'id': str(MAX_SAFE_INTEGER + 2), 'rows': [1, True]}
