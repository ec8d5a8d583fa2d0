import pytest
from datetime import date, time, datetime

from adifcodec.value     import *
from adifcodec.tokenizer import Token

class Test_Encode :

    def test_str (self) :
        assert Str ('Hello, world!').encode ('test') == '<TEST:13>Hello, world!'
    # end def test_str

    def test_empty_str (self) :
        assert Str ('').encode ('comment') == '<COMMENT:0>'
    # end def test_empty_str

    def test_bool (self) :
        assert Boolean (True).encode  ('test') == '<TEST:1:B>Y'
        assert Boolean (False).encode ('test') == '<TEST:1:B>N'
    # end def test_bool

    def test_number (self) :
        assert Number (3.5).encode   ('test') == '<TEST:3:N>3.5'
        assert Number (-3.5).encode  ('test') == '<TEST:4:N>-3.5'
        assert Number (-12.0).encode ('test') == '<TEST:3:N>-12'
        assert Number (15).encode    ('test') == '<TEST:2:N>15'
        assert Number (1e20).encode  ('test') == \
            '<TEST:21:N>100000000000000000000'
    # end def test_number

    def test_number_no_exponent (self) :
        assert Number (1e16).encode  ('t') == '<T:17:N>10000000000000000'
        assert Number (1e-7).encode  ('t') == '<T:9:N>0.0000001'
        assert Number (-2.5e-3).encode ('t') == '<T:7:N>-0.0025'
    # end def test_number_no_exponent

    @pytest.mark.parametrize ('v', [float ('nan'), float ('inf'), -float ('inf')])
    def test_number_not_finite (self, v) :
        with pytest.raises (Non_Finite_Number) as err :
            Number (v).encode ('freq')
        assert err.value.key == 'freq'
        assert isinstance (err.value, ADIF_Encode_Error)
    # end def test_number_not_finite

    @pytest.mark.parametrize ('key', ['app_n1mm_id', 'my-call', '', 'näme'])
    def test_invalid_key (self, key) :
        with pytest.raises (Invalid_Key) as err :
            Str ('x').encode (key)
        assert err.value.key == key
        assert isinstance (err.value, ADIF_Encode_Error)
    # end def test_invalid_key

    def test_date (self) :
        d = Date (date (2020, 2, 24))
        assert d.encode ('test') == '<TEST:8:D>20200224'
        assert Date (date (1930, 1, 1)).encode ('x') == '<X:8:D>19300101'
    # end def test_date

    def test_date_too_early (self) :
        with pytest.raises (Date_Too_Early) as err :
            Date (date (1910, 2, 2)).encode ('test')
        assert err.value.key      == 'test'
        assert err.value.offender == '1910-02-02'
        assert isinstance (err.value, ADIF_Encode_Error)
        assert str (err.value) == \
            'test: Date must be >= 1930. Offending value: 1910-02-02'
    # end def test_date_too_early

    def test_time (self) :
        assert Time (time (23, 2, 5)).encode ('test') == '<TEST:6:T>230205'
        assert Time (time (0, 0)).encode ('test')     == '<TEST:6:T>000000'
    # end def test_time

    def test_non_ascii (self) :
        with pytest.raises (Non_Ascii_String) as err :
            Str ('Grüße').encode ('name')
        assert err.value.key      == 'name'
        assert err.value.offender == 'Grüße'
    # end def test_non_ascii

    def test_non_ascii_checked_first (self) :
        with pytest.raises (Non_Ascii_String) :
            Str ('Grüße\nRalf').encode ('name')
    # end def test_non_ascii_checked_first

    def test_linebreak (self) :
        with pytest.raises (String_Contains_Linebreak) :
            Str ('two\nlines').encode ('comment')
        with pytest.raises (String_Contains_Linebreak) :
            Str ('carriage\rreturn').encode ('comment')
    # end def test_linebreak

    def test_key_normalization (self) :
        assert Number (15.5).encode ('a number') == '<A_NUMBER:4:N>15.5'
        assert normalize_key ('my Gridsquare') == 'MY_GRIDSQUARE'
    # end def test_key_normalization

# end class Test_Encode

class Test_Decode :

    def decode (self, value, type = None, key = 'TEST', length = None, **kw) :
        if length is None :
            length = byte_length (value)
        return decode_value (Token (key, length, type, value, 7), **kw)
    # end def decode

    def test_str (self) :
        assert self.decode ('VA3ZZA') == Str ('VA3ZZA')
    # end def test_str

    def test_unknown_type_is_str (self) :
        assert self.decode ('KA', type = 'S') == Str ('KA')
        assert self.decode ('3.5', type = 'M') == Str ('3.5')
    # end def test_unknown_type_is_str

    def test_bool (self) :
        assert self.decode ('Y', 'B') == Boolean (True)
        assert self.decode ('y', 'B') == Boolean (True)
        assert self.decode ('N', 'B') == Boolean (False)
        assert self.decode ('x', 'B') == Boolean (False)
        assert self.decode ('',  'B') == Boolean (False)
    # end def test_bool

    def test_number (self) :
        assert self.decode ('7.025', 'N') == Number (7.025)
        assert self.decode ('-12',   'N') == Number (-12.0)
        assert self.decode ('1e+20', 'N') == Number (1e20)
    # end def test_number

    @pytest.mark.parametrize \
        ( 'text'
        , [ 'abc', '', ' 1', '1_000', '1.2.3', 'nan', 'inf', 'infinity'
          , '\u0661\u0662', '1\u0662', '-'
          ]
        )
    def test_malformed_number (self, text) :
        with pytest.raises (Malformed_Number) as err :
            self.decode (text, 'N', key = 'FREQ')
        assert err.value.key      == 'FREQ'
        assert err.value.offender == text
        assert err.value.lineno   == 7
        assert isinstance (err.value, ADIF_Decode_Error)
    # end def test_malformed_number

    def test_malformed_number_message (self) :
        with pytest.raises (ADIF_Error) as err :
            self.decode ('abc', 'N', key = 'FREQ')
        assert str (err.value) == \
            '7: FREQ: Malformed number. Offending value: abc'
    # end def test_malformed_number_message

    def test_date (self) :
        assert self.decode ('20200224', 'D') == Date (date (2020, 2, 24))
        assert self.decode ('19100202', 'D') == Date (date (1910, 2, 2))
    # end def test_date

    @pytest.mark.parametrize \
        ('text', ['2020022', '20201301', '20200230', '2020-2-4', 'today'])
    def test_malformed_date (self, text) :
        with pytest.raises (Malformed_Date) as err :
            self.decode (text, 'D', key = 'QSO_DATE')
        assert err.value.offender == text
    # end def test_malformed_date

    def test_time (self) :
        assert self.decode ('230205', 'T') == Time (time (23, 2, 5))
        assert self.decode ('2302',   'T') == Time (time (23, 2))
    # end def test_time

    @pytest.mark.parametrize ('text', ['2360', '12345', '246000', '12:30'])
    def test_malformed_time (self, text) :
        with pytest.raises (Malformed_Time) :
            self.decode (text, 'T', key = 'TIME_ON')
    # end def test_malformed_time

    def test_length_advisory (self) :
        assert self.decode ('VA3ZZA', length = 3) == Str ('VA3ZZA')
    # end def test_length_advisory

    def test_length_strict (self) :
        with pytest.raises (Length_Mismatch) as err :
            self.decode ('VA3ZZA', key = 'CALL', length = 3, strict = True)
        assert err.value.length == 3
        assert 'Declared length 3 does not match value length 6' \
            in str (err.value)
        assert self.decode ('VA3ZZA', length = 6, strict = True) \
            == Str ('VA3ZZA')
    # end def test_length_strict

# end class Test_Decode

class Test_Value :

    def test_immutable (self) :
        v = Str ('CW')
        with pytest.raises (AttributeError) :
            v.value = 'SSB'
        with pytest.raises (AttributeError) :
            v.other = 1
        assert v.value == 'CW'
    # end def test_immutable

    def test_equality (self) :
        assert Str ('1') != Number (1)
        assert Number (1) == Number (1.0)
        assert Boolean (True) != Number (1)
        assert hash (Str ('CW')) == hash (Str ('CW'))
        assert len (set ([Str ('CW'), Str ('CW'), Str ('SSB')])) == 2
    # end def test_equality

    def test_type_check (self) :
        with pytest.raises (TypeError) :
            Str (5)
        with pytest.raises (TypeError) :
            Number (True)
        with pytest.raises (TypeError) :
            Date (datetime (2020, 2, 24, 12, 0))
        with pytest.raises (TypeError) :
            Time (date (2020, 2, 24))
    # end def test_type_check

    def test_as_value (self) :
        assert as_value (True)               == Boolean (True)
        assert as_value (14)                 == Number (14.0)
        assert as_value (7.025)              == Number (7.025)
        assert as_value ('CW')               == Str ('CW')
        assert as_value (date (2021, 4, 1))  == Date (date (2021, 4, 1))
        assert as_value (time (12, 30))      == Time (time (12, 30))
        v = Str ('x')
        assert as_value (v) is v
        with pytest.raises (TypeError) :
            as_value (datetime (2021, 4, 1, 12, 30))
        with pytest.raises (TypeError) :
            as_value ([1, 2])
    # end def test_as_value

    def test_repr (self) :
        assert repr (Str ('CW'))    == "Str ('CW')"
        assert repr (Number (1.5))  == 'Number (1.5)'
        assert str (Boolean (True)) == 'True'
    # end def test_repr

# end class Test_Value
