#!/usr/bin/python
# Copyright (C) 2019-22 Dr. Ralf Schlatterbeck Open Source Consulting.
# Reichergasse 131, A-3411 Weidling.
# Web: http://www.runtux.com Email: office@runtux.com
# ****************************************************************************
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are
# met:
#
# 1. Redistributions of source code must retain the above copyright
#    notice, this list of conditions and the following disclaimer.
#
# 2. Redistributions in binary form must reproduce the above copyright
#    notice, this list of conditions and the following disclaimer in the
#    documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS
# IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED
# TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A
# PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT
# HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL,
# SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED
# TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR
# PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS
# SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
# ****************************************************************************

""" Typed ADIF values.
    Each value knows how to render itself as a tag and how to be
    constructed from the raw text of a tag with its type indicator.

    >>> Str ('Hello, world!').encode ('test')
    '<TEST:13>Hello, world!'
    >>> Boolean (True).encode ('test')
    '<TEST:1:B>Y'
    >>> Number (3.5).encode ('test')
    '<TEST:3:N>3.5'
    >>> Number (-12.0).encode ('test')
    '<TEST:3:N>-12'
    >>> Time (time (23, 2, 5)).encode ('test')
    '<TEST:6:T>230205'
    >>> Date (date (2020, 2, 24)).encode ('test')
    '<TEST:8:D>20200224'
"""

import logging
from math             import isfinite
from decimal          import Decimal
from string           import digits, ascii_letters
from datetime         import date, time, datetime
from rsclib.autosuper import autosuper

log = logging.getLogger (__name__)

class ADIF_Error (ValueError) :
    """ Base of all errors when converting between ADIF text and values.
        Carries the key of the offending field and the offending value
        rendered as text, the line number is only known when decoding.
    """

    message = 'Invalid ADIF value'

    def __init__ (self, key, offender, lineno = None) :
        super (ADIF_Error, self).__init__ (key, offender)
        self.key      = key
        self.offender = offender
        self.lineno   = lineno
    # end def __init__

    def __str__ (self) :
        r = '%s. Offending value: %s' % (self.message, self.offender)
        if self.key :
            r = '%s: %s' % (self.key, r)
        if self.lineno is not None :
            r = '%s: %s' % (self.lineno, r)
        return r
    # end def __str__

# end class ADIF_Error

class ADIF_Encode_Error         (ADIF_Error) : pass
class ADIF_Decode_Error         (ADIF_Error) : pass

class Non_Ascii_String (ADIF_Encode_Error) :
    message = 'String must be ASCII'

class String_Contains_Linebreak (ADIF_Encode_Error) :
    message = 'String cannot contain linebreaks'

class Date_Too_Early (ADIF_Encode_Error) :
    message = 'Date must be >= 1930'

class Non_Finite_Number (ADIF_Encode_Error) :
    message = 'Number must be finite'

class Invalid_Key (ADIF_Encode_Error) :
    message = 'Key may only contain letters, underscores and blanks'

class Malformed_Number (ADIF_Decode_Error) :
    message = 'Malformed number'

class Malformed_Date (ADIF_Decode_Error) :
    message = 'Malformed date, expected YYYYMMDD'

class Malformed_Time (ADIF_Decode_Error) :
    message = 'Malformed time, expected HHMMSS or HHMM'

class Length_Mismatch (ADIF_Decode_Error) :

    def __init__ (self, key, offender, length, lineno = None) :
        self.length  = length
        self.message = \
            ( 'Declared length %d does not match value length %d'
            % (length, byte_length (offender))
            )
        super (Length_Mismatch, self).__init__ (key, offender, lineno)
    # end def __init__

# end class Length_Mismatch

linebreaks = '\n\r'
key_chars  = ascii_letters + '_'
num_chars  = digits + '+-.eE'

def normalize_key (key) :
    """ Key as written into a tag, also used for comparing keys
    >>> normalize_key ('a number')
    'A_NUMBER'
    >>> normalize_key ('Call')
    'CALL'
    """
    return key.upper ().replace (' ', '_')
# end def normalize_key

def check_key (key) :
    """ Normalized key, only keys the tokenizer can read back are allowed
    >>> check_key ('my gridsquare')
    'MY_GRIDSQUARE'
    """
    k = normalize_key (key)
    if not k or not all (c in key_chars for c in k) :
        raise Invalid_Key (key, key)
    return k
# end def check_key

def byte_length (text) :
    return len (text.encode ('utf-8'))
# end def byte_length

def is_digits (text) :
    return bool (text) and all (c in digits for c in text)
# end def is_digits

class ADIF_Value (autosuper) :
    """ Immutable typed value of an ADIF field.
        Derived classes define the python type they wrap, their type
        indicator and the rules for converting from and to tag text.
    """

    type_indicator = None
    python_type    = None
    decode_error   = ADIF_Decode_Error

    def __init__ (self, value) :
        self.__super.__init__ ()
        object.__setattr__ (self, '_value', self.check (value))
    # end def __init__

    @classmethod
    def check (cls, value) :
        if not isinstance (value, cls.python_type) :
            raise TypeError \
                ( '%s needs %s, got %r'
                % (cls.__name__, cls.python_type.__name__, value)
                )
        return value
    # end def check

    @classmethod
    def decode (cls, key, text, lineno = None) :
        """ Construct a value from the raw text of a tag.
            Malformed text raises the decode_error of the class.
        """
        try :
            return cls (cls.from_text (text))
        except ValueError as err :
            raise cls.decode_error (key, text, lineno) from err
    # end def decode

    @classmethod
    def from_text (cls, text) :
        return text
    # end def from_text

    def encode (self, key) :
        """ Render complete tag including length and type indicator
        """
        k    = check_key (key)
        text = self.to_text (key)
        t    = ''
        if self.type_indicator :
            t = ':' + self.type_indicator
        return '<%s:%d%s>%s' % (k, byte_length (text), t, text)
    # end def encode

    def to_text (self, key) :
        raise NotImplementedError ('Need to define to_text')
    # end def to_text

    @property
    def value (self) :
        return self._value
    # end def value

    def __setattr__ (self, name, value) :
        raise AttributeError ('%s is immutable' % self.__class__.__name__)
    # end def __setattr__

    def __delattr__ (self, name) :
        raise AttributeError ('%s is immutable' % self.__class__.__name__)
    # end def __delattr__

    def __eq__ (self, other) :
        if not isinstance (other, ADIF_Value) :
            return NotImplemented
        return self.__class__ is other.__class__ and self.value == other.value
    # end def __eq__

    def __ne__ (self, other) :
        r = self.__eq__ (other)
        if r is NotImplemented :
            return r
        return not r
    # end def __ne__

    def __hash__ (self) :
        return hash ((self.__class__.__name__, self.value))
    # end def __hash__

    def __repr__ (self) :
        return '%s (%r)' % (self.__class__.__name__, self.value)
    # end def __repr__

    def __str__ (self) :
        return str (self.value)
    # end def __str__

# end class ADIF_Value

class Str (ADIF_Value) :

    python_type = str

    def to_text (self, key) :
        try :
            self.value.encode ('ascii')
        except UnicodeEncodeError :
            raise Non_Ascii_String (key, self.value) from None
        for c in linebreaks :
            if c in self.value :
                raise String_Contains_Linebreak (key, repr (self.value))
        return self.value
    # end def to_text

# end class Str

class Boolean (ADIF_Value) :

    type_indicator = 'B'
    python_type    = bool

    @classmethod
    def from_text (cls, text) :
        return text.upper () == 'Y'
    # end def from_text

    def to_text (self, key) :
        if self.value :
            return 'Y'
        return 'N'
    # end def to_text

# end class Boolean

class Number (ADIF_Value) :
    """ Floating point number, integers are converted to float.
    >>> Number (7).value
    7.0
    >>> Number.decode ('freq', '1.5e3')
    Number (1500.0)
    """

    type_indicator = 'N'
    python_type    = float
    decode_error   = Malformed_Number

    @classmethod
    def check (cls, value) :
        # bool is an int but is never a number here
        if isinstance (value, int) and not isinstance (value, bool) :
            value = float (value)
        return super (Number, cls).check (value)
    # end def check

    @classmethod
    def from_text (cls, text) :
        # float also accepts blanks, digit grouping, unicode digits, nan
        if not any (c in digits for c in text) :
            raise ValueError ('Invalid float literal: %r' % text)
        if not all (c in num_chars for c in text) :
            raise ValueError ('Invalid float literal: %r' % text)
        return float (text)
    # end def from_text

    def to_text (self, key) :
        """ Plain decimal notation, never an exponent
        >>> Number (1e16).to_text ('x')
        '10000000000000000'
        >>> Number (1e-7).to_text ('x')
        '0.0000001'
        """
        if not isfinite (self.value) :
            raise Non_Finite_Number (key, repr (self.value))
        r = format (Decimal (repr (self.value)), 'f')
        if r.endswith ('.0') :
            r = r [:-2]
        return r
    # end def to_text

# end class Number

class Date (ADIF_Value) :

    type_indicator = 'D'
    python_type    = date
    decode_error   = Malformed_Date
    min_year       = 1930

    @classmethod
    def check (cls, value) :
        if isinstance (value, datetime) :
            raise TypeError ('Date needs date, got datetime %r' % value)
        return super (Date, cls).check (value)
    # end def check

    @classmethod
    def from_text (cls, text) :
        if len (text) != 8 or not is_digits (text) :
            raise ValueError ('Invalid date: %r' % text)
        return date (int (text [:4]), int (text [4:6]), int (text [6:]))
    # end def from_text

    def to_text (self, key) :
        d = self.value
        if d.year < self.min_year :
            raise Date_Too_Early (key, d.isoformat ())
        return '%04d%02d%02d' % (d.year, d.month, d.day)
    # end def to_text

# end class Date

class Time (ADIF_Value) :
    """ Time of day, decoding also accepts the short HHMM form
    >>> Time.decode ('time_on', '1234')
    Time (datetime.time(12, 34))
    """

    type_indicator = 'T'
    python_type    = time
    decode_error   = Malformed_Time

    @classmethod
    def from_text (cls, text) :
        if len (text) not in (4, 6) or not is_digits (text) :
            raise ValueError ('Invalid time: %r' % text)
        h, m, s = int (text [:2]), int (text [2:4]), int (text [4:] or 0)
        return time (h, m, s)
    # end def from_text

    def to_text (self, key) :
        t = self.value
        return '%02d%02d%02d' % (t.hour, t.minute, t.second)
    # end def to_text

# end class Time

value_types = dict ((c.type_indicator, c) for c in (Boolean, Number, Date, Time))

def as_value (v) :
    """ Convert native python object to ADIF value, an ADIF_Value is
        returned unchanged.
    >>> as_value (True)
    Boolean (True)
    >>> as_value (14)
    Number (14.0)
    >>> as_value ('CW')
    Str ('CW')
    """
    if isinstance (v, ADIF_Value) :
        return v
    if isinstance (v, bool) :
        return Boolean (v)
    if isinstance (v, (int, float)) :
        return Number (v)
    if isinstance (v, datetime) :
        raise TypeError ('Ambiguous datetime %r, use date or time' % v)
    if isinstance (v, date) :
        return Date (v)
    if isinstance (v, time) :
        return Time (v)
    if isinstance (v, str) :
        return Str (v)
    raise TypeError ('Cannot convert %r to an ADIF value' % v)
# end def as_value

def decode_value (token, strict = False) :
    """ Decode a token from the tokenizer into a typed value.
        The declared length is checked only if strict is given.
        Unknown type indicators are decoded as string.
    """
    length = byte_length (token.value)
    if token.length != length :
        if strict :
            raise Length_Mismatch \
                (token.key, token.value, token.length, token.lineno)
        log.debug \
            ( 'Line %s: %s: declared length %d, got %d'
            , token.lineno, token.key, token.length, length
            )
    cls = Str
    if token.type :
        cls = value_types.get (token.type)
        if cls is None :
            log.debug \
                ( 'Line %s: %s: unknown type %s, using string'
                , token.lineno, token.key, token.type
                )
            cls = Str
    return cls.decode (token.key, token.value, token.lineno)
# end def decode_value

__all__ = \
    [ 'ADIF_Error', 'ADIF_Encode_Error', 'ADIF_Decode_Error'
    , 'Non_Ascii_String', 'String_Contains_Linebreak', 'Date_Too_Early'
    , 'Non_Finite_Number', 'Invalid_Key'
    , 'Malformed_Number', 'Malformed_Date', 'Malformed_Time'
    , 'Length_Mismatch', 'ADIF_Value', 'Str', 'Boolean', 'Number'
    , 'Date', 'Time', 'as_value', 'decode_value', 'normalize_key'
    , 'check_key', 'byte_length'
    ]
