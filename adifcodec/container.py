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

import logging
from datetime          import datetime, timezone
from rsclib.autosuper  import autosuper
from adifcodec.value   import as_value, normalize_key, Str

log = logging.getLogger (__name__)

def utc_now () :
    return datetime.now (timezone.utc)
# end def utc_now

class Field_Map (autosuper) :
    """ Ordered mapping of ADIF field names to values.
        Keys are normalized like in the written tag (upper case, blanks
        replaced by underscore), so lookup is case-insensitive. The
        insertion order is the order of the tags when serializing.
        Assigning to an existing key replaces the value in place.
        Values may be given as native python objects, they are
        converted with as_value.
    """

    def __init__ (self, fields = (), ** kw) :
        self.__super.__init__ ()
        self.fields = []
        self.index  = {}
        if hasattr (fields, 'items') :
            fields = fields.items ()
        for k, v in fields :
            self [k] = v
        for k in kw :
            self [k] = kw [k]
    # end def __init__

    def encoded_fields (self) :
        """ Tags of all fields in order, the first field that cannot be
            encoded raises an ADIF_Encode_Error.
        """
        return [v.encode (k) for k, v in self.fields]
    # end def encoded_fields

    def get (self, name, default = None) :
        try :
            return self [name]
        except KeyError :
            return default
    # end def get

    def items (self) :
        return list (self.fields)
    # end def items

    def keys (self) :
        return [k for k, v in self.fields]
    # end def keys

    def values (self) :
        return [v for k, v in self.fields]
    # end def values

    def __contains__ (self, name) :
        return normalize_key (name) in self.index
    # end def __contains__
    has_key = __contains__

    def __delitem__ (self, name) :
        idx = self.index.pop (normalize_key (name))
        del self.fields [idx]
        for n, (k, v) in enumerate (self.fields [idx:]) :
            self.index [k] = idx + n
    # end def __delitem__

    def __eq__ (self, other) :
        if not isinstance (other, Field_Map) :
            return NotImplemented
        return self.__class__ is other.__class__ and self.fields == other.fields
    # end def __eq__

    def __ne__ (self, other) :
        r = self.__eq__ (other)
        if r is NotImplemented :
            return r
        return not r
    # end def __ne__

    __hash__ = None

    def __getattr__ (self, name) :
        index = self.__dict__.get ('index')
        if name.startswith ('_') or index is None :
            raise AttributeError (name)
        try :
            return self [name]
        except KeyError as msg :
            raise AttributeError (str (msg))
    # end def __getattr__

    def __getitem__ (self, name) :
        return self.fields [self.index [normalize_key (name)]][1]
    # end def __getitem__

    def __iter__ (self) :
        return iter (self.keys ())
    # end def __iter__

    def __len__ (self) :
        return len (self.fields)
    # end def __len__

    def __repr__ (self) :
        return '%s (%r)' % (self.__class__.__name__, self.fields)
    # end def __repr__

    def __setitem__ (self, name, value) :
        key   = normalize_key (name)
        value = as_value (value)
        if key in self.index :
            log.debug ('Replacing duplicate field %s', key)
            self.fields [self.index [key]] = (key, value)
        else :
            self.index [key] = len (self.fields)
            self.fields.append ((key, value))
    # end def __setitem__

# end class Field_Map

class ADIF_Record (Field_Map) :
    """ Represents a QSO record in ADIF format
        Common fields: BAND, CALL, FREQ, MODE, QSO_DATE, RST_RCVD,
        RST_SENT, TIME_OFF, TIME_ON, GRIDSQUARE
    """

    end_tag = '<eor>'

    def serialize (self) :
        return ''.join (self.encoded_fields ()) + self.end_tag
    # end def serialize

# end class ADIF_Record

class ADIF_Header (Field_Map) :
    """ The header of an ADIF file.
        When serializing, a banner line with the current time is
        written first, the time is obtained by calling clock which
        must return a datetime, naive datetimes are taken as UTC.
        The preamble is the free text found in front of the header
        tags when parsing, it is not written back.
    """

    end_tag     = '<EOH>'
    banner_fmt  = 'Generated on %Y-%m-%d %H:%M:%S UTC'

    def __init__ (self, fields = (), clock = None, preamble = None, ** kw) :
        self.__super.__init__ (fields, ** kw)
        self.clock    = clock or utc_now
        self.preamble = preamble
    # end def __init__

    def banner (self) :
        now = self.clock ()
        if now.tzinfo is not None :
            now = now.astimezone (timezone.utc)
        return now.strftime (self.banner_fmt)
    # end def banner

    def serialize (self) :
        r = [self.banner (), '']
        r.extend (self.encoded_fields ())
        r.append (self.end_tag)
        return '\n'.join (r)
    # end def serialize

# end class ADIF_Header

class ADIF_File (autosuper) :
    """ A complete ADIF document: one header and a list of records
    """

    def __init__ (self, header = None, records = ()) :
        self.__super.__init__ ()
        if header is None :
            header = ADIF_Header ()
        self.header  = header
        self.records = []
        for r in records :
            self.append (r)
    # end def __init__

    def append (self, record) :
        if not isinstance (record, ADIF_Record) :
            record = ADIF_Record (record)
        self.records.append (record)
    # end def append

    @property
    def by_call (self) :
        """ Records grouped by their CALL field
        """
        d = {}
        for r in self.records :
            call = r.get ('call')
            if isinstance (call, Str) :
                d.setdefault (call.value, []).append (r)
        return d
    # end def by_call

    def serialize (self) :
        r = [rec.serialize () for rec in self.records]
        return '%s\n%s' % (self.header.serialize (), '\n'.join (r))
    # end def serialize

    def __eq__ (self, other) :
        if not isinstance (other, ADIF_File) :
            return NotImplemented
        return self.header == other.header and self.records == other.records
    # end def __eq__

    def __ne__ (self, other) :
        r = self.__eq__ (other)
        if r is NotImplemented :
            return r
        return not r
    # end def __ne__

    __hash__ = None

    def __iter__ (self) :
        for r in self.records :
            yield r
    # end def __iter__

    def __len__ (self) :
        return len (self.records)
    # end def __len__

    def __repr__ (self) :
        return '%s (%r, %r)' % (self.__class__.__name__, self.header, self.records)
    # end def __repr__

# end class ADIF_File

__all__ = ['Field_Map', 'ADIF_Record', 'ADIF_Header', 'ADIF_File', 'utc_now']
