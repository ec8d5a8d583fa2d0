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

""" Convert ADIF text into an ADIF_File and back.
    The document is split at the first end-of-header tag, the rest is
    split at each end-of-record tag. Terminators are matched
    case-insensitively.
"""

import io
import sys
import logging
from re                  import compile as rc, IGNORECASE
from argparse            import ArgumentParser
from adifcodec.value     import ADIF_Error, decode_value
from adifcodec.tokenizer import tokenize
from adifcodec.container import ADIF_File, ADIF_Header, ADIF_Record

log = logging.getLogger (__name__)

eoh_tag = '<EOH>'
eor_tag = '<EOR>'
eoh_re  = rc (eoh_tag, IGNORECASE)
eor_re  = rc (eor_tag, IGNORECASE)

def normalize_terminators (text) :
    """ Bring end-of-header and end-of-record tags to upper case
    >>> normalize_terminators ('<eoh>\\n<CALL:4>OE3R<Eor>')
    '<EOH>\\n<CALL:4>OE3R<EOR>'
    """
    return eor_re.sub (eor_tag, eoh_re.sub (eoh_tag, text))
# end def normalize_terminators

def decode_fields (segment, lineno = 1, strict = False) :
    return [(t.key, decode_value (t, strict)) for t in tokenize (segment, lineno)]
# end def decode_fields

def parse (text, strict = False, keep_trailing_empty = False) :
    """ Parse a complete ADIF document.
        Without a header terminator the whole text is taken as body.
        The empty tail after the last record terminator is not
        returned as a record unless keep_trailing_empty is set.
        With strict, tags whose declared length does not match the
        value raise Length_Mismatch.
    """
    text = normalize_terminators (text)
    head, sep, body = text.partition (eoh_tag)
    if not sep :
        head, body = '', text
    preamble = head.split ('<', 1) [0].strip () or None
    header   = ADIF_Header \
        (decode_fields (head, 1, strict), preamble = preamble)
    lineno   = 1 + head.count ('\n')
    segments = body.split (eor_tag)
    if not keep_trailing_empty and segments and not segments [-1].strip () :
        del segments [-1]
    adif = ADIF_File (header)
    for seg in segments :
        adif.append (ADIF_Record (decode_fields (seg, lineno, strict)))
        lineno += seg.count ('\n')
    log.debug \
        ( 'Parsed header with %d fields and %d records'
        , len (header), len (adif.records)
        )
    return adif
# end def parse

def main (argv = None) :
    cmd = ArgumentParser ()
    cmd.add_argument \
        ( "adif"
        , help    = "ADIF file to read, default is standard input"
        , nargs   = '?'
        )
    cmd.add_argument \
        ( "-e", "--encoding"
        , help    = "Encoding of ADIF file, default=%(default)s"
        , default = 'utf-8'
        )
    cmd.add_argument \
        ( "-o", "--output"
        , help    = "Write re-encoded ADIF to this file"
        )
    cmd.add_argument \
        ( "--keep-trailing-empty"
        , help    = "Return empty record after last end-of-record tag"
        , action  = 'store_true'
        )
    cmd.add_argument \
        ( "--strict"
        , help    = "Check declared tag length against value"
        , action  = 'store_true'
        )
    cmd.add_argument \
        ( "-v", "--verbose"
        , help    = "Verbose logging"
        , action  = 'store_true'
        )
    args = cmd.parse_args (argv)
    logging.basicConfig \
        (level = logging.DEBUG if args.verbose else logging.WARNING)
    if args.adif :
        with io.open (args.adif, 'r', encoding = args.encoding) as f :
            text = f.read ()
    else :
        text = sys.stdin.read ()
    try :
        adif = parse \
            ( text
            , strict              = args.strict
            , keep_trailing_empty = args.keep_trailing_empty
            )
    except ADIF_Error as err :
        print ('Error parsing: %s' % err, file = sys.stderr)
        return 1
    if adif.header.preamble :
        print (adif.header.preamble)
    for k, v in adif.header.items () :
        print ('%18s: %s' % (k, v))
    print ("Got %s records" % len (adif.records))
    if args.output :
        try :
            s = adif.serialize ()
        except ADIF_Error as err :
            print ('Error encoding: %s' % err, file = sys.stderr)
            return 1
        with io.open (args.output, 'w', encoding = args.encoding) as f :
            f.write (s)
    return 0
# end def main

__all__ = ['parse', 'normalize_terminators', 'main']

if __name__ == '__main__' :
    sys.exit (main ())
