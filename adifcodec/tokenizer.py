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

""" Scanner for ADIF tags of the form <KEY:LEN[:TYPE]>VALUE
    The value extends to the next '<' or to the end of the line,
    trailing white space is removed. The declared length is returned
    but not used for delimiting the value.

    >>> list (tokenize_line ('<CALL:4>VA3ZZA <freq:5:n>7.025'))
    [Token(key='CALL', length=4, type=None, value='VA3ZZA', lineno=None), Token(key='FREQ', length=5, type='N', value='7.025', lineno=None)]
    >>> list (tokenize_line ('no tags here'))
    []
"""

from collections import namedtuple
from string      import ascii_letters, digits

Token = namedtuple ('Token', 'key length type value lineno', defaults = (None,))

key_chars = ascii_letters + '_'

def tokenize_line (line, lineno = None) :
    """ Yield all tokens found in a single line in scan order.
        Text that does not form a valid tag is skipped, scanning
        resumes after the '<' that started the failed tag.
    """
    state = 'start'
    start = pos = 0
    l     = len (line)
    while pos <= l :
        c = line [pos] if pos < l else None
        if state == 'start' :
            if c == '<' :
                start = pos
                key   = []
                state = 'tag'
            pos += 1
            continue
        elif state == 'tag' :
            if c is not None and c in key_chars :
                key.append (c)
            elif c == ':' and key :
                length = []
                state  = 'length'
            else :
                state = 'fail'
        elif state == 'length' :
            if c is not None and c in digits :
                length.append (c)
            elif c == ':' and length :
                typ   = None
                state = 'type'
            elif c == '>' and length :
                typ   = None
                value = pos + 1
                state = 'value'
            else :
                state = 'fail'
        elif state == 'type' :
            if typ is None and c is not None and c in ascii_letters :
                typ = c.upper ()
            elif c == '>' and typ is not None :
                value = pos + 1
                state = 'value'
            else :
                state = 'fail'
        elif state == 'value' :
            if c is None or c == '<' :
                yield Token \
                    ( ''.join (key).upper ()
                    , int (''.join (length))
                    , typ
                    , line [value:pos].rstrip ()
                    , lineno
                    )
                # The '<' is rescanned as start of the next tag
                state = 'start'
                continue
        else :
            assert 0
        if state == 'fail' :
            pos   = start + 1
            state = 'start'
            continue
        pos += 1
# end def tokenize_line

def tokenize (text, lineno = 1) :
    """ Tokenize a multi-line segment line by line, lineno is the
        number of the first line of text in the whole document.
    """
    for n, line in enumerate (text.split ('\n')) :
        for t in tokenize_line (line, lineno + n) :
            yield t
# end def tokenize

__all__ = ['Token', 'tokenize_line', 'tokenize']
