# -*- coding: utf-8 -*-
#
# Copyright (C) 2009 Christopher Lenz
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.

"""Thin abstraction layer over the JSON modules that can be used for
encoding query values and request bodies, and for decoding responses.

The standard library ``json`` module is used by default. The ``simplejson``
package can be selected instead by name::

    from couchview import json
    json.use('simplejson')

The module can also be set with the ``COUCHVIEW_JSON`` environment variable.
Custom decoding and encoding functions are supported as well::

    json.use(decode=my_decode, encode=my_encode)

Encoding is always compact and refuses ``NaN`` and infinities, which CouchDB
would reject anyway:

>>> encode(['x'])
'["x"]'
>>> encode({'a': [1, 2]})
'{"a":[1,2]}'
>>> decode(b'{"rows": []}')
{'rows': []}
"""

import os

__all__ = ['decode', 'encode', 'use']
__docformat__ = 'restructuredtext en'

SUPPORTED_MODULES = ('json', 'simplejson')

_initialized = False
_using = os.environ.get('COUCHVIEW_JSON', 'json')
_decode = None
_encode = None


def decode(string):
    """Decode the given JSON string.

    :param string: the JSON string to decode, as text or UTF-8 bytes
    :return: the corresponding Python data structure
    """
    if not _initialized:
        _initialize()
    return _decode(string)


def encode(obj):
    """Encode the given object as a JSON string.

    :param obj: the Python data structure to encode
    :return: the corresponding JSON string
    :rtype: `str`
    """
    if not _initialized:
        _initialize()
    return _encode(obj)


def use(module=None, decode=None, encode=None):
    """Set the JSON library that should be used, either by specifying a known
    module name, or by providing a decode and encode function.

    :param module: the name of the JSON library module to use, or the module
                   object itself
    :param decode: a function for decoding JSON strings
    :param encode: a function for encoding objects as JSON strings
    :raise ValueError: if the module name is not supported
    """
    global _decode, _encode, _initialized, _using
    if module is not None:
        if not isinstance(module, str):
            module = module.__name__
        if module not in SUPPORTED_MODULES:
            raise ValueError('Unsupported JSON module %s' % module)
        _using = module
        _initialized = False
    else:
        if decode is None or encode is None:
            raise ValueError('both decode and encode functions are required')
        _using = 'custom'
        _decode = decode
        _encode = encode
        _initialized = True


def _initialize():
    global _initialized, _decode, _encode

    if _using not in SUPPORTED_MODULES:
        raise ValueError('Unsupported JSON module %s' % _using)
    module = __import__(_using, {}, {})

    def _decode(string, loads=module.loads):
        if isinstance(string, bytes):
            string = string.decode('utf-8')
        return loads(string)

    def _encode(obj, dumps=module.dumps):
        return dumps(obj, allow_nan=False, ensure_ascii=False,
                     separators=(',', ':'))

    _initialized = True
