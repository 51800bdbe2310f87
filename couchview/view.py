# -*- coding: utf-8 -*-
#
# Copyright (C) 2007-2009 Christopher Lenz
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.

"""Query-option builders for CouchDB views.

A `View` names a view and collects the options that filter its results. It
does not talk to the server itself; pass it to `Database.view()` (or
`Database.adhoc()` for an `AdHocView`) to execute it.

>>> view = View('_all_docs')
>>> view.full_name
'_all_docs'
>>> view.query_string() is None
True

Options are added through setters. Keys are stored as JSON literals so that
the server parses them as JSON rather than raw text:

>>> view.set_key('abc')
>>> view.set_limit(10)
>>> view.set_descending(True)
>>> view.query_string()
'key="abc"&limit=10&descending=true'

Boolean options are only present while they are true:

>>> view.set_descending(False)
>>> view.query_string()
'key="abc"&limit=10'
"""

import warnings

from couchview import json

__all__ = ['View', 'AdHocView', 'OPTIONS', 'BOOLEAN_OPTIONS']
__docformat__ = 'restructuredtext en'


#: Recognized query options, in the order they are rendered.
OPTIONS = ('key', 'startkey', 'endkey', 'limit', 'descending', 'group',
           'skip', 'update')

#: Options that are only sent when true; absence means false.
BOOLEAN_OPTIONS = frozenset(['descending', 'group', 'update'])

DESIGN_PREFIX = '_design/'


class View(object):
    """A named view, optionally declared by a design document, together with
    the query options used to filter it.

    A view is built either from a document and a name, or from a full name
    only, such as ``_all_docs`` or ``_temp_view``:

    >>> from couchview.client import Document
    >>> View('v', Document(_id='_design/D')).full_name
    'D/v'
    >>> View('_temp_view').full_name
    '_temp_view'
    """

    def __init__(self, name, document=None, function=None):
        """Initialize the view.

        :param name: the name of the view within its design document, or the
                     full name of a special view if `document` is `None`
        :param document: the `Document` declaring the view, if any
        :param function: the source code of the map function, if known
        """
        self._name = name
        self._document = document
        self._function = function
        self._options = {}

    def __repr__(self):
        return '<%s %r %r>' % (type(self).__name__, self.full_name,
                               self.query_string())

    @property
    def name(self):
        """The name of this view, without the document id."""
        return self._name

    @property
    def document(self):
        """The `Document` declaring this view, or `None`."""
        return self._document

    @property
    def function(self):
        """The map function source for this view, if it is available."""
        return self._function

    @property
    def full_name(self):
        """The name of this view prefixed with the id of its design document
        (without the ``_design/`` prefix), in the form ``docid/name``, or
        just the name if the view does not belong to a document.
        """
        if self._document is None or self._document.view_document_id is None:
            return self._name
        return '%s/%s' % (self._document.view_document_id, self._name)

    @property
    def query_options(self):
        """A copy of the options set on this view, mapping option names to
        their serialized string values, ordered as in `OPTIONS`.

        :rtype: `dict`
        """
        return dict((name, self._options[name]) for name in OPTIONS
                    if name in self._options)

    def url_path(self):
        """Return the path segments, relative to the database, at which this
        view is executed.

        >>> from couchview.client import Document
        >>> View('by_name', Document(_id='_design/people')).url_path()
        ['_design', 'people', '_view', 'by_name']
        >>> View('_all_docs').url_path()
        ['_all_docs']
        >>> View('_design/people/_view/by_name').url_path()
        ['_design', 'people', '_view', 'by_name']

        :rtype: `list`
        """
        full_name = self.full_name
        if full_name.startswith('_'):
            return full_name.split('/')
        parts = full_name.split('/', 1)
        if len(parts) < 2:
            return parts
        return ['_design', parts[0], '_view', parts[1]]

    def query_string(self):
        """Render the options set on this view as a query string.

        Options are joined by ``&`` in a fixed order; options with empty
        values are left out. Values are not URL-encoded.

        :return: the query string, or `None` if no options are set
        :rtype: `str`
        """
        pairs = []
        for name in OPTIONS:
            value = self._options.get(name)
            if value:
                pairs.append('%s=%s' % (name, value))
        if not pairs:
            return None
        return '&'.join(pairs)

    def set_key(self, key):
        """Only return rows matching this exact key.

        Strings not already starting with a double quote are encoded as JSON
        strings; other values are JSON-encoded.

        >>> view = View('_all_docs')
        >>> view.set_key('abc')
        >>> view.query_string()
        'key="abc"'
        >>> view.set_key('"abc"')
        >>> view.query_string()
        'key="abc"'
        >>> view.set_key(['a', 1])
        >>> view.query_string()
        'key=["a",1]'
        """
        if isinstance(key, str):
            if not key.startswith('"'):
                key = json.encode(key)
        elif key is not None:
            key = json.encode(key)
        self._set_option('key', key)

    def set_start_key(self, start_key):
        """Start listing at this key.

        Strings are taken to be JSON text already and are stored verbatim;
        lists and other values are JSON-encoded.
        """
        self._set_option('startkey', self._json_value(start_key))

    def set_single_start_key(self, start_key):
        """Start listing at the array key holding only `start_key`.

        >>> view = View('_all_docs')
        >>> view.set_single_start_key('x')
        >>> view.query_string()
        'startkey=["x"]'
        """
        self.set_start_key([start_key])

    def set_end_key(self, end_key):
        """Stop listing at this key.

        Accepts the same values as `set_start_key()`.
        """
        self._set_option('endkey', self._json_value(end_key))

    def set_single_end_key(self, end_key):
        """Stop listing at the array key holding only `end_key`."""
        self.set_end_key([end_key])

    def set_limit(self, limit):
        """Return at most this many rows."""
        self._set_option('limit', limit)

    def set_count(self, count):
        """Return at most this many rows.

        :deprecated: CouchDB 0.9 uses ``limit`` instead; use `set_limit()`
        """
        warnings.warn('View.set_count is deprecated, please use '
                      'View.set_limit instead', DeprecationWarning,
                      stacklevel=2)
        self.set_limit(count)

    def set_skip(self, skip):
        """Skip this many rows before the first row that is returned."""
        self._set_option('skip', skip)

    def set_descending(self, descending):
        """Reverse the order of the rows."""
        self._set_flag('descending', descending)

    def set_reverse(self, reverse):
        """Reverse the order of the rows.

        :deprecated: CouchDB 0.9 uses ``descending`` instead; use
                     `set_descending()`
        """
        warnings.warn('View.set_reverse is deprecated, please use '
                      'View.set_descending instead', DeprecationWarning,
                      stacklevel=2)
        self.set_descending(reverse)

    def set_group(self, group):
        """Group the results of a reduce view by key."""
        self._set_flag('group', group)

    def set_update(self, update):
        """Ask the server to bring the view index up to date before
        answering."""
        self._set_flag('update', update)

    def _json_value(self, value):
        if value is None or isinstance(value, str):
            return value
        return json.encode(value)

    def _set_option(self, name, value):
        if value is None:
            self._options.pop(name, None)
        else:
            self._options[name] = str(value)

    def _set_flag(self, name, value):
        assert name in BOOLEAN_OPTIONS
        if value is None:
            raise TypeError('%s must be True or False, not None' % name)
        if value:
            self._options[name] = 'true'
        else:
            self._options.pop(name, None)


class AdHocView(View):
    """A temporary view, defined by its functions rather than stored in a
    design document.

    >>> view = AdHocView('function(doc) { emit(doc.name, null); }')
    >>> view.full_name
    '_temp_view'
    >>> view.body()['map']
    'function(doc) { emit(doc.name, null); }'
    """

    def __init__(self, map_fun, reduce_fun=None, language='javascript'):
        """Initialize the view.

        :param map_fun: the code of the map function
        :param reduce_fun: the code of the reduce function (optional)
        :param language: the language of the functions, to determine which
                         view server to use
        """
        View.__init__(self, '_temp_view', function=map_fun)
        self.reduce_fun = reduce_fun
        self.language = language

    def body(self):
        """The request body used to execute this view.

        :rtype: `dict`
        """
        body = {'map': self.function, 'language': self.language}
        if self.reduce_fun:
            body['reduce'] = self.reduce_fun
        return body
