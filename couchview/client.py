# -*- coding: utf-8 -*-
#
# Copyright (C) 2007-2009 Christopher Lenz
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.

"""Python client API for running CouchDB views.

Views are described by `View` objects and executed through a `Database`::

    from couchview import Server, View

    server = Server()
    db = server['people']
    design = db['_design/people']

    view = design.get_view('by_name')
    view.set_start_key('"A"')
    view.set_end_key('"M"')
    view.set_limit(10)
    for row in db.view(view):
        print(row.key, row.value)

Ad-hoc views are executed with `Database.adhoc()`; query options are taken
from an optional `View`::

    grouped = View('_temp_view')
    grouped.set_group(True)
    results = db.adhoc('function(doc) { emit(doc.type, 1); }',
                       '_count', view=grouped)
"""

import logging
import os
import re

from couchview import http
from couchview.view import AdHocView, DESIGN_PREFIX, View

__all__ = ['Server', 'Database', 'Document', 'ViewResults', 'Row']
__docformat__ = 'restructuredtext en'

log = logging.getLogger('couchview.client')

DEFAULT_BASE_URL = os.environ.get('COUCHDB_URL', 'http://localhost:5984/')


class Server(object):
    """Representation of a CouchDB server.

    This class behaves like a dictionary of databases. Iterating over the
    server yields the names of its databases, and item access returns a
    `Database`::

        server = Server('http://localhost:5984/')
        db = server.create('python-tests')
        db = server['python-tests']
        del server['python-tests']
    """

    def __init__(self, url=DEFAULT_BASE_URL, session=None):
        """Initialize the server object.

        :param url: the URI of the server (for example
                    ``http://localhost:5984/``), or a `http.Resource`
        :param session: an http.Session instance or None for a default session
        """
        if isinstance(url, str):
            self.resource = http.Resource(url, session or http.Session())
        else:
            self.resource = url # treat as a Resource object

    def __contains__(self, name):
        """Return whether the server contains a database with the specified
        name.

        :param name: the database name
        :return: `True` if a database with the name exists, `False` otherwise
        """
        try:
            self.resource.head(validate_dbname(name))
            return True
        except http.ResourceNotFound:
            return False

    def __iter__(self):
        """Iterate over the names of all databases."""
        status, headers, data = self.resource.get_json('_all_dbs')
        return iter(data)

    def __len__(self):
        """Return the number of databases."""
        status, headers, data = self.resource.get_json('_all_dbs')
        return len(data)

    def __repr__(self):
        return '<%s %r>' % (type(self).__name__, self.resource.url)

    def __delitem__(self, name):
        """Remove the database with the specified name.

        :param name: the name of the database
        :raise ResourceNotFound: if no database with that name exists
        """
        self.resource.delete_json(validate_dbname(name))

    def __getitem__(self, name):
        """Return a `Database` object representing the database with the
        specified name.

        :param name: the name of the database
        :return: a `Database` object representing the database
        :rtype: `Database`
        :raise ResourceNotFound: if no database with that name exists
        """
        db = Database(self.resource(name), validate_dbname(name))
        db.resource.head() # actually make a request to the database
        return db

    def version(self):
        """The version string of the CouchDB server.

        :rtype: `str`
        """
        status, headers, data = self.resource.get_json()
        return data['version']

    def create(self, name):
        """Create a new database with the given name.

        :param name: the name of the database
        :return: a `Database` object representing the created database
        :rtype: `Database`
        :raise PreconditionFailed: if a database with that name already exists
        """
        self.resource.put_json(validate_dbname(name))
        return self[name]

    def delete(self, name):
        """Delete the database with the specified name.

        :param name: the name of the database
        :raise ResourceNotFound: if a database with that name does not exist
        """
        del self[name]


class Database(object):
    """Representation of a database on a CouchDB server.

    Documents are retrieved and stored through item access, and views are
    executed with `view()` and `adhoc()`.
    """

    def __init__(self, url, name=None, session=None):
        if isinstance(url, str):
            if not url.startswith('http'):
                url = DEFAULT_BASE_URL + url
            self.resource = http.Resource(url, session)
        else:
            self.resource = url
        self._name = name

    def __repr__(self):
        return '<%s %r>' % (type(self).__name__, self.name)

    def __contains__(self, id):
        """Return whether the database contains a document with the specified
        ID.

        :param id: the document ID
        :return: `True` if a document with the ID exists, `False` otherwise
        """
        try:
            self.resource.head(id)
            return True
        except http.ResourceNotFound:
            return False

    def __delitem__(self, id):
        """Remove the document with the specified ID from the database.

        :param id: the document ID
        """
        status, headers, data = self.resource.head(id)
        self.resource.delete_json(id, rev=headers['etag'].strip('"'))

    def __getitem__(self, id):
        """Return the document with the specified ID.

        :param id: the document ID
        :return: a `Document` object representing the requested document
        :rtype: `Document`
        :raise ResourceNotFound: if no document with that ID exists
        """
        _, _, data = self.resource.get_json(id)
        return Document(data)

    def __setitem__(self, id, content):
        """Create or update a document with the specified ID.

        :param id: the document ID
        :param content: the document content; either a plain dictionary for
                        new documents, or a `Document` object for existing
                        documents
        """
        status, headers, data = self.resource.put_json(id, body=content)
        content.update({'_id': data['id'], '_rev': data['rev']})

    @property
    def name(self):
        """The name of the database.

        Note that this may require a request to the server unless the name has
        already been cached by the `info()` method.

        :rtype: `str`
        """
        if self._name is None:
            self.info()
        return self._name

    def get(self, id, default=None):
        """Return the document with the specified ID.

        :param id: the document ID
        :param default: the default value to return when the document is not
                        found
        :return: a `Document` object, or the value of the `default` argument
        """
        try:
            _, _, data = self.resource.get_json(id)
        except http.ResourceNotFound:
            return default
        return Document(data)

    def info(self):
        """Return information about the database as a dictionary.

        :rtype: ``dict``
        """
        _, _, data = self.resource.get_json()
        self._name = data['db_name']
        return data

    def save(self, doc):
        """Create a new document or update an existing document.

        :param doc: the document to store
        :return: (id, rev) tuple of the saved document
        :rtype: `tuple`
        """
        if '_id' in doc:
            func = self.resource(doc['_id']).put_json
        else:
            func = self.resource.post_json
        _, _, data = func(body=doc)
        id, rev = data['id'], data.get('rev')
        doc['_id'] = id
        if rev is not None:
            doc['_rev'] = rev
        return id, rev

    def view(self, view, wrapper=None):
        """Execute a view.

        :param view: a `View` instance, or the name of the view; for views in
                     design documents, use the format ``design_docid/viewname``
        :param wrapper: an optional callable that should be used to wrap the
                        result rows
        :return: the view results
        :rtype: `ViewResults`
        """
        if isinstance(view, str):
            view = View(view)
        if isinstance(view, AdHocView):
            return self._temp_view(view, wrapper)
        path = view.url_path()
        options = view.query_options
        log.debug('Querying view %r with %r', view.full_name, options)
        _, _, data = self.resource(*path).get_json(**options)
        return ViewResults(view, data, wrapper)

    def adhoc(self, map_fun, reduce_fun=None, language='javascript',
              view=None, wrapper=None):
        """Execute an ad-hoc query (a "temp view") against the database.

        :param map_fun: the code of the map function
        :param reduce_fun: the code of the reduce function (optional)
        :param language: the language of the functions, to determine which view
                         server to use
        :param view: an optional `View` whose query options are applied
        :param wrapper: an optional callable that should be used to wrap the
                        result rows
        :return: the view results
        :rtype: `ViewResults`
        """
        temp = AdHocView(map_fun, reduce_fun, language=language)
        if view is not None:
            temp._options.update(view.query_options)
        return self._temp_view(temp, wrapper)

    def _temp_view(self, view, wrapper):
        options = view.query_options
        log.debug('Querying temporary view with %r', options)
        _, _, data = self.resource.post_json(view.full_name, body=view.body(),
                                             **options)
        return ViewResults(view, data, wrapper)


class Document(dict):
    """Representation of a document in the database.

    This is basically just a dictionary with the two additional properties
    `id` and `rev`, which contain the document ID and revision, respectively.
    Design documents also give access to the views they declare:

    >>> doc = Document(_id='_design/people')
    >>> doc.view_document_id
    'people'
    >>> view = doc.add_view('by_name', 'function(doc) { emit(doc.name); }')
    >>> view.full_name
    'people/by_name'
    >>> doc['views']['by_name']['map']
    'function(doc) { emit(doc.name); }'
    """

    def __repr__(self):
        return '<%s %r@%r %r>' % (type(self).__name__, self.id, self.rev,
                                  dict([(k,v) for k,v in self.items()
                                        if k not in ('_id', '_rev')]))

    @property
    def id(self):
        """The document ID.

        :rtype: `str`
        """
        return self.get('_id')

    @property
    def rev(self):
        """The document revision.

        :rtype: `str`
        """
        return self.get('_rev')

    @property
    def view_document_id(self):
        """The document ID without the ``_design/`` prefix, as used in the
        full names of views.
        """
        id = self.id
        if id is not None and id.startswith(DESIGN_PREFIX):
            return id[len(DESIGN_PREFIX):]
        return id

    def add_view(self, name, map_fun, reduce_fun=None):
        """Add a view definition to this design document and return a `View`
        for it. The document must be saved for the view to exist on the
        server.

        :param name: the name of the view
        :param map_fun: the code of the map function
        :param reduce_fun: the code of the reduce function (optional)
        :rtype: `View`
        """
        funcs = {'map': map_fun}
        if reduce_fun:
            funcs['reduce'] = reduce_fun
        self.setdefault('views', {})[name] = funcs
        return View(name, self, map_fun)

    def get_view(self, name):
        """Return a `View` for the view with the given name declared by this
        document.

        :raise KeyError: if the document declares no view with that name
        :rtype: `View`
        """
        funcs = self.get('views', {})[name]
        return View(name, self, funcs.get('map'))


class ViewResults(object):
    """Representation of the results produced by a view."""

    def __init__(self, view, data, wrapper=None):
        self.view = view
        wrapper = wrapper or Row
        self.rows = [wrapper(row) for row in data['rows']]
        self.total_rows = data.get('total_rows')
        self.offset = data.get('offset', 0)

    def __repr__(self):
        return '<%s %r %r>' % (type(self).__name__, self.view,
                               len(self.rows))

    def __getitem__(self, index):
        return self.rows[index]

    def __iter__(self):
        return iter(self.rows)

    def __len__(self):
        return len(self.rows)


class Row(dict):
    """Representation of a row as returned by database views."""

    def __repr__(self):
        if self.id is None:
            return '<%s key=%r, value=%r>' % (type(self).__name__, self.key,
                                              self.value)
        return '<%s id=%r, key=%r, value=%r>' % (type(self).__name__, self.id,
                                                 self.key, self.value)

    @property
    def id(self):
        """The associated Document ID if it exists. Returns `None` when it
        doesn't (reduce results).
        """
        return self.get('id')

    @property
    def key(self):
        """The associated key."""
        return self['key']

    @property
    def value(self):
        """The associated value."""
        return self['value']

    @property
    def doc(self):
        """The associated document for the row, if the view was queried with
        ``include_docs``, otherwise `None`.
        """
        doc = self.get('doc')
        if doc:
            return Document(doc)


SPECIAL_DB_NAMES = set(['_users', '_replicator'])
VALID_DB_NAME = re.compile(r'^[a-z][a-z0-9_$()+/-]*$')
def validate_dbname(name):
    if name in SPECIAL_DB_NAMES:
        return name
    if not VALID_DB_NAME.match(name):
        raise ValueError('Invalid database name')
    return name
