#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright (C) 2007-2009 Christopher Lenz
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.

"""Utility for querying a view of a CouchDB database from the command line.

Each result row is written to standard output as one line of JSON::

    couchview-query http://localhost:5984/people people/by_name \\
        --startkey '"A"' --endkey '"M"' --limit 10

Ad-hoc views are run by giving the map function instead of a view name::

    couchview-query http://localhost:5984/people \\
        --map 'function(doc) { emit(doc.type, null); }'
"""

import logging
from optparse import OptionParser
import sys

from couchview import __version__ as VERSION
from couchview import json
from couchview.client import Database
from couchview.http import HTTPError
from couchview.view import AdHocView, View

log = logging.getLogger('couchview.tools.query')


def build_view(name=None, map_fun=None, reduce_fun=None, key=None,
               startkey=None, endkey=None, limit=None, skip=None,
               descending=False, group=False, update=False):
    """Create the `View` described by the given options."""
    if map_fun is not None:
        view = AdHocView(map_fun, reduce_fun)
    elif name is not None:
        view = View(name)
    else:
        raise ValueError('either a view name or a map function is required')
    view.set_key(key)
    view.set_start_key(startkey)
    view.set_end_key(endkey)
    view.set_limit(limit)
    view.set_skip(skip)
    view.set_descending(descending)
    view.set_group(group)
    view.set_update(update)
    return view


def query_db(dburl, view, username=None, password=None, output=sys.stdout,
             session=None):
    """Execute the view in the database at `dburl` and write the rows to
    `output`, one JSON document per line.

    :return: the number of rows written
    """
    db = Database(dburl, session=session)
    if username is not None and password is not None:
        db.resource.credentials = (username, password)

    log.debug('Querying %r at %r', view.full_name, dburl)
    results = db.view(view)
    for row in results:
        output.write(json.encode(row))
        output.write('\n')
    output.flush()
    log.debug('Received %d of %r row(s)', len(results), results.total_rows)
    return len(results)


def main(argv=None):
    parser = OptionParser(usage='%prog [options] dburl [view]',
                          version=VERSION)
    parser.add_option('--key', action='store', dest='key',
                      help='only return rows with this key')
    parser.add_option('--startkey', action='store', dest='startkey',
                      metavar='JSON', help='start listing at this key')
    parser.add_option('--endkey', action='store', dest='endkey',
                      metavar='JSON', help='stop listing at this key')
    parser.add_option('--limit', action='store', dest='limit', type='int',
                      metavar='NUM', help='return at most NUM rows')
    parser.add_option('--skip', action='store', dest='skip', type='int',
                      metavar='NUM', help='skip the first NUM rows')
    parser.add_option('--descending', action='store_true', dest='descending',
                      help='return the rows in reverse order')
    parser.add_option('--group', action='store_true', dest='group',
                      help='group reduce results by key')
    parser.add_option('--update', action='store_true', dest='update',
                      help='update the view index before querying')
    parser.add_option('--map', action='store', dest='map_fun', metavar='CODE',
                      help='run an ad-hoc view with this map function')
    parser.add_option('--reduce', action='store', dest='reduce_fun',
                      metavar='CODE',
                      help='reduce function for the ad-hoc view')
    parser.add_option('--print-query', action='store_true', dest='print_query',
                      help='print the query string and exit')
    parser.add_option('--json-module', action='store', dest='json_module',
                      help='the JSON module to use ("simplejson" or "json" '
                           'are supported)')
    parser.add_option('-u', '--username', action='store', dest='username',
                      help='the username to use for authentication')
    parser.add_option('-p', '--password', action='store', dest='password',
                      help='the password to use for authentication')
    parser.add_option('--debug', action='store_true', dest='debug',
                      help='write debug log messages to the standard error '
                           'stream')
    parser.set_defaults(descending=False, group=False, update=False)
    options, args = parser.parse_args(argv)

    if not args or len(args) > 2:
        return parser.error('incorrect number of arguments')
    if len(args) == 1 and options.map_fun is None:
        return parser.error('a view name or --map is required')

    if options.debug:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            ' -> [%(levelname)s] %(message)s'
        ))
        root = logging.getLogger('couchview')
        root.addHandler(handler)
        root.setLevel(logging.DEBUG)

    if options.json_module:
        json.use(options.json_module)

    view = build_view(name=args[1] if len(args) > 1 else None,
                      map_fun=options.map_fun, reduce_fun=options.reduce_fun,
                      key=options.key, startkey=options.startkey,
                      endkey=options.endkey, limit=options.limit,
                      skip=options.skip, descending=options.descending,
                      group=options.group, update=options.update)

    if options.print_query:
        sys.stdout.write('%s\n' % (view.query_string() or ''))
        return 0

    try:
        query_db(args[0], view, username=options.username,
                 password=options.password, output=sys.stdout)
    except HTTPError as e:
        sys.stderr.write('error: %s\n' % (e,))
        sys.stderr.flush()
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
