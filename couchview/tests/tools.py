# -*- coding: utf-8 -*-
#
# Copyright (C) 2012 Alexander Shorin
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.
#

import io
import unittest
from unittest import mock

from couchview import http, json
from couchview.tools import query
from couchview.tests import testutil


class ToolQueryTestCase(unittest.TestCase):

    def test_build_view(self):
        view = query.build_view('people/by_name', key='John', limit=5,
                                descending=True)
        self.assertEqual(view.full_name, 'people/by_name')
        self.assertEqual(view.query_string(),
                         'key="John"&limit=5&descending=true')

    def test_build_adhoc_view(self):
        view = query.build_view(map_fun='function(doc) { emit(null, 1); }',
                                reduce_fun='_sum', group=True)
        self.assertEqual(view.full_name, '_temp_view')
        self.assertEqual(view.body()['reduce'], '_sum')
        self.assertEqual(view.query_string(), 'group=true')

    def test_build_view_requires_name_or_map(self):
        self.assertRaises(ValueError, query.build_view)

    def test_query_db(self):
        session = testutil.FakeSession()
        session.respond({'total_rows': 1, 'offset': 0, 'rows': [
            {'id': 'a', 'key': 'a', 'value': 1},
        ]})
        output = io.StringIO()
        view = query.build_view('_all_docs', limit=1)
        count = query.query_db('http://localhost:5984/test', view,
                               username='joe', password='secret',
                               output=output, session=session)
        self.assertEqual(count, 1)
        self.assertEqual(json.decode(output.getvalue().strip()),
                         {'id': 'a', 'key': 'a', 'value': 1})
        self.assertEqual(session.last.path, '/test/_all_docs')
        self.assertEqual(session.last.credentials, ('joe', 'secret'))

    def test_print_query(self):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            retval = query.main(['http://localhost:5984/test',
                                 'people/by_name', '--startkey', '["A"]',
                                 '--limit', '10', '--group',
                                 '--print-query'])
        self.assertEqual(retval, 0)
        self.assertEqual(stdout.getvalue(),
                         'startkey=["A"]&limit=10&group=true\n')

    def test_print_empty_query(self):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            query.main(['http://localhost:5984/test', '_all_docs',
                        '--print-query'])
        self.assertEqual(stdout.getvalue(), '\n')

    def test_http_error(self):
        error = http.ResourceNotFound(('not_found', 'missing'))
        with mock.patch.object(query, 'query_db', side_effect=error):
            with mock.patch('sys.stderr', new_callable=io.StringIO) as stderr:
                retval = query.main(['http://localhost:5984/test',
                                     'people/missing'])
        self.assertEqual(retval, 1)
        self.assertTrue(stderr.getvalue().startswith('error: '))

    def test_missing_view(self):
        with mock.patch('sys.stderr', new_callable=io.StringIO):
            self.assertRaises(SystemExit, query.main,
                              ['http://localhost:5984/test'])


def suite():
    suite = unittest.TestSuite()
    loader = unittest.defaultTestLoader
    suite.addTest(loader.loadTestsFromTestCase(ToolQueryTestCase))
    return suite


if __name__ == '__main__':
    unittest.main(defaultTest='suite')
