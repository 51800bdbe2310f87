# -*- coding: utf-8 -*-
#
# Copyright (C) 2009 Christopher Lenz
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.

import unittest

from couchview import json
from couchview.tests import testutil


class JsonTestCase(unittest.TestCase):

    def tearDown(self):
        json.use('json')

    def test_encode_is_compact(self):
        self.assertEqual(json.encode(['a', 1, None]), '["a",1,null]')

    def test_encode_keeps_unicode(self):
        self.assertEqual(json.encode(u'føø'), u'"føø"')

    def test_disallow_nan(self):
        self.assertRaises(ValueError, json.encode, float('nan'))

    def test_decode_bytes(self):
        self.assertEqual(json.decode(u'"føø"'.encode('utf-8')), u'føø')

    def test_use_custom(self):
        json.use(decode=lambda s: 'decoded', encode=lambda o: 'encoded')
        self.assertEqual(json.encode({}), 'encoded')
        self.assertEqual(json.decode('{}'), 'decoded')

    def test_use_module_object(self):
        import json as stdlib_json
        json.use(stdlib_json)
        self.assertEqual(json.decode('[1]'), [1])

    def test_use_unsupported(self):
        self.assertRaises(ValueError, json.use, 'cjson')

    def test_use_requires_both_functions(self):
        self.assertRaises(ValueError, json.use, decode=lambda s: s)


def suite():
    suite = unittest.TestSuite()
    suite.addTest(testutil.doctest_suite(json))
    loader = unittest.defaultTestLoader
    suite.addTest(loader.loadTestsFromTestCase(JsonTestCase))
    return suite


if __name__ == '__main__':
    unittest.main(defaultTest='suite')
