# -*- coding: utf-8 -*-
#
# Copyright (C) 2007-2009 Christopher Lenz
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.

import doctest
from io import BytesIO
from urllib.parse import parse_qsl, urlsplit

from couchview import client, http, json


class FakeSession(object):
    """Stand-in for `http.Session` that records requests and answers them
    with queued responses instead of talking to a server.
    """

    def __init__(self):
        self.requests = []
        self.responses = []

    def respond(self, data, status=200, headers=None):
        all_headers = {'content-type': 'application/json'}
        all_headers.update(headers or {})
        self.responses.append((status, all_headers, data))

    def fail(self, exc):
        self.responses.append(exc)

    def request(self, method, url, body=None, headers=None, credentials=None):
        self.requests.append(Request(method, url, body, headers, credentials))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        status, headers, data = response
        if data is not None:
            data = BytesIO(json.encode(data).encode('utf-8'))
        return status, headers, data

    @property
    def last(self):
        return self.requests[-1]


class Request(object):

    def __init__(self, method, url, body, headers, credentials):
        self.method = method
        self.url = url
        self.body = body
        self.headers = headers
        self.credentials = credentials

    @property
    def path(self):
        return urlsplit(self.url).path

    @property
    def params(self):
        return dict(parse_qsl(urlsplit(self.url).query))


class FakeDatabaseMixin(object):

    def setUp(self):
        self.session = FakeSession()
        self.server = client.Server('http://localhost:5984/',
                                    session=self.session)
        self.db = client.Database(http.Resource('http://localhost:5984/test',
                                                self.session), 'test')


def doctest_suite(mod):
    return doctest.DocTestSuite(mod, optionflags=doctest.ELLIPSIS)
