# -*- coding: utf-8 -*-
#
# Copyright (C) 2007 Christopher Lenz
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version('CouchView')
except PackageNotFoundError:
    __version__ = '?'

from couchview.client import Database, Document, Row, Server, ViewResults
from couchview.http import HTTPError, PreconditionFailed, Resource, \
        ResourceConflict, ResourceNotFound, ServerError, Session, Unauthorized
from couchview.view import AdHocView, View
