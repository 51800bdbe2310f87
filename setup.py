#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright (C) 2007-2009 Christopher Lenz
# All rights reserved.
#
# This software is licensed as described in the file COPYING, which
# you should have received as part of this distribution.

from setuptools import setup


setup(
    name = 'CouchView',
    version = '1.0',
    description = 'Python library for querying CouchDB views',
    long_description = \
"""This is a Python library for CouchDB views. It builds view query options,
runs permanent and ad-hoc views and returns their rows.""",
    author = 'Christopher Lenz',
    author_email = 'cmlenz@gmx.de',
    license = 'BSD',
    classifiers = [
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Database :: Front-Ends',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
    packages = ['couchview', 'couchview.tools', 'couchview.tests'],
    python_requires = '>=3.8',
    install_requires = [],
    extras_require = {
        'simplejson': ['simplejson'],
        'test': ['pytest'],
    },
    entry_points = {
        'console_scripts': [
            'couchview-query = couchview.tools.query:main',
        ],
    },
    zip_safe = True,
)
