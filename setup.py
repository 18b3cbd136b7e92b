#!/usr/local/bin/python

from setuptools import setup

setup(name='locreg',
      version='0.1',
      description='Translation catalog registry: MO, JSON and Python literal catalogs',
      python_requires='>=3.6',
      install_requires = ['python-dateutil'],
      extras_require = {
        'test': ['pytest'],
      },
      packages=['locreg', 'locreg.catalog'],
      )
