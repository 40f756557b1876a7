#!/usr/bin/env python

import sys
assert sys.version_info >= (3, 8), "This package requires at least python 3.8"
import ast
import re
from setuptools import setup, find_packages

_version_re = re.compile(r'__version__\s*=\s*(.*)')

with open('gencert/__init__.py', 'rt') as f:
    version = str(ast.literal_eval(_version_re.search(
        f.read()).group(1)))

setup(name='gencert',
      version=version,
      description='generate self-signed TLS certificates and keys for development and testing',
      author='Philip Montgomery',
      author_email='pmontgom@broadinstitute.org',
      include_package_data=True,
      python_requires='>=3.8',
      install_requires=[
          'termcolor>=1.1.0',
          'attrs>=17.2.0',
          'pydantic>=2.0',
          'cryptography>=42.0',
          'pyOpenSSL>=25.1.0'
      ],
      extras_require={
          'test': ['pytest'],
      },
      packages=find_packages(exclude=['tests', 'tests.*']),
      entry_points={'console_scripts': [
          "gencert = gencert.main:gencert_main",
      ]}
      )
