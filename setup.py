#!/usr/bin/env python
# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.
from setuptools import setup, find_packages
import pathlib
import re

HERE = pathlib.Path(__file__).parent.absolute()

JSONDELTA_PATH = HERE / "jsondelta"


def get_version(path):
    "Read __version__ from a file without importing the package."
    with open(path) as f:
        match = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.M)
    return match.group(1)


VERSION = get_version(JSONDELTA_PATH / '_version.py')

with open(HERE / 'README.md') as f:
    LONG_DESCRIPTION = f.read()


if __name__ == '__main__':
    setup(
      name='jsondelta',
      version=VERSION,
      description='Diff, patch, undo and split JSON documents with JSON Patch',
      long_description=LONG_DESCRIPTION,
      long_description_content_type='text/markdown',
      license='BSD',
      python_requires='>=3.6',
      packages=find_packages(include=['jsondelta', 'jsondelta.*']),
      package_data={'jsondelta.tests': ['files/*.json']},
      install_requires=[
          'colorama',
          'jsonpointer>=2.0',
          'jupyter_core',
          'tabulate',
          'traitlets>=5',
      ],
      extras_require={
          'test': [
              'pytest>=6.0',
          ],
      },
      entry_points={
          'console_scripts': [
              'jsondelta = jsondelta.__main__:main_dispatch',
              'jdiff = jsondelta.jdiffapp:main',
              'jpatch = jsondelta.jpatchapp:main',
              'jextract = jsondelta.jextractapp:main',
          ],
      },
      classifiers=[
          'Intended Audience :: Developers',
          'License :: OSI Approved :: BSD License',
          'Programming Language :: Python :: 3',
      ],
    )
