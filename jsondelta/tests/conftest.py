# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import logging
import os
import shutil

from pytest import fixture, skip

from jsondelta import config as jsondelta_config
from jsondelta.profiling import timer


def testspath():
    return os.path.abspath(os.path.dirname(__file__))


@fixture
def slow(request):
    if request.config.getoption('--quick', default=False):
        skip('skipping slow test')


@fixture
def random_seeds(request):
    return range(request.config.getoption('--seeds', default=500))


@fixture(scope='session')
def filespath():
    return os.path.join(testspath(), "files")


@fixture
def tempfiles(tmpdir, filespath):
    """Fixture for copying test files into a temporary directory"""
    dest = tmpdir.join('testfiles')
    shutil.copytree(filespath, str(dest))
    return str(dest)


@fixture
def reset_log():
    # clear root logger handlers before test and reset afterwards
    handlers = list(logging.getLogger().handlers)
    logging.getLogger().handlers[:] = []
    yield
    logging.getLogger().handlers[:] = handlers


@fixture
def reset_timer():
    try:
        yield timer
    finally:
        timer.reset()


@fixture
def isolated_config(tmpdir, monkeypatch):
    """Run in an empty directory, ignoring any user config files."""
    monkeypatch.setattr(jsondelta_config, 'config_path', lambda: [str(tmpdir)])
    with tmpdir.as_cwd():
        yield tmpdir
