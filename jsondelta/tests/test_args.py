import argparse
import json
import logging

import pytest

from traitlets import Enum, Integer

from jsondelta.args import (
    ConfigBackedParser, LogLevelAction, config_for_print,
    add_generic_args, add_output_args,
)
from jsondelta.config import (
    entrypoint_configurables, Global, build_config, recursive_update,
)
from jsondelta import log


class FixtureConfig(Global):
    log_level = Enum(
        ('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        'WARN',
    ).tag(config=True)

class FixtureOutputConfig(FixtureConfig):
    indent = Integer(4).tag(config=True)

@pytest.fixture
def entrypoint_config():
    entrypoint_configurables['test-prog'] = FixtureOutputConfig
    yield
    del entrypoint_configurables['test-prog']


@pytest.fixture
def restore_log_level():
    level = log.logger.level
    root_level = logging.getLogger().level
    yield
    log.logger.setLevel(level)
    logging.getLogger().setLevel(root_level)


def test_config_parser(entrypoint_config, isolated_config, restore_log_level):
    parser = ConfigBackedParser('test-prog')
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        help="Set the log level by name.",
        action=LogLevelAction,
    )

    # Check that log level default is taken from FixtureConfig
    arguments = parser.parse_args([])
    assert arguments.log_level == 'WARN'
    assert log.logger.level == logging.WARN

    arguments = parser.parse_args(['--log-level', 'ERROR'])
    assert arguments.log_level == 'ERROR'
    assert log.logger.level == logging.ERROR


def test_config_parser_output_defaults(entrypoint_config, isolated_config, restore_log_level):
    parser = ConfigBackedParser('test-prog')
    add_generic_args(parser)
    add_output_args(parser)

    arguments = parser.parse_args([])
    assert arguments.indent == 4
    assert arguments.sort_keys is False

    arguments = parser.parse_args(['--indent', '0', '--sort-keys'])
    assert arguments.indent == 0
    assert arguments.sort_keys is True


def test_config_file(entrypoint_config, isolated_config, restore_log_level):
    isolated_config.join('jsondelta_config.json').write_text(
        json.dumps({
            'FixtureConfig': {
                'log_level': 'ERROR',
                'indent': 1,
            },
            'FixtureOutputConfig': {
                'indent': 0,
            },
        }),
        encoding='utf-8'
    )

    # Subclass config takes precedence over its bases
    config = build_config('test-prog')
    assert config == {'log_level': 'ERROR', 'indent': 0}

    parser = ConfigBackedParser('test-prog')
    add_output_args(parser)
    arguments = parser.parse_args(['--sort-keys'])
    assert arguments.indent == 0
    assert arguments.sort_keys is True


def test_cli_config_file(isolated_config, restore_log_level):
    isolated_config.join('jsondelta_config.json').write_text(
        json.dumps({
            'Patch': {
                'validate': False,
            },
            'Diff': {
                'use_color': False,
            },
        }),
        encoding='utf-8'
    )

    from jsondelta.jpatchapp import _build_arg_parser as patch_parser
    from jsondelta.jdiffapp import _build_arg_parser as diff_parser
    arguments = patch_parser().parse_args(['a.json', 'p.json'])
    assert arguments.validate is False
    assert arguments.indent == 2
    arguments = diff_parser().parse_args(['a.json', 'b.json'])
    assert arguments.use_color is False


def test_build_config_unknown_entrypoint():
    with pytest.raises(ValueError):
        build_config('no-such-prog')


def test_unknown_entrypoint_uses_argparse_defaults(isolated_config, restore_log_level):
    parser = ConfigBackedParser('other-prog')
    add_output_args(parser)
    arguments = parser.parse_args([])
    assert arguments.indent == 2


def test_recursive_update():
    target = {'a': {'b': 1, 'c': 2}, 'd': 3}
    recursive_update(target, {'a': {'b': None}, 'd': 4, 'e': {'f': None}}, False)
    assert target == {'a': {'c': 2}, 'd': 4}

    target = {'a': 1}
    recursive_update(target, {'a': None}, True)
    assert target == {'a': None}


def test_config_for_print():
    assert config_for_print({'a': 'x', 'b': {}, 'c': {'d': True}}) == {
        'a': '"x"', 'b': '{}', 'c': {'d': 'true'},
    }


def test_config_help(capsys, isolated_config, restore_log_level):
    from jsondelta.jpatchapp import _build_arg_parser
    with pytest.raises(SystemExit):
        _build_arg_parser().parse_args(['--config'])
    _, err = capsys.readouterr()
    assert 'Patch' in err
    assert 'validate' in err


def test_version(capsys):
    parser = argparse.ArgumentParser(prog='jdiff')
    add_generic_args(parser)
    with pytest.raises(SystemExit):
        parser.parse_args(['--version'])
    out, _ = capsys.readouterr()
    assert out.startswith('jdiff ')
