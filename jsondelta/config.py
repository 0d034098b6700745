import os

from jupyter_core.paths import jupyter_config_path

from traitlets import Enum, Integer, Bool, HasTraits
from traitlets.config.loader import JSONFileConfigLoader, ConfigFileNotFound

from . import log


CONFIG_BASENAME = 'jsondelta_config'


class JsonDeltaConfigurable(HasTraits):

    def configured_traits(self, cls):
        "The current values of the config traits defined directly on cls."
        return {name: getattr(self, name)
                for name in cls.class_own_traits(config=True)}


_config_cache = {}
def config_instance(cls):
    if cls not in _config_cache:
        _config_cache[cls] = cls()
    return _config_cache[cls]


def config_path():
    "The directories searched for config files, in descending priority order."
    return [os.getcwd()] + jupyter_config_path()


def _load_config_files(basefilename, path):
    """Yield the config found in each directory of path.

    The directories are visited from lowest to highest priority,
    so later configs should override earlier ones.
    """
    for directory in reversed(path):
        loader = JSONFileConfigLoader(basefilename + '.json', path=directory)
        try:
            config = loader.load_config()
        except ConfigFileNotFound:
            continue
        if config:
            log.debug("loaded config from %s", loader.full_filename)
            yield config


def recursive_update(target, new, include_none):
    """Recursively update one dictionary using another.

    Unless include_none is true, None values delete their keys
    and subdicts left empty are dropped.
    """
    for key, value in new.items():
        if isinstance(value, dict):
            sub = target.setdefault(key, {})
            recursive_update(sub, value, include_none)
            if not sub and not include_none:
                del target[key]
        elif value is None and not include_none:
            target.pop(key, None)
        else:
            target[key] = value


def _configurable_chain(cls):
    "The jsondelta configurables cls inherits from, most generic first."
    return [c for c in reversed(cls.mro()) if issubclass(c, JsonDeltaConfigurable)]


def build_config(entrypoint, include_none=False):
    """Resolve the effective config of an entrypoint.

    The defaults and config file sections of each configurable class
    are merged along the class hierarchy, so that sections for a
    subclass override those for its bases.
    """
    try:
        configurable = entrypoint_configurables[entrypoint]
    except KeyError:
        raise ValueError('Config for entrypoint name %r is not defined! Accepted values are %r.' % (
            entrypoint, sorted(entrypoint_configurables)))

    disk_config = {}
    for c in _load_config_files(CONFIG_BASENAME, config_path()):
        recursive_update(disk_config, c, include_none)

    config = {}
    for cls in _configurable_chain(configurable):
        recursive_update(config, config_instance(cls).configured_traits(cls), include_none)
        recursive_update(config, disk_config.get(cls.__name__, {}), include_none)
    return config


def get_defaults_for_argparse(entrypoint):
    return build_config(entrypoint)


class Global(JsonDeltaConfigurable):

    log_level = Enum(
        ('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        'INFO',
        help="Set the log level by name.",
    ).tag(config=True)


class _Output(JsonDeltaConfigurable):

    indent = Integer(
        2,
        help="Indentation of json output, 0 writes compact json.",
    ).tag(config=True)

    sort_keys = Bool(
        False,
        help="Whether to sort object members by key in json output.",
    ).tag(config=True)


class Diff(Global, _Output):

    use_color = Bool(
        True,
        help="Whether to use ANSI color code escapes for terminal output.",
    ).tag(config=True)


class Patch(Global, _Output):

    validate = Bool(
        True,
        help="Whether to check the format of the whole patch "
             "before applying any of its operations.",
    ).tag(config=True)


class Extract(Global, _Output):
    pass


entrypoint_configurables = {
    'jdiff': Diff,
    'jpatch': Patch,
    'jextract': Extract,
}
