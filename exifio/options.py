"""
Manage exifio configuration settings.
"""
# Standard library imports
import copy

# Local imports
from . import config


_default_options = {
    'parse.max_directories': 0xffff,
    'print.short': False,
}


def _check_option(key, value):
    if key == 'parse.max_directories':
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            msg = f'{key} must be a positive integer, not {value!r}.'
            raise ValueError(msg)


def _read_config():
    """Return the option overrides from the configuration file, checked the
    same way as set_option checks them.
    """
    overrides = config.read_config_file(_default_options)
    for key, value in overrides.items():
        _check_option(key, value)
    return overrides


_original_options = dict(_default_options, **_read_config())
_options = copy.deepcopy(_original_options)


def set_option(key, value):
    """Set the value of the specified option.

    Available options:

        parse.max_directories
        print.short

    Parameters
    ----------
    key : str
        Name of a single option.
    value :
        New value of option.

    Option Descriptions
    -------------------
    parse.max_directories : int
        Maximum number of top-level directories followed along the chain of
        next-directory offsets before the document is considered malformed.
        [default: 65535]
    print.short : bool
        When True, only the directory lines are displayed.  Useful for
        displaying only the basic structure of a document. [default: False]

    See also
    --------
    get_option
    """
    if key not in _options.keys():
        raise KeyError('{key} not valid.'.format(key=key))

    _check_option(key, value)
    _options[key] = value


def get_option(key):
    """Return the value of the specified option

    Available options:

        parse.max_directories
        print.short

    Parameter
    ---------
    key : str
        Name of a single option.

    Returns
    -------
    result : the value of the option.

    See also
    --------
    set_option
    """
    return _options[key]


def reset_option(key):
    """
    Reset one or more options to their default value.

    Pass "all" as argument to reset all options.

    Available options:

        parse.max_directories
        print.short

    Parameter
    ---------
    key : str
        Name of a single option.
    """
    global _options
    if key == 'all':
        _options = copy.deepcopy(_original_options)
    else:
        if key not in _options.keys():
            raise KeyError('{key} not valid.'.format(key=key))
        _options[key] = _original_options[key]
