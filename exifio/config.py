"""
Locate and read the exifio configuration file.
"""
from configparser import ConfigParser, NoSectionError
import os
import pathlib
import platform


def exifiorc_fname():
    """Return the path to the configuration file.

    Search order:
        1) current working directory
        2) environ var XDG_CONFIG_HOME
        3) $HOME/.config/exifio/exifiorc
    """

    # Current directory.
    path = pathlib.Path.cwd() / 'exifiorc'
    if path.exists():
        return path

    confdir_path = get_configdir()
    if confdir_path is not None:
        path = confdir_path / 'exifiorc'
        if path.exists():
            return path

    # didn't find a configuration file.
    return None


def read_config_file(defaults):
    """
    Extract option overrides from a configuration file.

    Parameters
    ----------
    defaults : dict
        Default option values.  Only keys found here are read, and each value
        is converted to the type of its default.

    Returns
    -------
    dict
        Overridden options, possibly empty.
    """
    filename = exifiorc_fname()
    if filename is None:
        # There are no overrides in this case.
        return {}

    parser = ConfigParser()
    parser.read(filename)

    try:
        items = parser.items('options')
    except NoSectionError:
        return {}

    overrides = {}
    for key, _ in items:
        if key not in defaults:
            msg = f'{key} in {filename} is not a valid option.'
            raise KeyError(msg)

        default = defaults[key]
        if isinstance(default, bool):
            overrides[key] = parser.getboolean('options', key)
        elif isinstance(default, int):
            overrides[key] = parser.getint('options', key)
        else:
            overrides[key] = parser.get('options', key)

    return overrides


def get_configdir():
    """Return string representing the configuration directory.

    Default is $HOME/.config/exifio.  You can override this with the
    XDG_CONFIG_HOME environment variable.
    """
    if 'XDG_CONFIG_HOME' in os.environ:
        return pathlib.Path(os.environ['XDG_CONFIG_HOME']) / 'exifio'

    if 'HOME' in os.environ and platform.system() != 'Windows':
        # HOME is set by WinPython to something unusual, so we don't
        # necessarily want that.
        return pathlib.Path(os.environ['HOME']) / '.config' / 'exifio'

    # Last stand.  Should handle windows... others?
    return pathlib.Path.home() / 'exifio'
