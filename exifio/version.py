"""
This file is part of exifio, a Python interface for reading and writing
TIFF-structured Exif metadata.

Copyright 2026 The exifio developers

License:  MIT
"""

# Standard library imports ...
import sys

# Third party library imports ...
from packaging.version import parse
import numpy as np

# Do not change the format of this next line!  Doing so risks breaking
# setup.py
version = "0.1.0"

version_tuple = parse(version).release

__doc__ = f"""\
This is exifio **{version}**
"""

info = f"""\
Summary of exifio configuration
-------------------------------

exifio        {version}
Python        {sys.version}
sys.platform  {sys.platform}
sys.maxsize   {sys.maxsize}
numpy         {np.__version__}
"""
