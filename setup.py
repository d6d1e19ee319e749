# Standard library imports ...
import pathlib
import re

# Third party library imports ...
from setuptools import setup

kwargs = {
    'name': 'exifio',
    'description': 'Read and write TIFF-structured Exif metadata',
    'long_description': open('README.md').read(),
    'long_description_content_type': 'text/markdown',
    'packages': ['exifio'],
    'entry_points': {
        'console_scripts': ['exifdump=exifio.command_line:main'],
    },
    'license': 'MIT',
    'python_requires': '>=3.10',
    'install_requires': ['numpy', 'packaging'],
    'extras_require': {'test': ['pytest']},
}

kwargs['classifiers'] = [
    "Programming Language :: Python",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: Implementation :: CPython",
    "License :: OSI Approved :: MIT License",
    "Development Status :: 3 - Alpha",
    "Operating System :: MacOS",
    "Operating System :: POSIX :: Linux",
    "Operating System :: Microsoft :: Windows",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Information Technology",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules"
]

# Get the version string.  Cannot do this by importing exifio!
p = pathlib.Path('exifio') / 'version.py'
contents = p.read_text()
pattern = r'''version\s=\s"(?P<version>\d*.\d*.\d*.*)"\s'''
match = re.search(pattern, contents)
kwargs['version'] = match.group('version')

setup(**kwargs)
