import re
import sys


if sys.version_info[0] == 2:
    sys.exit("huffpack requires Python 3")

if "test" in sys.argv:
    import huffpack
    # when test was successful, return 0 (hence not)
    sys.exit(not huffpack.test().wasSuccessful())

from setuptools import setup


kwds = {}
try:
    kwds['long_description'] = open('README.rst').read()
except IOError:
    pass

# Read version from huffpack/__init__.py
pat = re.compile(r"^__version__\s*=\s*'(\S+)'", re.M)
data = open('huffpack/__init__.py').read()
kwds['version'] = pat.search(data).group(1)

setup(
    name = "huffpack",
    author = "The huffpack developers",
    license = "PSF-2.0",
    classifiers = [
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: System :: Archiving :: Compression",
        "Topic :: Utilities",
    ],
    description = "lossless file compression using static Huffman codes",
    packages = ["huffpack"],
    python_requires = ">=3.8",
    install_requires = ["bitarray>=3.0"],
    extras_require = {"test": ["pytest"]},
    entry_points = {
        "console_scripts": ["huffpack = huffpack.cli:main"],
    },
    zip_safe = False,
    **kwds
)
