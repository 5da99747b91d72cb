"""Version of pngme, read by setup.py without importing the package."""
# setup.py exec's this file, so it must stay free of imports.

# Same layout as sys.version_info: major, minor, micro, level, serial
version_info = (0, 1, 0, 'beta', 1)

_PRERELEASE_SUFFIXES = {'alpha': 'a', 'beta': 'b', 'candidate': 'rc'}


def _make_version(major, minor, micro, releaselevel, serial):
    """Turn a version_info tuple into a PEP 440 version string."""
    assert releaselevel in {'alpha', 'beta', 'candidate', 'final'}
    version = "{:d}.{:d}.{:d}".format(major, minor, micro)
    if releaselevel in _PRERELEASE_SUFFIXES:
        version += "{}{:d}".format(_PRERELEASE_SUFFIXES[releaselevel], serial)
    return version


__version__ = _make_version(*version_info)
