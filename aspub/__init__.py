'''
The aspub Activity Streams entity graph and polymorphic JSON codec.
'''

import sys
if (sys.version_info.major, sys.version_info.minor) < (3, 10):  # pragma: no cover
    raise Exception('aspub is not supported on Python versions < 3.10')

from aspub.lib.version import version, verstring
