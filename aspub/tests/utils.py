'''
Test helpers for aspub.

PubTest is a unittest.TestCase with short assertion wrappers. It puts the
process wide settings and fetcher back after every test, so tests may change
them freely. It runs under both unittest and pytest.
'''
import io
import os
import logging
import tempfile
import unittest
import threading
import contextlib

import aspub.common as a_common
import aspub.settings as a_settings

import aspub.lib.fetch as a_fetch

logger = logging.getLogger(__name__)

def norm(z):
    # lists and tuples compare equal
    if isinstance(z, (list, tuple)):
        return tuple([norm(n) for n in z])
    if isinstance(z, dict):
        return {norm(k): norm(v) for (k, v) in z.items()}
    return z

class CountFetcher(a_fetch.Fetcher):
    '''
    A Fetcher which returns a fixed object and counts how often it was asked.
    '''
    def __init__(self, valu, delay=0.0):
        self.valu = valu
        self.delay = delay
        self.count = 0
        self.lock = threading.Lock()

    def fetchObject(self, href):
        with self.lock:
            self.count += 1

        if self.delay:
            threading.Event().wait(timeout=self.delay)

        return self.valu

class PubTest(unittest.TestCase):

    def tearDown(self):
        # settings and the fetcher are process wide; put them back
        a_settings.load()
        a_settings.setDefContext(None)
        a_fetch.setFetcher(None)
        unittest.TestCase.tearDown(self)

    @contextlib.contextmanager
    def getTestDir(self):
        '''
        Yield a temporary directory which is removed afterwards.
        '''
        with tempfile.TemporaryDirectory() as dirn:
            yield dirn

    @contextlib.contextmanager
    def getLoggerStream(self, logname):
        '''
        Capture the DEBUG and higher messages of a logger.

        Example:

            with self.getLoggerStream('aspub.codec') as stream:
                decode_entity(text)

            self.isin('Unknown entity type', stream.getvalue())

        Yields:
            io.StringIO: The captured text.
        '''
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        slogger = logging.getLogger(logname)
        level = slogger.level

        slogger.addHandler(handler)
        slogger.setLevel('DEBUG')
        try:
            yield stream
        finally:
            slogger.removeHandler(handler)
            slogger.setLevel(level)

    @contextlib.contextmanager
    def setTstEnvars(self, **props):
        '''
        Set environment variables ( as str ) for the duration of the block.

        Example:

            with self.setTstEnvars(ASPUB_LANG_DEFAULT='fr'):
                a_settings.load()
        '''
        olds = {}
        for name, valu in props.items():
            olds[name] = os.environ.get(name)
            os.environ[name] = str(valu)

        try:
            yield None
        finally:
            for name, oldv in olds.items():
                if oldv is None:
                    os.environ.pop(name, None)
                else:
                    os.environ[name] = oldv

    def eq(self, x, y, msg=None):
        self.assertEqual(norm(x), norm(y), msg=msg)

    def ne(self, x, y):
        self.assertNotEqual(norm(x), norm(y))

    def true(self, x, msg=None):
        self.assertTrue(x, msg=msg)

    def false(self, x, msg=None):
        self.assertFalse(x, msg=msg)

    def none(self, x, msg=None):
        self.assertIsNone(x, msg=msg)

    def noprop(self, info, prop):
        '''
        Assert a key is absent from a dict ( a None value is not absent ).
        '''
        valu = info.get(prop, a_common.novalu)
        self.true(valu is a_common.novalu, msg=f'{prop} is present')

    def raises(self, *args, **kwargs):
        return self.assertRaises(*args, **kwargs)

    def isinstance(self, obj, cls, msg=None):
        self.assertIsInstance(obj, cls, msg=msg)

    def isin(self, member, container, msg=None):
        self.assertIn(member, container, msg=msg)

    def notin(self, member, container, msg=None):
        self.assertNotIn(member, container, msg=msg)

    def len(self, x, obj, msg=None):
        self.eq(x, len(obj), msg=msg)
