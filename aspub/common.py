import os
import traceback

import yaml

import aspub.exc as a_exc

try:
    from yaml import CSafeLoader as Loader
except ImportError:  # pragma: no cover
    from yaml import SafeLoader as Loader

class NoValu:
    pass

# an absent value, as opposed to an explicit null
novalu = NoValu()

def yamlloads(text):
    return yaml.load(text, Loader)

def yamlload(path):
    '''
    Load a YAML file.

    Args:
        path (str): The file path. ``~`` and environment variables are expanded.

    Returns:
        The decoded content, or None if there is no file at path.
    '''
    path = os.path.abspath(os.path.expandvars(os.path.expanduser(path)))
    if not os.path.isfile(path):
        return None

    with open(path, 'rb') as fd:
        return yamlloads(fd)

def excinfo(e):
    '''
    Return the err, errmsg, errfile and errline info ( and any errinfo ) for an exception.
    '''
    ret = {
        'err': e.__class__.__name__,
        'errmsg': str(e),
    }

    tb = e.__traceback__
    if tb is not None:
        path, line, name, sorc = traceback.extract_tb(tb)[-1]
        ret['errfile'] = path
        ret['errline'] = line

    if isinstance(e, a_exc.PubErr):
        ret['errinfo'] = e.errinfo

    return ret
