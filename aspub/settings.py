'''
Process wide settings consumed by the entity model and codec.

Settings are loaded once when aspub is imported ( from ASPUB_* environment
variables ) and may be reloaded with load() during application startup.
After startup they are treated as read-only; changing them while other
threads decode or encode is not supported.
'''
import logging

import aspub.exc as a_exc

import aspub.lib.const as a_const
import aspub.lib.config as a_config
import aspub.lib.logging as a_logging

logger = logging.getLogger(__name__)

confdefs = {
    'lang:default': {
        'description': 'The BCP47 language tag used for name, summary and content values.',
        'type': 'string',
        'pattern': '^[A-Za-z]{1,8}(-[A-Za-z0-9]{1,8})*$',
        'default': a_const.DEFAULT_LANG,
    },
    'json:pretty': {
        'description': 'Indent encoded entity documents by default.',
        'type': 'boolean',
        'default': True,
    },
    'log:level': {
        'description': 'Attach a stream handler to the aspub logger at this level ( ex. DEBUG or 10 ).',
        'type': ['string', 'integer'],
    },
    'log:struct': {
        'description': 'Write aspub log entries as JSON lines.',
        'type': 'boolean',
        'default': False,
    },
    'log:datefmt': {
        'description': 'The strftime format of aspub log entry times.',
        'type': 'string',
    },
}

class Settings:
    '''
    The aspub settings.

    Args:
        conf (dict): Optional configuration values.

    Notes:
        The default context entity must not have a context of its own.
        Entities built while a default context is set reference it, so a
        context chain that loops back on itself can not be encoded. This is
        not detected.
    '''
    def __init__(self, conf=None):
        schema = a_config.getJsSchema(confdefs)
        self.conf = a_config.Config(schema, conf=conf, prefix='aspub')
        self.defctx = None

    def reqConfValid(self):
        self.conf.reqConfValid()

    def getDefLang(self):
        return self.conf.get('lang:default', a_const.DEFAULT_LANG)

    def setDefLang(self, lang):
        self.conf['lang:default'] = lang

    def getDefPretty(self):
        return self.conf.get('json:pretty', True)

    def getDefContext(self):
        return self.defctx

    def setDefContext(self, ent):
        import aspub.entities as a_entities
        if ent is not None and not isinstance(ent, a_entities.Entity):
            raise a_exc.BadArg(mesg='The default context must be an Entity or None.', valu=type(ent).__name__)
        self.defctx = ent

_settings = None

def load(conf=None, path=None):
    '''
    Build and install the process wide settings.

    Args:
        conf (dict): Configuration values which take precedence over all others.
        path (str): An optional YAML file of configuration values.

    Notes:
        Values are taken from conf, then ASPUB_* environment variables
        ( ex. ASPUB_LANG_DEFAULT ), then the YAML file, then schema defaults.
        When log:level is set the aspub logger is set up with it.

    Returns:
        Settings: The installed settings.
    '''
    global _settings

    sets = Settings(conf=conf)
    sets.conf.setConfFromEnvs()

    if path is not None:
        sets.conf.setConfFromFile(path)

    sets.reqConfValid()

    level = sets.conf.get('log:level')
    if level is not None:
        try:
            a_logging.setup(level=level, structlog=sets.conf.get('log:struct'),
                            datefmt=sets.conf.get('log:datefmt'))
        except a_exc.BadArg as e:
            raise a_exc.BadConfValu(mesg=f'Invalid value for log:level: {e.get("mesg")}',
                                    name='log:level', valu=level) from None

    if _settings is not None:
        sets.defctx = _settings.defctx

    _settings = sets
    logger.debug('aspub settings loaded: %r', sets.conf.asDict())
    return sets

def get():
    return _settings

def getDefLang():
    return _settings.getDefLang()

def setDefLang(lang):
    _settings.setDefLang(lang)

def getDefContext():
    return _settings.getDefContext()

def setDefContext(ent):
    _settings.setDefContext(ent)

def getDefPretty():
    return _settings.getDefPretty()

load()
