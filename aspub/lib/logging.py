'''
Logging helpers for aspub.

aspub modules log through logging.getLogger(__name__) and install nothing on
import. setup() ( called by aspub.settings.load() when log:level is set )
attaches one stream handler to the "aspub" logger and leaves the root logger
to the application.
'''
import json
import logging

import aspub.exc as a_exc
import aspub.common as a_common

import aspub.lib.const as a_const

logger = logging.getLogger(__name__)

# every aspub module logger propagates to this one
baselogger = logging.getLogger('aspub')

_glob_handler = None

def getLogExtra(**kwargs):
    '''
    Construct the extra= envelope for a log call.

    Args:
        exc (Exception): An optional exception which is logged as error info.
        **kwargs: Values logged as the entry params.
    '''
    exc = kwargs.pop('exc', None)
    extra = {'params': kwargs, 'loginfo': {}}

    if exc is not None:
        extra['loginfo']['error'] = a_common.excinfo(exc)

    return extra

class Formatter(logging.Formatter):
    '''
    Format log records as single line JSON objects.
    '''
    def genLogInfo(self, record):

        loginfo = {
            'message': record.getMessage(),
            'logger': {
                'name': record.name,
                'func': record.funcName,
            },
            'level': record.levelname,
            'time': self.formatTime(record, self.datefmt),
        }

        loginfo.update(getattr(record, 'loginfo', {}))

        if record.exc_info:
            loginfo['error'] = a_common.excinfo(record.exc_info[1])

        loginfo['params'] = getattr(record, 'params', {})
        return loginfo

    def format(self, record):
        return json.dumps(self.genLogInfo(record), default=str)

def setup(level=logging.WARNING, structlog=False, datefmt=None):
    '''
    Attach a stream handler to the aspub logger, replacing one set up earlier.

    Args:
        level (int|str): The log level name or number.
        structlog (bool): Write JSON entries instead of text lines.
        datefmt (str): An optional strftime format for the entry time.

    Returns:
        logging.Handler: The installed handler.
    '''
    global _glob_handler

    level = normLogLevel(level)

    if structlog:
        fmtr = Formatter(datefmt=datefmt)
    else:
        fmtr = logging.Formatter(fmt=a_const.LOG_FORMAT, datefmt=datefmt)

    handler = logging.StreamHandler()
    handler.setFormatter(fmtr)

    if _glob_handler is not None:
        baselogger.removeHandler(_glob_handler)

    baselogger.addHandler(handler)
    baselogger.setLevel(level)
    _glob_handler = handler

    logger.info('aspub log level set to %s', a_const.LOG_LEVEL_INVERSE_CHOICES.get(level))
    return handler

def normLogLevel(valu):
    '''
    Normalize a log level name or number to a log level number.

    Raises:
        aspub.exc.BadArg: The value is not a known log level.
    '''
    if isinstance(valu, str):

        valu = valu.strip()
        level = a_const.LOG_LEVEL_CHOICES.get(valu.upper())
        if level is not None:
            return level

        try:
            valu = int(valu)
        except ValueError:
            raise a_exc.BadArg(mesg=f'Invalid log level: {valu}', valu=valu) from None

    if isinstance(valu, int) and not isinstance(valu, bool):

        if valu not in a_const.LOG_LEVEL_INVERSE_CHOICES:
            raise a_exc.BadArg(mesg=f'Invalid log level: {valu}', valu=valu)

        return valu

    raise a_exc.BadArg(mesg=f'Invalid log level type: {type(valu).__name__}', valu=repr(valu))
