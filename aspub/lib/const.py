import logging

# Logging related constants
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s ' \
             '[%(filename)s:%(funcName)s:%(threadName)s:%(processName)s]'
LOG_LEVEL_CHOICES = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}
LOG_LEVEL_INVERSE_CHOICES = {v: k for k, v in LOG_LEVEL_CHOICES.items()}

# Activity Streams constants
AS_NAMESPACE = 'https://www.w3.org/ns/activitystreams'

# the media type assumed for Object content when none is given
DEFAULT_MEDIA_TYPE = 'text/html'
DEFAULT_LANG = 'en'

# time (in micros) constants
onesec = 1000000
onemin = onesec * 60
onehour = onemin * 60
oneday = onehour * 24
