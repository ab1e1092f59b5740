'''
Time related utilities for Activity Streams timestamps and xsd:duration values.
'''
import logging
import datetime

import pytz
import regex

import dateutil.parser as d_parser

import aspub.exc as a_exc

import aspub.lib.const as a_const

logger = logging.getLogger(__name__)

EPOCHUTC = datetime.datetime(1970, 1, 1, tzinfo=pytz.utc)

durre = regex.compile(r'''
    ^(?P<sign>-)?P
    (?:(?P<years>\d+)Y)?
    (?:(?P<months>\d+)M)?
    (?:(?P<weeks>\d+)W)?
    (?:(?P<days>\d+)D)?
    (?:T
        (?:(?P<hours>\d+)H)?
        (?:(?P<minutes>\d+)M)?
        (?:(?P<seconds>\d+)(?:\.(?P<frac>\d{1,6})\d*)?S)?
    )?$
''', regex.VERBOSE)

def total_microseconds(delta):
    return (delta.days * a_const.oneday) + (delta.seconds * a_const.onesec) + delta.microseconds

def toUTC(dtime):
    '''
    Convert a naive or aware datetime object to an aware UTC datetime.

    Naive values are assumed to already be in UTC.
    '''
    if dtime.tzinfo is None:
        return pytz.utc.localize(dtime)
    return dtime.astimezone(pytz.utc)

def parse(text):
    '''
    Parse an ISO-8601 / RFC-3339 date-time string.

    Args:
        text (str): The text to parse ( ex. 2014-12-12T12:12:12Z ).

    Returns:
        datetime.datetime: An aware datetime in UTC.
    '''
    text = text.strip()
    try:
        dtime = d_parser.isoparse(text)
    except (ValueError, OverflowError) as e:
        raise a_exc.BadTime(mesg=f'Invalid date-time value: {text}', valu=text, reason=str(e)) from None

    return toUTC(dtime)

def norm(valu):
    '''
    Normalize a datetime or ISO-8601 string to an aware UTC datetime.
    '''
    if isinstance(valu, datetime.datetime):
        return toUTC(valu)

    if isinstance(valu, str):
        return parse(valu)

    raise a_exc.BadTypeValu(mesg=f'Invalid date-time value type: {type(valu).__name__}', valu=valu)

def repr(dtime):
    '''
    Return the canonical RFC-3339 text for a datetime.
    '''
    dtime = toUTC(dtime)
    # strftime does not zero pad years before 1000 on every platform
    text = f'{dtime.year:04d}-' + dtime.strftime('%m-%dT%H:%M:%S')
    if dtime.microsecond:
        text += f'.{dtime.microsecond:06d}'
    return text + 'Z'

def timestamp(dtime):
    '''
    Convert a datetime object to an epoch micros timestamp.
    '''
    return total_microseconds(toUTC(dtime) - EPOCHUTC)

def parseDuration(text):
    '''
    Parse an xsd:duration string ( ex. PT5S ) into a timedelta.

    Notes:
        Year and month components have no fixed length and are only
        accepted when they are zero.

    Returns:
        datetime.timedelta: The parsed duration.
    '''
    text = text.strip()

    mtch = durre.match(text)
    if mtch is None or text.endswith(('P', 'T')):
        raise a_exc.BadTime(mesg=f'Invalid duration value: {text}', valu=text)

    info = mtch.groupdict()

    for name in ('years', 'months'):
        if int(info.get(name) or 0):
            mesg = f'Duration {text} uses {name} which have no fixed length.'
            raise a_exc.BadTime(mesg=mesg, valu=text)

    frac = info.get('frac') or '0'
    micros = int(frac.ljust(6, '0'))

    delta = datetime.timedelta(
        weeks=int(info.get('weeks') or 0),
        days=int(info.get('days') or 0),
        hours=int(info.get('hours') or 0),
        minutes=int(info.get('minutes') or 0),
        seconds=int(info.get('seconds') or 0),
        microseconds=micros,
    )

    if info.get('sign'):
        delta = -delta

    return delta

def normDuration(valu):
    '''
    Normalize a timedelta or xsd:duration string to a timedelta.
    '''
    if isinstance(valu, datetime.timedelta):
        return valu

    if isinstance(valu, str):
        return parseDuration(valu)

    raise a_exc.BadTypeValu(mesg=f'Invalid duration value type: {type(valu).__name__}', valu=valu)

def reprDuration(delta):
    '''
    Return the xsd:duration text for a timedelta ( ex. P1DT2H3M4.5S ).
    '''
    micros = total_microseconds(delta)

    sign = ''
    if micros < 0:
        sign = '-'
        micros = -micros

    days, micros = divmod(micros, a_const.oneday)
    hours, micros = divmod(micros, a_const.onehour)
    minutes, micros = divmod(micros, a_const.onemin)
    seconds, micros = divmod(micros, a_const.onesec)

    text = sign + 'P'
    if days:
        text += f'{days}D'

    tparts = ''
    if hours:
        tparts += f'{hours}H'
    if minutes:
        tparts += f'{minutes}M'
    if seconds or micros:
        if micros:
            tparts += f'{seconds}.{micros:06d}'.rstrip('0') + 'S'
        else:
            tparts += f'{seconds}S'

    if tparts:
        text += 'T' + tparts

    if text in ('P', '-P'):
        return 'PT0S'

    return text
