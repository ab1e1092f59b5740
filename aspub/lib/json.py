'''
JSON text handling for entity documents.

yyjson does the work. The standard library json module only sees the values
yyjson refuses ( ex. strings holding lone surrogates ) so those behave the
way json.loads() / json.dumps() would.
'''
import json
import logging

from typing import Any

import yyjson

import aspub.exc as a_exc

logger = logging.getLogger(__name__)

def loads(text: str | bytes) -> Any:
    '''
    Parse JSON text.

    Args:
        text (str | bytes): The JSON text.

    Returns:
        (object): The parsed value.

    Raises:
        aspub.exc.BadJsonText: The text is not valid JSON.
    '''
    try:
        return yyjson.Document(text, flags=yyjson.ReaderFlags.BIGNUM_AS_RAW).as_obj
    except (ValueError, TypeError) as e:
        logger.debug('yyjson refused the text, parsing with json: %s', e)

    try:
        return json.loads(text)
    except ValueError as e:
        raise a_exc.BadJsonText(mesg=f'Invalid JSON text: {e}') from None

def dumps(valu: Any, indent: bool = False) -> str:
    '''
    Serialize a JSON compatible value ( usually a packed entity document ).

    Args:
        valu (object): The value to serialize.
        indent (bool): Indent nested values by two spaces. Bare strings are never indented.

    Returns:
        (str): The JSON text.

    Raises:
        aspub.exc.MustBeJsonSafe: The value has no JSON representation.
    '''
    if isinstance(valu, (bytes, bytearray)):
        raise a_exc.MustBeJsonSafe(mesg=f'{type(valu).__name__} values have no JSON representation.')

    flags = 0
    if indent:
        flags |= yyjson.WriterFlags.PRETTY_TWO_SPACES

    try:
        if isinstance(valu, str):
            # yyjson.Document() parses a bare str as JSON text
            return yyjson.Document([valu]).dumps()[1:-1]
        return yyjson.Document(valu).dumps(flags=flags)

    except UnicodeEncodeError as e:
        logger.debug('yyjson refused the value, serializing with json: %s', e)

    except (TypeError, ValueError) as e:
        raise a_exc.MustBeJsonSafe(mesg=f'{e.__class__.__name__}: {e}') from None

    try:
        if indent and not isinstance(valu, str):
            return json.dumps(valu, indent=2)
        return json.dumps(valu, separators=(',', ':'))
    except (TypeError, ValueError) as e:
        raise a_exc.MustBeJsonSafe(mesg=f'{e.__class__.__name__}: {e}') from None
