'''
Conversion between a logical ordered sequence and its two wire shapes.

On the wire a plural property may be a bare value or an array. Reads accept
either shape. Writes always use the tersest shape: nothing for an empty
sequence, the bare value for one element and an array otherwise.
'''
import aspub.common as a_common

def unpack(valu, func):
    '''
    Decode a wire value into a list.

    Args:
        valu: The parsed JSON value ( a list or any single value ).
        func (callable): The element decoder.

    Returns:
        list: The decoded elements.
    '''
    if isinstance(valu, list):
        return [func(v) for v in valu]
    return [func(valu)]

def pack(valus, func):
    '''
    Encode a sequence into its wire shape.

    Args:
        valus: The sequence to encode ( None is treated as empty ).
        func (callable): The element encoder.

    Returns:
        The bare element for one item, a list for two or more items or
        aspub.common.novalu when the property must be omitted.
    '''
    if not valus:
        return a_common.novalu

    if len(valus) == 1:
        return func(valus[0])

    return [func(v) for v in valus]
