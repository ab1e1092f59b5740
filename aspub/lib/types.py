'''
Field types for entity properties.

Each Field is a data descriptor which knows how to normalize an assigned
value, how to write itself into a wire document and how to read itself back.
The singular accessors ( First, DefLang ) are plain descriptors over a plural
Field and are not part of the wire schema.
'''
import sys
import logging
import numbers

import aspub.exc as a_exc
import aspub.common as a_common

import aspub.lib.time as a_time
import aspub.lib.shape as a_shape
import aspub.lib.langmap as a_langmap
import aspub.lib.restrict as a_restrict

logger = logging.getLogger(__name__)

class Field:
    '''
    The base class for entity fields.

    Args:
        wire (str): The property name used in JSON documents.
        doc (str): Optional documentation for the field.
    '''
    def __init__(self, wire, doc=None):
        self.wire = wire
        self.doc = doc
        self.name = None
        self.modname = None

    def __set_name__(self, owner, name):
        self.name = name
        self.modname = owner.__module__

    def __repr__(self):
        return f'{self.__class__.__name__}({self.name!r}, wire={self.wire!r})'

    def __get__(self, ent, cls=None):
        if ent is None:
            return self
        return ent.__dict__.get(self.name)

    def __set__(self, ent, valu):
        if valu is not None:
            valu = self.norm(valu)
        ent.__dict__[self.name] = valu

    def wires(self):
        return (self.wire,)

    def norm(self, valu):
        return valu

    def isnull(self, ent):
        return self.__get__(ent) is None

    def cmprvalu(self, ent):
        '''
        Return the value used to compare this field across entities.
        '''
        return self.__get__(ent)

    def packInto(self, ent, info, codec):
        valu = self.__get__(ent)
        if valu is None:
            return
        valu = self.pack(valu, codec)
        if valu is not a_common.novalu:
            info[self.wire] = valu

    def unpackFrom(self, ent, item, codec):
        valu = item.get(self.wire, a_common.novalu)
        if valu is a_common.novalu:
            return
        ent.__dict__[self.name] = self.unpack(valu, codec)

    def pack(self, valu, codec):
        return valu

    def unpack(self, valu, codec):
        if valu is None:
            return None
        return self.norm(valu)

    def _reqKind(self, name):
        # kinds are named so fields may reference classes defined later
        # in the module which declares them.
        if not isinstance(name, str):
            return name

        kind = getattr(sys.modules[self.modname], name, None)
        if kind is None:
            raise a_exc.NoSuchType.init(name)
        return kind

    def _raiseBadValu(self, valu, mesg):
        raise a_exc.BadTypeValu(mesg=f'{self.name}: {mesg}', name=self.name, valu=repr(valu)[:256])

class Str(Field):

    def __init__(self, wire, doc=None, defv=None):
        Field.__init__(self, wire, doc=doc)
        self.defv = defv

    def norm(self, valu):
        if not isinstance(valu, str):
            self._raiseBadValu(valu, f'expected a string, not {type(valu).__name__}.')
        return valu

    def isnull(self, ent):
        valu = self.__get__(ent)
        return valu is None or valu == self.defv

    def packInto(self, ent, info, codec):
        if self.isnull(ent):
            return
        info[self.wire] = self.__get__(ent)

class Num(Field):
    '''
    A numeric field with an optional minimum value.
    '''
    def __init__(self, wire, doc=None, minv=None, ints=False):
        Field.__init__(self, wire, doc=doc)
        self.minv = minv
        self.ints = ints

    def norm(self, valu):

        if isinstance(valu, bool) or not isinstance(valu, numbers.Real):
            self._raiseBadValu(valu, f'expected a number, not {type(valu).__name__}.')

        if self.ints:
            if isinstance(valu, float) and not valu.is_integer():
                self._raiseBadValu(valu, 'expected an integer.')
            valu = int(valu)

        if self.minv is not None and valu < self.minv:
            self._raiseBadValu(valu, f'value may not be less than {self.minv}.')

        return valu

class Time(Field):

    def norm(self, valu):
        return a_time.norm(valu)

    def pack(self, valu, codec):
        return a_time.repr(valu)

    def unpack(self, valu, codec):
        if not isinstance(valu, str):
            self._raiseBadValu(valu, 'expected a date-time string.')
        return a_time.parse(valu)

class Duration(Field):

    def norm(self, valu):
        return a_time.normDuration(valu)

    def pack(self, valu, codec):
        return a_time.reprDuration(valu)

    def unpack(self, valu, codec):
        if not isinstance(valu, str):
            self._raiseBadValu(valu, 'expected an xsd:duration string.')
        return a_time.parseDuration(valu)

class Plural(Field):
    '''
    A field holding an ordered sequence which is encoded single-or-array.
    '''
    def norm(self, valu):
        if isinstance(valu, (str, bytes, dict)) or not hasattr(valu, '__iter__'):
            self._raiseBadValu(valu, f'expected a sequence, not {type(valu).__name__}.')
        return [self.normItem(v) for v in valu]

    def normItem(self, valu):
        return valu

    def isnull(self, ent):
        return not self.__get__(ent)

    def cmprvalu(self, ent):
        valus = self.__get__(ent)
        if not valus:
            return ()
        return tuple(valus)

    def pack(self, valus, codec):
        return a_shape.pack(valus, lambda v: self.packItem(v, codec))

    def unpack(self, valu, codec):
        if valu is None:
            return None
        return a_shape.unpack(valu, lambda v: self.unpackItem(v, codec))

    def packItem(self, valu, codec):
        return valu

    def unpackItem(self, valu, codec):
        return self.normItem(valu)

    def getFirst(self, ent):
        valus = self.__get__(ent)
        if not valus:
            return None
        return valus[0]

    def setFirst(self, ent, valu):
        if valu is None:
            self.__set__(ent, None)
            return

        valus = self.__get__(ent)
        if valus is None:
            self.__set__(ent, [valu])
            return

        valus.insert(0, self.normItem(valu))

    def extend(self, ent, valus):
        '''
        Append items after any items already present.
        '''
        valus = self.norm(valus)
        self.__set__(ent, list(self.__get__(ent) or ()) + list(valus))

class Strs(Plural):

    def normItem(self, valu):
        if not isinstance(valu, str):
            self._raiseBadValu(valu, f'expected a string, not {type(valu).__name__}.')
        return valu

class Tags(Strs):
    '''
    The type tags of an entity. Non-string tags are dropped on decode.
    '''
    def unpack(self, valu, codec):
        if valu is None:
            return None
        return list(codec.normTags(valu))

class Ents(Plural):
    '''
    An ordered relation to other entities.

    Args:
        wire (str): The property name used in JSON documents.
        kind (str): The name of the entity class members must be an instance of.
        allow (tuple): Optional names of the exact entity classes allowed as members.
                       When set, the relation is held in a RestrictedList.
        defkind (str): Optional name of the kind for members without a registered type tag.
    '''
    def __init__(self, wire, doc=None, kind='Entity', allow=None, defkind=None):
        Plural.__init__(self, wire, doc=doc)
        self.kind = kind
        self.allow = allow
        self.defkind = defkind

    def _allowKinds(self):
        return tuple(self._reqKind(k) for k in self.allow)

    def __get__(self, ent, cls=None):
        if ent is None:
            return self

        valus = ent.__dict__.get(self.name)
        if valus is None and self.allow is not None:
            valus = a_restrict.RestrictedList(self._allowKinds())
            ent.__dict__[self.name] = valus

        return valus

    def __set__(self, ent, valu):
        if valu is None:
            if self.allow is not None:
                valu = a_restrict.RestrictedList(self._allowKinds())
            ent.__dict__[self.name] = valu
            return

        ent.__dict__[self.name] = self.norm(valu)

    def norm(self, valu):
        valus = Plural.norm(self, valu)
        if self.allow is not None:
            return a_restrict.RestrictedList(self._allowKinds(), valus)
        return valus

    def normItem(self, valu):
        kind = self._reqKind(self.kind)
        if not isinstance(valu, kind):
            self._raiseBadValu(valu, f'expected {kind.__name__}, not {type(valu).__name__}.')
        return valu

    def unpack(self, valu, codec):
        valus = Plural.unpack(self, valu, codec)
        if self.allow is not None:
            return a_restrict.RestrictedList(self._allowKinds(), valus or ())
        return valus

    def packItem(self, valu, codec):
        return codec.pack(valu)

    def unpackItem(self, valu, codec):
        defv = None
        if self.defkind is not None:
            defv = self._reqKind(self.defkind)
        return codec.unpack(valu, kind=self._reqKind(self.kind), defv=defv)

class Ent(Field):
    '''
    A relation to a single entity.
    '''
    def __init__(self, wire, doc=None, kind='Entity'):
        Field.__init__(self, wire, doc=doc)
        self.kind = kind

    def norm(self, valu):
        kind = self._reqKind(self.kind)
        if not isinstance(valu, kind):
            self._raiseBadValu(valu, f'expected {kind.__name__}, not {type(valu).__name__}.')
        return valu

    def pack(self, valu, codec):
        return codec.pack(valu)

    def unpack(self, valu, codec):
        if valu is None:
            return None
        return codec.unpack(valu, kind=self._reqKind(self.kind))

class LangMap(Field):
    '''
    A language tagged value map.

    The default language value is written under the plain property name
    ( ex. "name" ) and the complete map under the map property name
    ( ex. "nameMap" ) when it holds any other language.
    '''
    def __init__(self, wire, mapwire, doc=None, ents=False):
        Field.__init__(self, wire, doc=doc)
        self.ents = ents
        self.mapwire = mapwire

    def wires(self):
        return (self.wire, self.mapwire)

    def norm(self, valu):
        if not isinstance(valu, (dict, a_langmap.LanguageMap)):
            self._raiseBadValu(valu, f'expected a language map, not {type(valu).__name__}.')

        lmap = a_langmap.LanguageMap()
        for lang, item in valu.items():
            lmap[lang] = self.normItem(item)
        return lmap

    def normItem(self, valu):
        if self.ents:
            kind = self._reqKind('Entity')
            if not isinstance(valu, kind):
                self._raiseBadValu(valu, f'expected Entity, not {type(valu).__name__}.')
            return valu

        if not isinstance(valu, str):
            self._raiseBadValu(valu, f'expected a string, not {type(valu).__name__}.')
        return valu

    def isnull(self, ent):
        return not self.__get__(ent)

    def cmprvalu(self, ent):
        lmap = self.__get__(ent)
        if not lmap:
            return {}
        return dict(lmap.items())

    def getDefault(self, ent):
        lmap = self.__get__(ent)
        if lmap is None:
            return None
        return lmap.getDefault()

    def setDefault(self, ent, valu):
        lmap = self.__get__(ent)

        if valu is None:
            if lmap is not None:
                lmap.popDefault()
            return

        valu = self.normItem(valu)
        if lmap is None:
            lmap = a_langmap.LanguageMap()
            ent.__dict__[self.name] = lmap

        lmap.setDefault(valu)

    def _packItem(self, valu, codec):
        if self.ents:
            return codec.pack(valu)
        return valu

    def _unpackItem(self, valu, codec):
        if self.ents:
            return codec.unpack(valu)
        return self.normItem(valu)

    def packInto(self, ent, info, codec):
        lmap = self.__get__(ent)
        if not lmap:
            return

        deflang = a_langmap.getDefLang()

        defv = lmap.getDefault(lang=deflang)
        if defv is not None:
            info[self.wire] = self._packItem(defv, codec)

        if any(lang != deflang for lang in lmap):
            info[self.mapwire] = {lang: self._packItem(v, codec) for (lang, v) in lmap.items()}

    def unpackFrom(self, ent, item, codec):

        mapv = item.get(self.mapwire)
        valu = item.get(self.wire, a_common.novalu)

        if mapv is None and valu is a_common.novalu:
            return

        lmap = a_langmap.LanguageMap()

        if mapv is not None:
            if not isinstance(mapv, dict):
                self._raiseBadValu(mapv, f'{self.mapwire} must be an object.')

            for lang, mval in mapv.items():
                lmap[lang] = self._unpackItem(mval, codec)

        if valu is not a_common.novalu and valu is not None:
            lmap.setDefault(self._unpackItem(valu, codec))

        ent.__dict__[self.name] = lmap

class First:
    '''
    The singular accessor for a Plural field.

    Reading returns the first element or None. Assigning None clears the
    relation and assigning a value inserts it as the new first element.
    '''
    def __init__(self, plural):
        self.plural = plural

    def __set_name__(self, owner, name):
        self.name = name

    def _field(self, ent):
        return getattr(type(ent), self.plural)

    def __get__(self, ent, cls=None):
        if ent is None:
            return self
        return self._field(ent).getFirst(ent)

    def __set__(self, ent, valu):
        self._field(ent).setFirst(ent, valu)

class DefLang:
    '''
    The singular accessor for a LangMap field which reads and writes the
    value for the default language.
    '''
    def __init__(self, langmap):
        self.langmap = langmap

    def __set_name__(self, owner, name):
        self.name = name

    def _field(self, ent):
        return getattr(type(ent), self.langmap)

    def __get__(self, ent, cls=None):
        if ent is None:
            return self
        return self._field(ent).getDefault(ent)

    def __set__(self, ent, valu):
        self._field(ent).setDefault(ent, valu)
