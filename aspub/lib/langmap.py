'''
Language tagged value maps ( nameMap, summaryMap, contentMap ).
'''
import collections.abc as c_abc

import aspub.exc as a_exc

def getDefLang():
    # late import to avoid a cycle with aspub.settings
    import aspub.settings as a_settings
    return a_settings.getDefLang()

class LanguageMap(c_abc.MutableMapping):
    '''
    An ordered mapping of BCP47 language tag to value.

    Args:
        valus (dict): Optional initial language: value items.
        empty: The value returned by getDefault() when there is no
               value for the requested language.

    Notes:
        The "default" value is the value for the process wide default
        language ( see aspub.settings ) unless a lang is specified.
    '''
    def __init__(self, valus=None, empty=None):
        self.empty = empty
        self.valus = {}
        if valus is not None:
            self.update(valus)

    def getDefault(self, lang=None):
        '''
        Return the value for the default language, or the empty value.
        '''
        if lang is None:
            lang = getDefLang()
        return self.valus.get(lang, self.empty)

    def setDefault(self, valu, lang=None):
        '''
        Set the value for the default language without touching other languages.
        '''
        if lang is None:
            lang = getDefLang()
        self[lang] = valu

    def popDefault(self, lang=None):
        if lang is None:
            lang = getDefLang()
        return self.valus.pop(lang, self.empty)

    def copy(self):
        return LanguageMap(self.valus, empty=self.empty)

    def __setitem__(self, lang, valu):
        if not isinstance(lang, str):
            raise a_exc.BadTypeValu(mesg=f'Language tags must be strings, not {type(lang).__name__}.', valu=lang)
        self.valus[lang] = valu

    def __getitem__(self, lang):
        return self.valus[lang]

    def __delitem__(self, lang):
        del self.valus[lang]

    def __iter__(self):
        return iter(self.valus)

    def __len__(self):
        return len(self.valus)

    def __eq__(self, othr):
        if isinstance(othr, LanguageMap):
            return self.valus == othr.valus
        if isinstance(othr, dict):
            return self.valus == othr
        return NotImplemented

    def __repr__(self):
        return f'LanguageMap({self.valus!r})'
