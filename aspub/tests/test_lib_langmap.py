import aspub.exc as a_exc
import aspub.settings as a_settings

import aspub.lib.langmap as a_langmap

import aspub.tests.utils as a_t_utils

class LangMapTest(a_t_utils.PubTest):

    def test_langmap_default(self):

        lmap = a_langmap.LanguageMap({'en': 'hello', 'fr': 'bonjour'})
        self.eq(lmap.getDefault(), 'hello')
        self.eq(lmap.getDefault(lang='fr'), 'bonjour')
        self.none(lmap.getDefault(lang='de'))

        lmap.setDefault('hi')
        self.eq(lmap, {'en': 'hi', 'fr': 'bonjour'})

        # the default follows the configured default language
        a_settings.setDefLang('fr')
        self.eq(lmap.getDefault(), 'bonjour')

        lmap.setDefault('salut')
        self.eq(lmap, {'en': 'hi', 'fr': 'salut'})

        self.eq(lmap.popDefault(), 'salut')
        self.eq(lmap, {'en': 'hi'})
        self.none(lmap.popDefault())

    def test_langmap_empty(self):
        lmap = a_langmap.LanguageMap(empty='')
        self.eq(lmap.getDefault(), '')
        self.len(0, lmap)

        lmap['en'] = 'hehe'
        self.eq(lmap.getDefault(), 'hehe')

    def test_langmap_mapping(self):

        lmap = a_langmap.LanguageMap()
        lmap['de'] = 'hallo'
        lmap['en'] = 'hello'

        # insertion order is kept
        self.eq(list(lmap), ['de', 'en'])
        self.eq(list(lmap.items()), [('de', 'hallo'), ('en', 'hello')])
        self.isin('de', lmap)
        self.eq(lmap['de'], 'hallo')

        del lmap['de']
        self.notin('de', lmap)

        with self.raises(KeyError):
            lmap['de']

        with self.raises(a_exc.BadTypeValu):
            lmap[10] = 'ten'

        copy = lmap.copy()
        copy['fr'] = 'bonjour'
        self.ne(copy, lmap)
        self.eq(lmap, a_langmap.LanguageMap({'en': 'hello'}))
        self.eq(repr(lmap), "LanguageMap({'en': 'hello'})")
