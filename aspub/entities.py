'''
The Activity Streams entity model.

Every entity kind declares its properties as aspub.lib.types fields. Plural
relations are paired with a singular accessor ( ex. attachments / attachment )
which reads the first element and writes a new first element.
'''
import logging
import threading

import aspub.exc as a_exc
import aspub.settings as a_settings

import aspub.lib.const as a_const
import aspub.lib.fetch as a_fetch
import aspub.lib.types as a_types

logger = logging.getLogger(__name__)

accessors = (a_types.Field, a_types.First, a_types.DefLang)

class Entity:
    '''
    The base class for all Activity Streams entities.

    Args:
        nocontext (bool): Do not seed the default context.
        additional_contexts (list): Contexts appended after the primary or default context.
        additional_types (list): Type tags appended after the default type tags.
        **props: Initial values for any field or singular accessor.

    Notes:
        Entity itself is abstract. Concrete kinds provide a non-empty
        deftypes tuple which seeds the types relation and drives decode
        dispatch.
    '''
    deftypes = ()

    # populated for each class from the fields declared on it and its bases
    fields = {}

    id = a_types.Str('id')

    contexts = a_types.Ents('@context')
    context = a_types.First('contexts')

    types = a_types.Tags('type')
    type = a_types.First('types')

    media_type = a_types.Str('mediaType', defv=a_const.DEFAULT_MEDIA_TYPE)

    names = a_types.LangMap('name', 'nameMap')
    name = a_types.DefLang('names')

    previews = a_types.Ents('preview')
    preview = a_types.First('previews')

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.fields = _getFields(cls)

    def __init__(self, nocontext=False, additional_contexts=None, additional_types=None, **props):

        if not self.deftypes:
            mesg = f'{self.__class__.__name__} is abstract and may not be constructed.'
            raise a_exc.BadTypeDef(mesg=mesg, name=self.__class__.__name__)

        self.extra = {}
        self.types = list(self.deftypes)
        self.media_type = a_const.DEFAULT_MEDIA_TYPE

        cls = self.__class__

        # plural fields are set before singular accessors so that a
        # singular value always lands at index 0.
        singles = []
        for name, valu in props.items():

            attr = getattr(cls, name, None)
            if name.startswith('_') or not isinstance(attr, accessors):
                mesg = f'{cls.__name__} has no property named {name}.'
                raise a_exc.BadArg(mesg=mesg, name=name)

            if isinstance(attr, a_types.Field):
                setattr(self, name, valu)
                continue

            singles.append((name, valu))

        for name, valu in singles:
            setattr(self, name, valu)

        if not nocontext and not self.contexts:
            defctx = a_settings.getDefContext()
            if defctx is not None:
                self.contexts = [defctx]

        if additional_contexts is not None:
            cls.contexts.extend(self, additional_contexts)

        if additional_types is not None:
            cls.types.extend(self, additional_types)

    @classmethod
    def getFields(cls):
        return cls.fields

    def _cmprvalu(self):
        return tuple(field.cmprvalu(self) for field in self.fields.values())

    def __eq__(self, othr):
        if not isinstance(othr, Entity):
            return NotImplemented

        if type(self) is not type(othr):
            return False

        if self.extra != othr.extra:
            return False

        return self._cmprvalu() == othr._cmprvalu()

    def __repr__(self):
        return f'{self.__class__.__name__}(id={self.id!r}, types={self.types!r})'

def _getFields(cls):
    fields = {}
    for base in reversed(cls.__mro__):
        for name, valu in vars(base).items():
            if isinstance(valu, a_types.Field):
                fields[name] = valu
    return fields

Entity.fields = _getFields(Entity)

class Object(Entity):
    '''
    The generic Activity Streams Object and the fallback kind for decode.
    '''
    deftypes = ('Object',)

    attachments = a_types.Ents('attachment')
    attachment = a_types.First('attachments')

    attributed_to = a_types.Ents('attributedTo')
    attribution = a_types.First('attributed_to')

    audiences = a_types.Ents('audience')
    audience = a_types.First('audiences')

    to = a_types.Ents('to')
    at = a_types.First('to')

    bto = a_types.Ents('bto')
    cc = a_types.Ents('cc')
    bcc = a_types.Ents('bcc')

    generators = a_types.Ents('generator')
    generator = a_types.First('generators')

    in_reply_to = a_types.Ents('inReplyTo')

    icons = a_types.Ents('icon', allow=('Link', 'Image'), defkind='Image')
    icon = a_types.First('icons')

    images = a_types.Ents('image', allow=('Link', 'Image'), defkind='Image')
    image = a_types.First('images')

    summaries = a_types.LangMap('summary', 'summaryMap')
    summary = a_types.DefLang('summaries')

    contents = a_types.LangMap('content', 'contentMap', ents=True)
    content = a_types.DefLang('contents')

    urls = a_types.Ents('url', kind='Link')
    url = a_types.First('urls')

    replies = a_types.Ent('replies', kind='Collection')

    published = a_types.Time('published')
    start_time = a_types.Time('startTime')
    end_time = a_types.Time('endTime')
    updated = a_types.Time('updated')

    duration = a_types.Duration('duration')

    locations = a_types.Ents('location')
    location = a_types.First('locations')

    tags = a_types.Ents('tag')
    tag = a_types.First('tags')

class Image(Object):
    deftypes = ('Image',)

class Link(Entity):
    '''
    A reference to a resource by URL.

    Args:
        href (str): The link target.
        nocontext (bool): Links do not get the default context unless asked.

    Notes:
        A Link with nothing but an href is written as the bare href string
        and a bare string is read back as a Link.
    '''
    deftypes = ('Link',)

    href = a_types.Str('href')

    rels = a_types.Strs('rel')
    rel = a_types.First('rels')

    href_lang = a_types.Str('hreflang')

    height = a_types.Num('height', minv=0)
    width = a_types.Num('width', minv=0)

    def __init__(self, href='', nocontext=True, **props):
        self._objlock = threading.Lock()
        self._object = None
        Entity.__init__(self, nocontext=nocontext, href=href, **props)

    def __getstate__(self):
        # the resolved target is a cache and is fetched again by a copy
        state = self.__dict__.copy()
        state.pop('_objlock', None)
        state['_object'] = None
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._objlock = threading.Lock()

    def isref(self):
        '''
        Return True if the Link may be written as its bare href string.
        '''
        if type(self) is not Link or not isinstance(self.href, str):
            return False

        if self.extra or list(self.types or ()) != list(self.deftypes):
            return False

        for name, field in self.fields.items():
            if name in ('href', 'types'):
                continue
            if not field.isnull(self):
                return False

        return True

    def getObject(self, fetcher=None):
        '''
        Return the Object this Link references, fetching it at most once.

        Args:
            fetcher (aspub.lib.fetch.Fetcher): The fetcher to use on first access.
                                               Defaults to the process wide fetcher.

        Returns:
            Object: The resolved target.

        Raises:
            aspub.exc.NoSuchImpl: No Fetcher implementation is installed.
        '''
        if self._object is not None:
            return self._object

        with self._objlock:

            if self._object is None:

                if fetcher is None:
                    fetcher = a_fetch.getFetcher()

                logger.debug('Fetching link target: %s', self.href)
                self._object = fetcher.fetchObject(self.href)

            return self._object

    def __repr__(self):
        return f'{self.__class__.__name__}(href={self.href!r})'

class Mention(Link):
    deftypes = ('Mention',)

class Activity(Object):
    '''
    An action performed by one or more actors.

    Notes:
        The actors given at construction are appended to attributed_to.
        This happens only once. Later changes to actors are not mirrored
        and decoded documents are taken as they are.
    '''
    deftypes = ('Activity',)

    actors = a_types.Ents('actor')
    actor = a_types.First('actors')

    objects = a_types.Ents('object')
    object = a_types.First('objects')

    targets = a_types.Ents('target')
    target = a_types.First('targets')

    results = a_types.Ents('result')
    result = a_types.First('results')

    origins = a_types.Ents('origin')
    origin = a_types.First('origins')

    instruments = a_types.Ents('instrument')
    instrument = a_types.First('instruments')

    def __init__(self, nocontext=False, **props):
        Object.__init__(self, nocontext=nocontext, **props)

        if props.get('actors') is None and props.get('actor') is None:
            return

        attrs = list(self.attributed_to or ())
        attrs.extend(self.actors or ())
        self.attributed_to = attrs

class Collection(Object):
    deftypes = ('Collection',)

    items = a_types.Ents('items')
    item = a_types.First('items')

    total_items = a_types.Num('totalItems', minv=0, ints=True)

    first = a_types.Ent('first')
    last = a_types.Ent('last')
    current = a_types.Ent('current')

class OrderedCollection(Collection):
    deftypes = ('OrderedCollection',)

    items = a_types.Ents('orderedItems')

# the registration list used to build the default TypeRegistry
kinds = (
    Object,
    Image,
    Link,
    Mention,
    Activity,
    Collection,
    OrderedCollection,
)
