'''
The registry of entity kinds used to dispatch decoding by type tag.
'''
import logging

import aspub.exc as a_exc
import aspub.entities as a_entities

logger = logging.getLogger(__name__)

class TypeRegistry:
    '''
    An immutable mapping of entity kind to the type tags which identify it.

    Args:
        kinds (tuple): The ordered entity classes to register.

    Notes:
        When more than one registered kind carries a tag from a document,
        the most specific kind ( the one deepest in the class hierarchy )
        wins. Among equally specific kinds the first registered wins.
    '''
    def __init__(self, kinds):

        self._kinds = []
        self._tags = {}
        self._depth = {}

        for kind in kinds:
            self._addKind(kind)

        self._kinds = tuple(self._kinds)

    def _addKind(self, kind):

        if not isinstance(kind, type) or not issubclass(kind, a_entities.Entity):
            raise a_exc.BadTypeDef(mesg=f'{kind!r} is not an Entity class.', name=repr(kind))

        name = kind.__name__

        if kind in self._tags:
            raise a_exc.BadTypeDef(mesg=f'Duplicate registration for {name}.', name=name)

        try:
            inst = kind()
        except a_exc.BadTypeDef:
            raise
        except Exception as e:
            mesg = f'{name} does not have a usable zero argument constructor: {e}'
            raise a_exc.BadTypeDef(mesg=mesg, name=name) from e

        tags = frozenset(inst.deftypes)
        if not tags:
            raise a_exc.BadTypeDef(mesg=f'{name} has no default type tags.', name=name)

        for tag in tags:
            if not isinstance(tag, str) or not tag:
                raise a_exc.BadTypeDef(mesg=f'{name} has an invalid type tag: {tag!r}', name=name)

        self._kinds.append(kind)
        self._tags[kind] = tags
        self._depth[kind] = len(kind.__mro__)

        logger.debug('Registered entity kind %s: %s', name, ', '.join(sorted(tags)))

    @property
    def kinds(self):
        return self._kinds

    def tags(self, kind):
        '''
        Return the frozenset of default type tags for a registered kind.
        '''
        tags = self._tags.get(kind)
        if tags is None:
            raise a_exc.NoSuchType.init(getattr(kind, '__name__', repr(kind)))
        return tags

    def items(self):
        return [(kind, self._tags[kind]) for kind in self._kinds]

    def get(self, tag):
        '''
        Return the kinds which carry a single tag, in registration order.
        '''
        return [kind for kind in self._kinds if tag in self._tags[kind]]

    def resolve(self, tags, defv=a_entities.Object):
        '''
        Resolve a set of document type tags to an entity kind.

        Args:
            tags (iterable): The type tags from a document ( may be None ).
            defv: The value returned when no registered kind matches.

        Returns:
            type: The matching entity class, or defv if none matches.
        '''
        if not tags:
            return defv

        tags = set(tags)

        best = None
        for kind in self._kinds:

            if not tags & self._tags[kind]:
                continue

            if best is None or self._depth[kind] > self._depth[best]:
                best = kind

        if best is None:
            return defv

        return best

    def __contains__(self, kind):
        return kind in self._tags

    def __len__(self):
        return len(self._kinds)

    def __repr__(self):
        names = ', '.join(k.__name__ for k in self._kinds)
        return f'TypeRegistry({names})'

defreg = TypeRegistry(a_entities.kinds)
