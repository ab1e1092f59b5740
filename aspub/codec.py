'''
The polymorphic JSON codec for Activity Streams entities.

Decoding peeks at the top level "type" member with a TagScanner to select
the entity kind before the document is parsed into that kind. Nested
entities are dispatched the same way from their parsed "type" member.
'''
import logging

import aspub.exc as a_exc
import aspub.settings as a_settings
import aspub.entities as a_entities
import aspub.registry as a_registry

import aspub.lib.json as a_json
import aspub.lib.config as a_config
import aspub.lib.logging as a_logging
import aspub.lib.scanner as a_scanner

logger = logging.getLogger(__name__)

# @context and type lead every encoded document
leadfields = ('contexts', 'types')

encodeOptsSchema = {
    'type': 'object',
    'properties': {
        'pretty': {'type': 'boolean'},
        'type_registry': {},
    },
    'additionalProperties': False,
}
reqValidEncodeOpts = a_config.getJsValidator(encodeOptsSchema, use_default=False)

class Codec:
    '''
    Decode and encode entities using a TypeRegistry for dispatch.

    Args:
        registry (aspub.registry.TypeRegistry): The registry to resolve type
            tags with. Defaults to the process wide registry.
    '''
    def __init__(self, registry=None):

        if registry is None:
            registry = a_registry.defreg

        if not isinstance(registry, a_registry.TypeRegistry):
            raise a_exc.BadArg(mesg='Codec requires a TypeRegistry.', valu=type(registry).__name__)

        self.registry = registry

    def decode(self, text, kind=None):
        '''
        Decode a JSON document into an entity.

        Args:
            text (str): The JSON text ( bytes are decoded as utf8 ).
            kind (type): Require the decoded entity to be this kind or a subclass.

        Returns:
            aspub.entities.Entity: The decoded entity.

        Raises:
            aspub.exc.BadJsonText: The text is not valid JSON.
            aspub.exc.BadDataValu: The document is neither an object nor a string.
            aspub.exc.BadTypeValu: The type member or a field value has the wrong shape.
            aspub.exc.TypeMismatch: The document is not of the requested kind.
        '''
        if isinstance(text, (bytes, bytearray)):
            try:
                text = text.decode('utf8')
            except UnicodeDecodeError as e:
                raise a_exc.BadJsonText(mesg=f'Entity documents must be utf8: {e}') from None

        if not isinstance(text, str):
            raise a_exc.BadArg(mesg='decode() requires str or bytes.', valu=type(text).__name__)

        scan = a_scanner.TagScanner(text)

        if scan.isref():
            valu = a_json.loads(text)
            if not isinstance(valu, str):
                raise a_exc.BadDataValu(mesg='Entity documents must be a JSON object or a string.')

            self._reqKind(a_entities.Link, kind)
            return a_entities.Link(valu)

        found = self.resolve(scan.tags(), defv=self._defKind(kind))
        self._reqKind(found, kind)

        item = a_json.loads(text)
        if not isinstance(item, dict):
            raise a_exc.BadDataValu(mesg='Entity documents must be a JSON object or a string.')

        return self._unpackItem(item, found)

    def encode(self, ent, pretty=None):
        '''
        Encode an entity to JSON text.

        Args:
            ent (aspub.entities.Entity): The entity to encode.
            pretty (bool): Indent the output. Defaults to the json:pretty setting.

        Returns:
            str: The JSON text.
        '''
        if pretty is None:
            pretty = a_settings.getDefPretty()

        return a_json.dumps(self.pack(ent), indent=pretty)

    def resolve(self, tags, defv=a_entities.Object):
        '''
        Resolve document type tags to an entity kind, logging any fallback.
        '''
        kind = self.registry.resolve(tags, defv=None)
        if kind is not None:
            return kind

        if tags:
            extra = a_logging.getLogExtra(tags=list(tags), kind=defv.__name__)
            logger.debug('No registered kind for type tags %r, using %s.', list(tags), defv.__name__, extra=extra)

        return defv

    def normTags(self, valu):
        '''
        Normalize a parsed "type" member to a tuple of tags.
        '''
        if isinstance(valu, str):
            return (valu,)

        if isinstance(valu, list):
            return tuple(v for v in valu if isinstance(v, str))

        raise a_exc.BadTypeValu(mesg='The type member must be a string or an array.', valu=repr(valu)[:256])

    def pack(self, ent):
        '''
        Return the JSON compatible structure for an entity.

        Returns:
            dict|str: The document, or the bare href for a Link which has nothing else to say.
        '''
        if not isinstance(ent, a_entities.Entity):
            raise a_exc.BadTypeValu(mesg=f'Expected an Entity, not {type(ent).__name__}.')

        if isinstance(ent, a_entities.Link) and ent.isref():
            return ent.href

        if type(ent) not in self.registry:
            logger.debug('Encoding unregistered entity kind %s.', type(ent).__name__)

        info = {}
        fields = ent.getFields()

        for name in leadfields:
            fields[name].packInto(ent, info, self)

        for name, field in fields.items():
            if name in leadfields:
                continue
            field.packInto(ent, info, self)

        for name, valu in ent.extra.items():
            info.setdefault(name, valu)

        return info

    def unpack(self, valu, kind=None, defv=None):
        '''
        Return an entity from an already parsed JSON value.

        Args:
            valu (dict|str): The parsed document or a bare href.
            kind (type): The expected kind. Documents without a registered
                         type tag decode as this kind when it is concrete.
            defv (type): The kind for documents without a registered type tag
                         ( overrides the kind based fallback ).
        '''
        if isinstance(valu, str):
            self._reqKind(a_entities.Link, kind)
            return a_entities.Link(valu)

        if not isinstance(valu, dict):
            raise a_exc.BadTypeValu(mesg='Entity values must be an object or a string.', valu=repr(valu)[:256])

        if defv is None:
            defv = self._defKind(kind)

        tags = None
        if 'type' in valu:
            tags = self.normTags(valu.get('type'))

        found = self.resolve(tags, defv=defv)
        self._reqKind(found, kind)

        return self._unpackItem(valu, found)

    def _defKind(self, kind):
        if kind is not None and kind.deftypes:
            return kind
        return a_entities.Object

    def _reqKind(self, found, kind):
        if kind is None or issubclass(found, kind):
            return
        mesg = f'Expected a {kind.__name__} document but found {found.__name__}.'
        raise a_exc.TypeMismatch(mesg=mesg, expected=kind.__name__, found=found.__name__)

    def _unpackItem(self, item, kind):

        ent = kind(nocontext=True)

        wires = set()
        for field in kind.getFields().values():
            field.unpackFrom(ent, item, self)
            wires.update(field.wires())

        for name, valu in item.items():
            if name not in wires:
                ent.extra[name] = valu

        return ent

defcodec = Codec()

def decode_entity(text, kind=None, registry=None):
    '''
    Decode a JSON document into an entity.

    Args:
        text (str): The JSON text.
        kind (type): Optional kind the document must decode to.
        registry (aspub.registry.TypeRegistry): Optional registry to dispatch with.

    Returns:
        aspub.entities.Entity: The decoded entity.
    '''
    codec = defcodec
    if registry is not None:
        codec = Codec(registry=registry)
    return codec.decode(text, kind=kind)

def encode_entity(ent, opts=None):
    '''
    Encode an entity to JSON text.

    Args:
        ent (aspub.entities.Entity): The entity to encode.
        opts (dict): Optional encode options.

    Notes:
        Valid options:

            pretty (bool): Indent the output ( default from the json:pretty setting ).
            type_registry (TypeRegistry): The registry to encode against.

    Returns:
        str: The JSON text.
    '''
    if opts is None:
        opts = {}

    reqValidEncodeOpts(opts)

    codec = defcodec

    registry = opts.get('type_registry')
    if registry is not None:
        codec = Codec(registry=registry)

    return codec.encode(ent, pretty=opts.get('pretty'))
