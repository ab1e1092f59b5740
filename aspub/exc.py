'''
Exceptions used by aspub, all inheriting from PubErr.

Every exception carries its details as keyword errinfo ( mesg plus any
values which help explain the failure ) and renders them in its message.
'''

class PubErr(Exception):

    def __init__(self, *args, **info):
        self.errinfo = info
        self.errname = self.__class__.__name__
        Exception.__init__(self, self._getExcMsg())

    def _getExcMsg(self):
        displ = ' '.join(f'{name}={valu!r}' for (name, valu) in sorted(self.errinfo.items()))
        return f'{self.errname}: {displ}'

    def _setExcMesg(self):
        self.args = (self._getExcMsg(),)

    def __setstate__(self, state):
        # unpickling rebuilds from the message, errinfo arrives with the state
        super().__setstate__(state)
        self._setExcMesg()

    def get(self, name, defv=None):
        '''
        Return a value from the errinfo dict.

        Example:

            try:
                decode_entity(text, kind=Link)
            except TypeMismatch as e:
                found = e.get('found')
        '''
        return self.errinfo.get(name, defv)

    def set(self, name, valu):
        self.errinfo[name] = valu
        self._setExcMesg()

    def setdefault(self, name, valu):
        if name in self.errinfo:
            return
        self.set(name, valu)

    def update(self, items):
        self.errinfo.update(items)
        self._setExcMesg()

class BadArg(PubErr):
    '''An API was called with an argument it can not use.'''

class BadConfValu(PubErr):
    '''A configuration value ( name, valu ) does not match its schema.'''

class BadDataValu(PubErr):
    '''A document is neither a JSON object nor a string.'''

class BadJsonText(PubErr):
    '''The text is not valid JSON.'''

class BadSyntax(PubErr):
    '''The scanner found something other than what it expected at offs.'''

class BadTime(PubErr):
    '''A date-time or duration value can not be parsed.'''

class BadTypeDef(PubErr):
    '''An entity kind can not be constructed or registered.'''

class BadTypeValu(PubErr):
    '''A value has the wrong shape or kind for the field it is assigned to.'''

class MustBeJsonSafe(PubErr):
    '''A value has no JSON representation.'''

class NoSuchImpl(PubErr):
    '''An operation needs an implementation which was not provided ( ex. a Fetcher ).'''

class NoSuchType(PubErr):
    '''A field names an entity kind which does not exist.'''

    @classmethod
    def init(cls, name, mesg=None):
        if mesg is None:
            mesg = f'No entity kind named {name}.'
        return NoSuchType(mesg=mesg, name=name)

class SchemaViolation(PubErr):
    '''A value does not match a JSON Schema.'''

class TypeMismatch(PubErr):
    '''A document decoded to a kind other than the one requested.'''
