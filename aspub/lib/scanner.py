'''
A forward-only scanner which finds the "type" tag of a JSON document.

The scanner walks the document text with its own offset, so the caller can
still parse the complete text once the concrete kind is known.
'''
import logging

import aspub.exc as a_exc

import aspub.lib.json as a_json

logger = logging.getLogger(__name__)

whites = set(' \t\n\r')
scalterm = set(',:}] \t\n\r')

class TagScanner:
    '''
    Scan a JSON document for its top level "type" member.

    Args:
        text (str): The JSON document text.
        offs (int): The offset to begin scanning at.

    Example:

        scan = TagScanner('{"attachment": {"type": "Note"}, "type": "Link"}')
        tags = scan.tags()  # ('Link',)
    '''
    def __init__(self, text, offs=0):
        self.text = text
        self.offs = offs
        self.size = len(text)

    def more(self):
        return self.offs < self.size

    def nextchar(self):
        if self.offs >= self.size:
            return None
        return self.text[self.offs]

    def nextstr(self, text):
        return self.text.startswith(text, self.offs)

    def nextmust(self, text):
        if not self.nextstr(text):
            self._raiseSyntaxExpects(text)
        self.offs += len(text)

    def ignore(self, charset):
        while self.more() and self.text[self.offs] in charset:
            self.offs += 1

    def _raiseSyntaxError(self, mesg, **kwargs):
        at = self.text[self.offs:self.offs + 12]
        raise a_exc.BadSyntax(mesg=mesg, at=at, offs=self.offs, **kwargs)

    def _raiseSyntaxExpects(self, text):
        self._raiseSyntaxError(f'expected: {text}')

    def isref(self):
        '''
        Return True if the top level value is a bare string.
        '''
        self.ignore(whites)
        return self.nextstr('"')

    def tags(self):
        '''
        Return a tuple of the top level type tags or None if there are none.

        Notes:
            The whole object is scanned. When "type" appears more than once the
            last one wins, as it does when the document is parsed.

        Returns:
            tuple: The string type tags, or None if the document does not declare
            a type ( including when the text ends before one is found ).

        Raises:
            aspub.exc.BadDataValu: The top level value is not an object.
            aspub.exc.BadTypeValu: The type value is neither a string nor an array.
        '''
        self.ignore(whites)
        if not self.nextstr('{'):
            mesg = 'Entity documents must be a JSON object or a string.'
            raise a_exc.BadDataValu(mesg=mesg, at=self.text[self.offs:self.offs + 12])

        self.offs += 1

        tags = None
        try:
            while True:

                self.ignore(whites)

                if not self.more() or self.nextstr('}'):
                    return tags

                if self.nextstr(','):
                    self.offs += 1
                    continue

                name = self.string()

                self.ignore(whites)
                self.nextmust(':')
                self.ignore(whites)

                if name == 'type':
                    tags = self.tagvalu()
                    continue

                self.skipvalu()

        except a_exc.BadSyntax as e:
            logger.debug('Ran out of document while scanning for type: %s', e.get('mesg'))
            return tags

    def tagvalu(self):
        '''
        Consume the value of a "type" member.
        '''
        if self.nextstr('"'):
            return (self.string(),)

        if not self.nextstr('['):
            mesg = 'The type property must be a string or an array of strings.'
            raise a_exc.BadTypeValu(mesg=mesg, at=self.text[self.offs:self.offs + 12])

        self.offs += 1

        tags = []
        while True:

            self.ignore(whites)

            if not self.more():
                self._raiseSyntaxExpects(']')

            if self.nextstr(']'):
                self.offs += 1
                return tuple(tags)

            if self.nextstr(','):
                self.offs += 1
                continue

            # non-string elements are skipped rather than rejected
            if self.nextstr('"'):
                tags.append(self.string())
                continue

            self.skipvalu()

    def string(self):
        '''
        Consume a JSON string and return its decoded value.
        '''
        if not self.nextstr('"'):
            self._raiseSyntaxExpects('"')

        strt = self.offs
        offs = self.offs + 1

        escaped = False
        while offs < self.size:

            char = self.text[offs]

            if char == '\\':
                escaped = True
                offs += 2
                continue

            if char == '"':
                self.offs = offs + 1
                if not escaped:
                    return self.text[strt + 1:offs]
                return a_json.loads(self.text[strt:offs + 1])

            offs += 1

        self.offs = self.size
        self._raiseSyntaxError('unterminated string')

    def skipvalu(self):
        '''
        Consume a complete JSON value, including any nested objects or arrays.
        '''
        if self.nextstr('"'):
            self.string()
            return

        char = self.nextchar()
        if char is None:
            self._raiseSyntaxError('expected a value')

        if char not in '{[':
            strt = self.offs
            while self.more() and self.text[self.offs] not in scalterm:
                self.offs += 1

            if self.offs == strt:
                self._raiseSyntaxError('expected a value')
            return

        depth = 0
        while self.more():

            char = self.text[self.offs]
            if char == '"':
                self.string()
                continue

            if char in '{[':
                depth += 1

            elif char in '}]':
                depth -= 1

            self.offs += 1

            if depth == 0:
                return

        self._raiseSyntaxError('unterminated object or array')
