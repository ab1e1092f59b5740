'''
A list which only accepts members of a fixed set of entity kinds.
'''
import collections.abc as c_abc

import aspub.exc as a_exc

class RestrictedList(c_abc.MutableSequence):
    '''
    An ordered sequence constrained to a fixed tuple of allowed kinds.

    Args:
        kinds (tuple): The allowed classes. Membership is checked against the
                       exact runtime type of each item, not isinstance().
        valus (iterable): Optional initial items.

    Notes:
        Every insertion path ( append, insert, extend, item assignment )
        validates before mutating, so a rejected item leaves the list unchanged.
    '''
    def __init__(self, kinds, valus=()):
        self.kinds = tuple(kinds)
        self.valus = []
        self.extend(valus)

    def allowed(self, item):
        return type(item) in self.kinds

    def _reqAllowed(self, item):
        if not self.allowed(item):
            names = ', '.join(k.__name__ for k in self.kinds)
            mesg = f'{type(item).__name__} is not allowed here. Allowed kinds: {names}.'
            raise a_exc.BadTypeValu(mesg=mesg, kind=type(item).__name__, allowed=names)

    def insert(self, indx, item):
        self._reqAllowed(item)
        self.valus.insert(indx, item)

    def extend(self, items):
        items = list(items)
        for item in items:
            self._reqAllowed(item)
        self.valus.extend(items)

    def __setitem__(self, indx, item):
        if isinstance(indx, slice):
            item = list(item)
            for valu in item:
                self._reqAllowed(valu)
        else:
            self._reqAllowed(item)
        self.valus[indx] = item

    def __getitem__(self, indx):
        if isinstance(indx, slice):
            return RestrictedList(self.kinds, self.valus[indx])
        return self.valus[indx]

    def __delitem__(self, indx):
        del self.valus[indx]

    def __len__(self):
        return len(self.valus)

    def __eq__(self, othr):
        if isinstance(othr, RestrictedList):
            return self.valus == othr.valus
        if isinstance(othr, (list, tuple)):
            return self.valus == list(othr)
        return NotImplemented

    def __repr__(self):
        names = ', '.join(k.__name__ for k in self.kinds)
        return f'RestrictedList(({names}), {self.valus!r})'
