'''
The interface used by Link to resolve its target Object.

aspub does not own a transport. Callers that need to resolve links provide a
Fetcher subclass which implements fetchObject().
'''
import logging

import aspub.exc as a_exc

logger = logging.getLogger(__name__)

class Fetcher:
    '''
    Resolve a Link href to the Object it references.

    The base implementation always raises NoSuchImpl.
    '''
    def fetchObject(self, href):
        '''
        Fetch and decode the Object at href.

        Args:
            href (str): The link target.

        Returns:
            aspub.entities.Object: The referenced Object.
        '''
        raise a_exc.NoSuchImpl(mesg='Link resolution requires a Fetcher implementation.', href=href)

deffetch = Fetcher()
_fetcher = deffetch

def getFetcher():
    return _fetcher

def setFetcher(fetcher):
    '''
    Set the process wide Fetcher used when Link.getObject() is not given one.

    Args:
        fetcher (Fetcher): The fetcher, or None to restore the default stub.
    '''
    global _fetcher

    if fetcher is None:
        fetcher = deffetch

    if not isinstance(fetcher, Fetcher):
        raise a_exc.BadArg(mesg='setFetcher() requires a Fetcher instance.', valu=type(fetcher).__name__)

    _fetcher = fetcher
    logger.debug('Link fetcher set to %s', type(fetcher).__name__)
