"""
Errors raised by the wiki.

Page misses are not errors: stores return None for them.
"""


class WikiError(Exception):
    """
    Base class for all wiki errors.
    """


class InvalidName(WikiError, ValueError):
    """
    A page name outside the identifier grammar.
    """


class InvalidPath(InvalidName):
    """
    A request path that does not match /(view|edit|save)/<name>.
    """


class StoreError(WikiError):
    """
    The store could not complete a read or a write.
    """


class RenderFailure(WikiError):
    """
    A template is missing, broken or failed to render.
    """
