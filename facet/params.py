from contextlib import contextmanager

defaults = {
    'head'              : 5,
    'subframes_limit'   : 16,
    'count_unification' : True,
}

class params(object):
    """
    Container for parameters

    Usage:

    >>> params(head=4)
    params(head=4, subframes_limit=16, count_unification=True)
    >>> params(head=4).head
    4

    """
    __slots__ = ['_internal']

    def __init__(self, **kw):
        unknown = set(kw) - set(defaults)
        if unknown:
            raise KeyError('Unknown parameters: %s' % sorted(unknown))
        object.__setattr__(self, '_internal', dict(defaults, **kw))

    def get(self, key, default=None):
        return self._internal.get(key, default)

    def __setattr__(self, key, value):
        if key not in self._internal:
            raise KeyError('Unknown parameter: %s' % key)
        self._internal[key] = value

    def __getattr__(self, key):
        if key == '_internal':
            raise AttributeError(key)
        try:
            return self._internal[key]
        except KeyError:
            raise AttributeError(key)

    def __getitem__(self, key):
        return self._internal[key]

    def __contains__(self, key):
        return key in self._internal

    def __len__(self):
        return len(self._internal)

    def __iter__(self):
        return iter(self._internal)

    def items(self):
        return self._internal.items()

    def __repr__(self):
        return 'params({keys})'.format(
            keys=', '.join('%s=%s' % (k, v) for k, v in self._internal.items())
        )


options = params()


@contextmanager
def set_options(**kw):
    """ Temporarily change library options

    >>> with set_options(head=2):
    ...     options.head
    2
    >>> options.head
    5
    """
    old = dict((k, options[k]) for k in kw)
    for k, v in kw.items():
        setattr(options, k, v)
    try:
        yield options
    finally:
        for k, v in old.items():
            setattr(options, k, v)
