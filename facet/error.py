__all__ = [
    'FacetException',
    'ArgumentError',
    'OutOfRangeError',
    'InvalidSelectorError',
    'ShapeMismatchError',
    'UnknownKeyError',
    'DuplicateKeyError',
    'GroupArgumentError',
    'SubFramesArgumentError',
]


class FacetException(Exception):
    """Exception that all facet exceptions derive from"""

#------------------------------------------------------------------------
# Argument errors
#------------------------------------------------------------------------

class ArgumentError(FacetException, ValueError):
    """An argument does not make sense for the requested operation."""


class OutOfRangeError(ArgumentError, IndexError):
    """An index falls outside ``[0, axis_size)`` after wraparound."""


class InvalidSelectorError(ArgumentError):
    """
    A selector list mixes incompatible kinds, or a single selector has a
    form that can not be applied to the target axis.
    """


class ShapeMismatchError(InvalidSelectorError):
    """Lengths or schemas of two operands disagree."""


class UnknownKeyError(ArgumentError, KeyError):
    """A column name does not exist in the table."""

    def __str__(self):
        # KeyError quotes its argument
        return str(self.args[0]) if self.args else ''


class DuplicateKeyError(ArgumentError):
    """The same column name appears more than once where it must be unique."""

#------------------------------------------------------------------------
# Engine errors
#------------------------------------------------------------------------

class GroupArgumentError(ArgumentError):
    pass


class SubFramesArgumentError(ArgumentError):
    pass
