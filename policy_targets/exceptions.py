from owid.datautils.common import ExceptionFromDocstring, ExceptionFromDocstringWithKwargs


class UnknownSubtype(ExceptionFromDocstringWithKwargs):
    """Unknown REN21 subtype, expected 'Capacity' or 'investmentCosts'. """


class MissingColumns(ExceptionFromDocstringWithKwargs):
    """Input table is missing required columns. """


class UnexpectedLabels(ExceptionFromDocstringWithKwargs):
    """Input table contains labels that are not known to the conversion. """


class InputNotFound(ExceptionFromDocstring):
    """None of the supported file formats was found for the requested input."""
