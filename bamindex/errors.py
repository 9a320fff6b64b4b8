class BAMIndexError(Exception):
    """Base class for every fatal condition raised while indexing a BAM."""


class ConfigError(BAMIndexError):
    pass


class OutputNotWritable(BAMIndexError):
    pass


class InputNotReadable(BAMIndexError):
    pass


class WrongContainerType(BAMIndexError):
    pass


class UnsortedInput(BAMIndexError):
    pass


class BuildFailure(BAMIndexError):
    pass
