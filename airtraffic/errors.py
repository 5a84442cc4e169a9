class ConfigurationError(Exception):
    """
    Raised when the data files cannot be located: no flight data configured,
    an invalid path, or a request for a year with no registered file.
    """


class RepositoryError(OSError):
    """
    Raised when a configured data file cannot be opened or read.
    """


class ClassificationError(ValueError):
    """
    Raised when a value falls outside every range of a bucket table.
    """
