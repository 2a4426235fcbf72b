class DLNAError(Exception):
    """
    Base class for all errors raised by this package.
    """

    pass


class TransportSetupError(DLNAError):
    """
    The SSDP socket couldn't be created, bound or joined to the multicast group.
    """

    pass


class MalformedAnnouncement(DLNAError):
    """
    An SSDP datagram couldn't be parsed into headers.
    """

    pass


class DescriptionFetchError(DLNAError):
    """
    The device description couldn't be retrieved.
    """

    pass


class DescriptionParseError(DLNAError):
    """
    The device description wasn't usable XML.
    """

    pass


class UrlNormalizationError(DLNAError):
    """
    A service URL couldn't be resolved against the description location.
    """

    pass


class ControlRequestError(DLNAError):
    """
    A SOAP action failed, either on the wire or with a non-2xx response.
    """

    def __init__(self, message, status=None, body=None, error_code=None, error_description=None):
        super(ControlRequestError, self).__init__(message)
        self.status = status
        self.body = body
        self.error_code = error_code
        self.error_description = error_description
