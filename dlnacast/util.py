import re
import logging
from xml.sax.saxutils import escape

from requests.compat import urljoin, urlparse, urlunparse


def _getLogger(name):
    """
    Retrieve a logger instance. Checks if a handler is defined so we avoid the
    'No handlers could be found' message.
    """
    logger = logging.getLogger(name)
    # if not logging.root.handlers:
    #     logger.disabled = 1
    return logger


_XML_ENTITIES = {"'": "&apos;", '"': "&quot;"}


def escape_xml(value):
    """
    Escape `& < > ' "` so `value` can be embedded in element content.
    """
    return escape(str(value), _XML_ENTITIES)


def _parse_url(url):
    """
    Parse `url`, returning None if it is malformed (bad port included).
    """
    if not isinstance(url, str):
        return None
    try:
        parsed = urlparse(url.strip())
        parsed.port
    except ValueError:
        return None
    if not parsed.scheme or not parsed.hostname:
        return None
    return parsed


def is_valid_http_url(url):
    parsed = _parse_url(url)
    return parsed is not None and parsed.scheme.lower() in ("http", "https")


def normalize_url(base_location, path):
    """
    Resolve `path` against the origin of `base_location` and collapse runs of
    '/' in the resulting path. UPnP control URLs are relative to the origin,
    not to the description document's directory.

    Returns None if either input can't be used.

    >>> normalize_url("http://192.168.1.5:80/desc.xml", "upnp//control//AVTransport")
    'http://192.168.1.5:80/upnp/control/AVTransport'
    """
    base = _parse_url(base_location)
    if base is None or not isinstance(path, str):
        return None
    origin = "%s://%s/" % (base.scheme, base.netloc.rsplit("@", 1)[-1])
    resolved = _parse_url(urljoin(origin, path.strip()))
    if resolved is None:
        return None
    return urlunparse(resolved._replace(path=re.sub(r"/+", "/", resolved.path)))
