import asyncio

import requests
import aiohttp
from requests.compat import urlparse

from . import xmltree
from .util import _getLogger, is_valid_http_url, normalize_url
from .const import (
    HTTP_TIMEOUT,
    AVTRANSPORT_PREFIX,
    DEFAULT_NAME,
    DEFAULT_MANUFACTURER,
    DEFAULT_DEVICE_TYPE,
)
from .errors import DescriptionFetchError, DescriptionParseError, UrlNormalizationError

_log = _getLogger("Device")

_DEFAULT_PORTS = {"http": 80, "https": 443}


class AVTransportService(object):
    def __init__(self, service_type, control_url):
        self.service_type = service_type
        self.control_url = control_url

    def __repr__(self):
        return "<AVTransportService '%s' at '%s'>" % (self.service_type, self.control_url)

    def __eq__(self, other):
        if not isinstance(other, AVTransportService):
            return NotImplemented
        return (self.service_type, self.control_url) == (other.service_type, other.control_url)


class DeviceDescriptor(object):
    """
    A media renderer that can be told to play a URL.

    `location` is the URL of the device description, as given in the SSDP
    'Location' header, and is what identifies a device within a discovery run.
    `address` is the IP the SSDP response came from; it is never taken from
    the description document itself.
    """

    def __init__(
        self,
        location,
        name,
        manufacturer,
        device_type,
        av_transport,
        address=None,
        port=None,
    ):
        self.location = location
        self.name = name
        self.manufacturer = manufacturer
        self.device_type = device_type
        self.av_transport = av_transport
        self.address = address
        self.port = port

    def __repr__(self):
        return "<DeviceDescriptor '%s' at '%s'>" % (self.name, self.location)

    def __eq__(self, other):
        if not isinstance(other, DeviceDescriptor):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash(self.location)

    def to_dict(self):
        return {
            "location": self.location,
            "name": self.name,
            "manufacturer": self.manufacturer,
            "deviceType": self.device_type,
            "avTransport": {
                "serviceType": self.av_transport.service_type,
                "controlURL": self.av_transport.control_url,
            },
            "address": self.address,
            "port": self.port,
        }

    @classmethod
    def from_dict(cls, data):
        """
        Rebuild a descriptor from the output of `to_dict()`. Raises KeyError or
        TypeError if the AVTransport details are missing.
        """
        av_transport = data["avTransport"]
        return cls(
            location=data.get("location"),
            name=data.get("name", DEFAULT_NAME),
            manufacturer=data.get("manufacturer", DEFAULT_MANUFACTURER),
            device_type=data.get("deviceType", DEFAULT_DEVICE_TYPE),
            av_transport=AVTransportService(
                av_transport["serviceType"], av_transport["controlURL"]
            ),
            address=data.get("address"),
            port=data.get("port"),
        )


def parse_device_type(device_type):
    """
    Return the device class from a URN such as
    'urn:schemas-upnp-org:device:MediaRenderer:1'.
    """
    parts = (device_type or "").split(":")
    if len(parts) < 4:
        return DEFAULT_DEVICE_TYPE
    return parts[3]


def location_port(location):
    parsed = urlparse(location)
    return parsed.port or _DEFAULT_PORTS.get(parsed.scheme.lower())


def find_device_node(root):
    """
    Locate the top-level device element of a description, accepting either a
    `<root><device>` document or a bare `<device>` one.
    """
    if root.name == "root":
        return root.find("device")
    if root.name == "device":
        return root
    return None


def find_av_transport(device_node):
    """
    Return the first AVTransport service element of the device, or None.

    The device's own serviceList is searched before any embedded devices, as
    services may be listed in both places (Section 2.3 of uPNP device
    architecture v1.1).
    """
    for name in ("serviceList", "deviceList"):
        service = xmltree.find_service(device_node.find(name), AVTRANSPORT_PREFIX)
        if service is not None:
            return service
    return None


def _text(node, name, default):
    value = node.findtext(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def parse_description(location, data, address=None):
    """
    Build a DeviceDescriptor from the raw description document retrieved from
    `location`. Returns None if the device has no AVTransport service.
    """
    root = xmltree.parse(data)
    device_node = find_device_node(root)
    if device_node is None:
        raise DescriptionParseError("No device element in description at %s" % location)

    service = find_av_transport(device_node)
    if service is None:
        _log.debug("No AVTransport service at %s", location)
        return None

    service_type = service.field("serviceType")
    control_path = service.field("controlURL")
    if not control_path:
        raise UrlNormalizationError("AVTransport service at %s has no controlURL" % location)
    control_url = normalize_url(location, control_path)
    if control_url is None:
        raise UrlNormalizationError(
            "Unable to resolve controlURL %r against %s" % (control_path, location)
        )

    return DeviceDescriptor(
        location=location,
        name=_text(device_node, "friendlyName", DEFAULT_NAME),
        manufacturer=_text(device_node, "manufacturer", DEFAULT_MANUFACTURER),
        device_type=parse_device_type(device_node.findtext("deviceType")),
        av_transport=AVTransportService(service_type, control_url),
        address=address,
        port=location_port(location),
    )


def _check_location(location):
    if not is_valid_http_url(location):
        raise DescriptionFetchError("Invalid location URL: %r" % (location,))


def _check_status(location, status):
    if not 200 <= status < 300:
        raise DescriptionFetchError("HTTP %d fetching %s" % (status, location))


def resolve(location, address=None, timeout=HTTP_TIMEOUT):
    """
    Synchronously retrieve the description at `location` and return a
    DeviceDescriptor, or None if it isn't a media renderer.

    Raises DescriptionFetchError, DescriptionParseError or
    UrlNormalizationError if the device can't be used.
    """
    _check_location(location)
    _log.debug("Fetching device description from %s", location)
    try:
        resp = requests.get(location, timeout=timeout)
    except requests.exceptions.RequestException as exc:
        raise DescriptionFetchError("Error fetching %s: %r" % (location, exc)) from exc
    _check_status(location, resp.status_code)
    return parse_description(location, resp.content, address=address)


async def async_resolve(location, session=None, address=None, timeout=HTTP_TIMEOUT):
    """
    Asynchronously retrieve the description at `location`. See `resolve()`.

    A session is created and closed for the call if one isn't given.
    """
    _check_location(location)
    own_session = session is None
    if own_session:
        session = aiohttp.ClientSession()
    _log.debug("Fetching device description from %s", location)
    try:
        async with session.get(
            location, timeout=aiohttp.ClientTimeout(total=timeout)
        ) as resp:
            _check_status(location, resp.status)
            data = await resp.read()
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        raise DescriptionFetchError("Error fetching %s: %r" % (location, exc)) from exc
    finally:
        if own_session:
            await session.close()
    return parse_description(location, data, address=address)
