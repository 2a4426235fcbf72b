HTTP_TIMEOUT = 10

SSDP_GROUP = "239.255.255.250"
SSDP_PORT = 1900
SSDP_TARGET = (SSDP_GROUP, SSDP_PORT)
SSDP_TTL = 2
SSDP_MX_MIN = 1
SSDP_MX_MAX = 3
MDNS_GROUP = "224.0.0.251"
BROADCAST_TARGET = ("255.255.255.255", SSDP_PORT)

DISCOVER_TIMEOUT_MS = 5000

ST_AVTRANSPORT = "urn:schemas-upnp-org:service:AVTransport:1"
AVTRANSPORT_PREFIX = "urn:schemas-upnp-org:service:AVTransport:"

SOAP_ENVELOPE_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP_ENCODING_NS = "http://schemas.xmlsoap.org/soap/encoding/"

DEFAULT_NAME = "Unnamed Device"
DEFAULT_MANUFACTURER = "Unknown Manufacturer"
DEFAULT_DEVICE_TYPE = "MediaRenderer"

# Length of a response body kept in error messages.
ERROR_EXCERPT_LENGTH = 200
