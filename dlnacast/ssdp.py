import socket
import random
import asyncio
import threading
from collections import OrderedDict

import aiohttp
import ifaddr

from .upnp import async_resolve
from .util import _getLogger
from .errors import DLNAError, MalformedAnnouncement, TransportSetupError
from .const import (
    HTTP_TIMEOUT,
    SSDP_GROUP,
    SSDP_PORT,
    SSDP_TARGET,
    SSDP_TTL,
    SSDP_MX_MIN,
    SSDP_MX_MAX,
    MDNS_GROUP,
    BROADCAST_TARGET,
    DISCOVER_TIMEOUT_MS,
    ST_AVTRANSPORT,
)

_log = _getLogger(__name__)


class Announcement(object):
    """
    The headers of a single SSDP response, keyed by lower-cased name.
    """

    def __init__(self, address, headers):
        self.address = address
        self.headers = headers

    def __repr__(self):
        return "<Announcement from %s: %r>" % (self.address, self.location)

    def get(self, name, default=None):
        return self.headers.get(name.lower(), default)

    @property
    def location(self):
        return self.get("location")

    @classmethod
    def from_datagram(cls, data, address):
        """
        Parse a datagram by splitting each line on its first colon. Lines with
        no colon, or an empty name or value, are skipped.
        """
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedAnnouncement("Invalid unicode in datagram from %s" % (address,)) from exc

        headers = {}
        for line in text.splitlines():
            key, sep, value = line.partition(":")
            if not sep:
                continue
            key = key.strip().lower()
            value = value.strip()
            if key and value:
                headers[key] = value
        if not headers:
            raise MalformedAnnouncement("No headers in datagram from %s" % (address,))
        return cls(address, headers)


def ssdp_request(ssdp_st=ST_AVTRANSPORT, ssdp_mx=None):
    """Return request bytes for given st and mx. `mx` is random when not given."""
    if ssdp_mx is None:
        ssdp_mx = random.randint(SSDP_MX_MIN, SSDP_MX_MAX)
    return "\r\n".join(
        [
            "M-SEARCH * HTTP/1.1",
            "HOST: {}:{}".format(*SSDP_TARGET),
            'MAN: "ssdp:discover"',
            "MX: {:d}".format(ssdp_mx),
            "ST: {}".format(ssdp_st),
            "",
            "",
        ]
    ).encode("utf-8")


def get_addresses_ipv4():
    # Get all adapters on current machine
    adapters = ifaddr.get_adapters()
    # Get the ip from the found adapters
    # Ignore localhost und IPv6 addresses
    return sorted(
        set(
            addr.ip
            for iface in adapters
            for addr in iface.ips
            if addr.is_IPv4 and not addr.ip.startswith("127.")
        )
    )


def _join_group(sock, group, interface):
    mreq = socket.inet_aton(group) + socket.inet_aton(interface)
    sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, mreq)


class _Scan(asyncio.DatagramProtocol):
    """
    State of a single discovery run: receives SSDP responses and resolves each
    new location in its own task.
    """

    def __init__(self, session, http_timeout=HTTP_TIMEOUT):
        self.devices = OrderedDict()
        self.transport = None
        self._session = session
        self._http_timeout = http_timeout
        self._pending = set()
        self._tasks = set()
        self._lock = asyncio.Lock()
        self._loop = asyncio.get_running_loop()
        self._stopped = asyncio.Event()
        self._closing = False

    def connection_made(self, transport):
        self.transport = transport

    def datagram_received(self, data, addr):
        if self._closing:
            return
        try:
            announcement = Announcement.from_datagram(data, addr[0])
        except MalformedAnnouncement as exc:
            _log.debug("Ignoring datagram: %s", exc)
            return

        location = announcement.location
        if not location or location in self.devices or location in self._pending:
            return

        _log.debug("Resolving %s", location)
        self._pending.add(location)
        task = asyncio.ensure_future(self._resolve(location, announcement.address))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def error_received(self, exc):
        _log.warning("SSDP socket error: %s", exc)

    async def _resolve(self, location, address):
        try:
            device = await async_resolve(
                location, session=self._session, address=address, timeout=self._http_timeout
            )
        except DLNAError as exc:
            _log.warning("Skipping %s: %s", location, exc)
            return
        except Exception:
            _log.exception("Unexpected error resolving %s", location)
            return
        finally:
            self._pending.discard(location)

        if device is None:
            return
        async with self._lock:
            if location not in self.devices:
                self.devices[location] = device
                _log.info("Found %s (%s)", device.name, address)

    async def wait(self, timeout):
        try:
            await asyncio.wait_for(self._stopped.wait(), max(timeout, 0))
        except asyncio.TimeoutError:
            _log.debug("Discovery timeout reached")

    def stop(self):
        """
        End the scan early. Safe to call from any thread.
        """
        try:
            self._loop.call_soon_threadsafe(self._stopped.set)
        except RuntimeError as exc:
            # The loop has already closed, so the scan is over.
            _log.debug("Scan already finished: %s", exc)

    async def release(self):
        self._closing = True
        if self.transport is not None:
            self.transport.close()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        await self._session.close()

    def results(self):
        return list(self.devices.values())


class SSDPDiscoverer(object):
    """
    Finds media renderers using SSDP.

    Every call to `discover()` opens its own socket and starts from an empty
    result set; the socket is released when the call returns, whichever way it
    ends.

    >>> for device in SSDPDiscoverer().discover(3000):
    ...     print(device.name, device.av_transport.control_url)
    """

    def __init__(
        self,
        bind_addr="",
        bind_port=SSDP_PORT,
        search_target=ST_AVTRANSPORT,
        extra_groups=(MDNS_GROUP,),
        broadcast=True,
        http_timeout=HTTP_TIMEOUT,
    ):
        self.bind_addr = bind_addr
        self.bind_port = bind_port
        self.search_target = search_target
        self.extra_groups = tuple(extra_groups)
        self.broadcast = broadcast
        self.http_timeout = http_timeout
        self._scans = set()
        self._scans_lock = threading.Lock()

    def _create_socket(self):
        """
        Return a bound, non-blocking UDP socket which has joined the SSDP group.
        """
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        except OSError as exc:
            raise TransportSetupError("Unable to create socket: %s" % exc) from exc
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            if hasattr(socket, "SO_REUSEPORT"):
                try:
                    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEPORT, 1)
                except OSError as exc:
                    _log.debug("SO_REUSEPORT not available: %s", exc)
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
            sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, SSDP_TTL)
            sock.bind((self.bind_addr, self.bind_port))
            self._join_groups(sock)
            sock.setblocking(False)
        except TransportSetupError:
            sock.close()
            raise
        except OSError as exc:
            sock.close()
            raise TransportSetupError("Unable to set up SSDP socket: %s" % exc) from exc
        return sock

    def _join_groups(self, sock):
        interfaces = get_addresses_ipv4() or ["0.0.0.0"]
        joined = 0
        for interface in interfaces:
            try:
                _join_group(sock, SSDP_GROUP, interface)
                joined += 1
            except OSError as exc:
                _log.debug("Unable to join %s on %s: %s", SSDP_GROUP, interface, exc)
        if not joined:
            raise TransportSetupError("Unable to join multicast group %s" % SSDP_GROUP)

        for group in self.extra_groups:
            for interface in interfaces:
                try:
                    _join_group(sock, group, interface)
                except OSError as exc:
                    _log.debug("Unable to join %s on %s: %s", group, interface, exc)

    def _search(self, transport):
        request = ssdp_request(self.search_target)
        targets = [SSDP_TARGET]
        if self.broadcast:
            targets.append(BROADCAST_TARGET)
        _log.debug("Sending M-SEARCH for %s", self.search_target)
        for target in targets:
            try:
                transport.sendto(request, target)
            except OSError as exc:
                _log.warning("Unable to send M-SEARCH to %s:%s: %s", target[0], target[1], exc)

    async def async_discover(self, timeout_ms=DISCOVER_TIMEOUT_MS):
        """
        Search for media renderers for `timeout_ms` milliseconds and return the
        DeviceDescriptors found, in order of arrival. Devices which can't be
        resolved are logged and left out. Returns an empty list if the socket
        can't be set up.
        """
        try:
            sock = self._create_socket()
        except TransportSetupError as exc:
            _log.error("Discovery aborted: %s", exc)
            return []

        loop = asyncio.get_running_loop()
        scan = _Scan(aiohttp.ClientSession(), http_timeout=self.http_timeout)
        with self._scans_lock:
            self._scans.add(scan)
        try:
            transport, _ = await loop.create_datagram_endpoint(lambda: scan, sock=sock)
            self._search(transport)
            await scan.wait(timeout_ms / 1000.0)
        except OSError as exc:
            _log.error("Discovery aborted: %s", exc)
        finally:
            with self._scans_lock:
                self._scans.discard(scan)
            await scan.release()
            sock.close()
            _log.debug("Discovery cleanup completed")
        return scan.results()

    def discover(self, timeout_ms=DISCOVER_TIMEOUT_MS):
        """
        Blocking version of `async_discover()`. Must not be called from a
        running event loop.
        """
        return asyncio.run(self.async_discover(timeout_ms))

    def close(self):
        """
        Stop any scan in progress; it returns what it has found so far.
        """
        with self._scans_lock:
            scans = list(self._scans)
        for scan in scans:
            scan.stop()


async def async_discover(timeout_ms=DISCOVER_TIMEOUT_MS, **kwargs):
    """
    Convenience coroutine to discover media renderers on the network. Keyword
    arguments are passed to SSDPDiscoverer.
    """
    return await SSDPDiscoverer(**kwargs).async_discover(timeout_ms)


def discover(timeout_ms=DISCOVER_TIMEOUT_MS, **kwargs):
    """
    Convenience method to discover media renderers on the network. Returns a
    list of `upnp.DeviceDescriptor` instances. Any invalid devices are
    silently ignored.
    """
    return SSDPDiscoverer(**kwargs).discover(timeout_ms)
