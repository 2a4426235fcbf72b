# Copyright (c) 2012-2016, Ferry Boender <ferry.boender@gmail.com>
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
This module finds UPnP media renderers (TVs, speakers, streamers) on the local
network and tells them to play a media URL. It implements SSDP (Simple Service
Discovery Protocol) discovery, device description parsing and the two
AVTransport SOAP (Simple Object Access Protocol) actions needed to start
playback.

The usual flow is:

- Discover media renderers using SSDP.

  An M-SEARCH request for the AVTransport service is multicast over the
  network, and every renderer answers with a Location header pointing at an
  XML description of the device. Each description is fetched while the scan
  keeps listening, and devices offering an AVTransport service come back as
  DeviceDescriptor instances, keyed by their location.

- Play a URL on one of them.

  play() sends SetAVTransportURI followed by Play to the device's AVTransport
  control URL. It never raises: the returned PlaybackResult says whether the
  renderer accepted both actions and, if not, why.

Both operations have a coroutine twin (async_discover(), async_play()).

------------------------------------------------------------------------------
import dlnacast

devices = dlnacast.discover(3000)

for device in devices:
    print("%s (%s) at %s" % (device.name, device.manufacturer, device.address))

if devices:
    result = dlnacast.play(devices[0], "http://192.168.1.10:8000/movie.mp4")
    if not result:
        print(result.error)
------------------------------------------------------------------------------

Useful Links:

* http://upnp.org/specs/arch/UPnP-arch-DeviceArchitecture-v1.1.pdf
* http://upnp.org/specs/av/UPnP-av-AVTransport-v1-Service.pdf
"""
from dlnacast import const, errors, soap, ssdp, upnp, util, xmltree, avtransport  # noqa: F401
from .errors import (
    DLNAError, TransportSetupError, MalformedAnnouncement, DescriptionFetchError,
    DescriptionParseError, UrlNormalizationError, ControlRequestError)
from .upnp import DeviceDescriptor, AVTransportService, resolve, async_resolve
from .ssdp import SSDPDiscoverer, discover, async_discover
from .avtransport import PlaybackResult, play, async_play
from .util import normalize_url

__all__ = [
    "DLNAError", "TransportSetupError", "MalformedAnnouncement", "DescriptionFetchError",
    "DescriptionParseError", "UrlNormalizationError", "ControlRequestError",
    "DeviceDescriptor", "AVTransportService", "resolve", "async_resolve",
    "SSDPDiscoverer", "discover", "async_discover",
    "PlaybackResult", "play", "async_play", "normalize_url",
]
