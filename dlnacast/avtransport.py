"""
Start playback of a URL on a media renderer.

Playback takes two AVTransport actions, in order: `SetAVTransportURI` hands
the renderer the media URL, then `Play` starts it. `Play` is only sent once
the renderer has accepted the URI.
"""
from collections import OrderedDict

from .soap import SOAP
from .util import _getLogger
from .upnp import DeviceDescriptor

_log = _getLogger("AVTransport")


class PlaybackResult(object):
    def __init__(self, success, error=None):
        self.success = success
        self.error = error

    def __repr__(self):
        if self.success:
            return "<PlaybackResult success>"
        return "<PlaybackResult error=%r>" % self.error

    def __bool__(self):
        return self.success

    def to_dict(self):
        out = {"success": self.success}
        if self.error is not None:
            out["error"] = self.error
        return out


def _set_uri_args(media_url):
    return OrderedDict([("CurrentURI", media_url), ("CurrentURIMetaData", "")])


def _play_args():
    return OrderedDict([("Speed", "1")])


def _prepare(device, media_url):
    """
    Return a SOAP client for the device's AVTransport service. Accepts a
    DeviceDescriptor or its `to_dict()` form.
    """
    if isinstance(device, dict):
        device = DeviceDescriptor.from_dict(device)
    if not isinstance(device, DeviceDescriptor):
        raise TypeError("Expected a DeviceDescriptor, got %r" % (device,))
    av_transport = device.av_transport
    if av_transport is None or not av_transport.control_url:
        raise ValueError("%r has no AVTransport control URL" % device)
    if not isinstance(media_url, str) or not media_url:
        raise ValueError("Invalid media URL: %r" % (media_url,))
    return SOAP(av_transport.control_url, av_transport.service_type)


def _failure(device, exc):
    _log.error("Unable to play on %r: %s", device, exc)
    return PlaybackResult(False, str(exc) or type(exc).__name__)


def play(device, media_url):
    """
    Tell `device` to play `media_url`. Never raises; failures are reported in
    the returned PlaybackResult.
    """
    try:
        soap = _prepare(device, media_url)
        soap.call("SetAVTransportURI", _set_uri_args(media_url))
        soap.call("Play", _play_args())
    except Exception as exc:
        return _failure(device, exc)
    _log.info("Playing %s on %s", media_url, soap.url)
    return PlaybackResult(True)


async def async_play(device, media_url, session=None):
    """
    Asynchronous version of `play()`. `session` is an optional
    aiohttp.ClientSession to send both actions through.
    """
    try:
        soap = _prepare(device, media_url)
        await soap.async_call("SetAVTransportURI", _set_uri_args(media_url), session=session)
        await soap.async_call("Play", _play_args(), session=session)
    except Exception as exc:
        return _failure(device, exc)
    _log.info("Playing %s on %s", media_url, soap.url)
    return PlaybackResult(True)
