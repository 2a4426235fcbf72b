import asyncio
from collections import OrderedDict

import requests
import aiohttp

from . import xmltree
from .util import _getLogger, escape_xml
from .errors import ControlRequestError, DescriptionParseError
from .const import HTTP_TIMEOUT, SOAP_ENVELOPE_NS, SOAP_ENCODING_NS, ERROR_EXCERPT_LENGTH

ENVELOPE = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<s:Envelope xmlns:s="{envelope_ns}" s:encodingStyle="{encoding_ns}">'
    "<s:Body>"
    '<u:{action_name} xmlns:u="{service_type}">{arg_values}</u:{action_name}>'
    "</s:Body>"
    "</s:Envelope>"
)


def parse_fault(body):
    """
    Return (errorCode, errorDescription) from a UPnP SOAP fault, or (None, None).
    """
    try:
        root = xmltree.parse(body)
    except DescriptionParseError:
        return None, None
    error = xmltree.find_first(root, lambda e: e.name == "UPnPError")
    if error is None:
        return None, None
    code = error.field("errorCode")
    try:
        code = int(code) if code is not None else None
    except ValueError:
        pass
    return code, error.field("errorDescription")


class SOAP(object):
    """SOAP (Simple Object Access Protocol) implementation
    This class defines a simple SOAP client.
    """
    def __init__(self, url, service_type, timeout=HTTP_TIMEOUT):
        self.url = url
        self.service_type = service_type
        self.timeout = timeout
        self._log = _getLogger('SOAP')

    def _build_request(self, action_name, arg_in):
        """
        Return (body, headers) for the action. Argument values are escaped;
        their order is kept.
        """
        arg_values = ''.join(
            '<%s>%s</%s>' % (k, escape_xml(v), k) for k, v in arg_in.items())
        body = ENVELOPE.format(
            envelope_ns=SOAP_ENVELOPE_NS,
            encoding_ns=SOAP_ENCODING_NS,
            action_name=action_name,
            service_type=escape_xml(self.service_type),
            arg_values=arg_values,
        ).encode('utf-8')
        headers = {
            'Content-Type': 'text/xml; charset="utf-8"',
            'SOAPAction': '"%s#%s"' % (self.service_type, action_name),
            'Content-Length': str(len(body)),
        }
        return body, headers

    def _error(self, action_name, status, text):
        excerpt = ' '.join((text or '').split())[:ERROR_EXCERPT_LENGTH]
        code, description = parse_fault(text) if text else (None, None)
        message = '%s failed: HTTP %d' % (action_name, status)
        if code is not None:
            message += ' (UPnP error %s: %s)' % (code, description)
        if excerpt:
            message += ' - %s' % excerpt
        return ControlRequestError(
            message, status=status, body=text, error_code=code, error_description=description)

    def _parse_response(self, action_name, status, text):
        if not 200 <= status < 300:
            raise self._error(action_name, status, text)
        if not text or not text.strip():
            return {}
        try:
            contents = xmltree.parse(text)
        except DescriptionParseError as exc:
            raise ControlRequestError(
                '%s returned malformed XML: %s' % (action_name, exc), status=status, body=text) from exc

        params_out = OrderedDict()
        for node in xmltree.iter_elements(contents):
            if node.name.lower().endswith('response'):
                for param_out_node in node.elements:
                    params_out[param_out_node.name] = param_out_node.text
                break
        return params_out

    def call(self, action_name, arg_in=None):
        if arg_in is None:
            arg_in = {}
        body, headers = self._build_request(action_name, arg_in)
        self._log.debug('>> %s %s (%s)', self.url, action_name, arg_in)
        try:
            resp = requests.post(self.url, data=body, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise ControlRequestError('%s failed: %s' % (action_name, exc)) from exc
        params_out = self._parse_response(action_name, resp.status_code, resp.text)
        self._log.debug('<< %s: %s', action_name, params_out)
        return params_out

    async def async_call(self, action_name, arg_in=None, session=None):
        if arg_in is None:
            arg_in = {}
        body, headers = self._build_request(action_name, arg_in)
        own_session = session is None
        if own_session:
            session = aiohttp.ClientSession()
        self._log.debug('>> %s %s (%s)', self.url, action_name, arg_in)
        try:
            async with session.post(
                self.url,
                data=body,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as resp:
                status = resp.status
                text = await resp.text(errors='replace')
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise ControlRequestError('%s failed: %r' % (action_name, exc)) from exc
        finally:
            if own_session:
                await session.close()
        params_out = self._parse_response(action_name, status, text)
        self._log.debug('<< %s: %s', action_name, params_out)
        return params_out
