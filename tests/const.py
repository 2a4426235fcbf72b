LOCALHOST = "127.0.0.1"
HTTP_LOCALHOST = "http://%s" % LOCALHOST

AVTRANSPORT_1 = "urn:schemas-upnp-org:service:AVTransport:1"
AVTRANSPORT_2 = "urn:schemas-upnp-org:service:AVTransport:2"

TEST_RENDERER_XML = """<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0">
    <specVersion>
        <major>1</major>
        <minor>0</minor>
    </specVersion>
    <device>
        <deviceType>urn:schemas-upnp-org:device:MediaRenderer:1</deviceType>
        <friendlyName>  Living Room TV  </friendlyName>
        <manufacturer>Acme</manufacturer>
        <UDN>uuid:5f9ec1b3-ed59-79bb-4530-745e4a5f9a41</UDN>
        <serviceList>
            <service>
                <serviceType>urn:schemas-upnp-org:service:RenderingControl:1</serviceType>
                <serviceId>urn:upnp-org:serviceId:RenderingControl</serviceId>
                <controlURL>/upnp/control/RenderingControl</controlURL>
            </service>
            <service>
                <serviceType>urn:schemas-upnp-org:service:AVTransport:1</serviceType>
                <serviceId>urn:upnp-org:serviceId:AVTransport</serviceId>
                <controlURL>/upnp/control/AVTransport</controlURL>
            </service>
        </serviceList>
    </device>
</root>
"""

TEST_RENDERER_V2_XML = """<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0">
    <device>
        <deviceType>urn:schemas-upnp-org:device:MediaRenderer:2</deviceType>
        <friendlyName>Bedroom Speaker</friendlyName>
        <manufacturer>Acme</manufacturer>
        <serviceList>
            <service>
                <serviceType>urn:schemas-upnp-org:service:AVTransport:2</serviceType>
                <controlURL>upnp//control//AVTransport</controlURL>
            </service>
            <service>
                <serviceType>urn:schemas-upnp-org:service:AVTransport:1</serviceType>
                <controlURL>/second/AVTransport</controlURL>
            </service>
        </serviceList>
    </device>
</root>
"""

# The "device:" prefix is never declared.
TEST_PREFIXED_XML = """<?xml version="1.0"?>
<dev:root xmlns:dev="urn:schemas-upnp-org:device-1-0">
    <dev:device>
        <dev:deviceType>urn:schemas-upnp-org:device:MediaRenderer:1</dev:deviceType>
        <device:friendlyName>Kitchen Speaker</device:friendlyName>
        <device:manufacturer>Vendor</device:manufacturer>
        <dev:serviceList>
            <dev:service>
                <dev:serviceType>urn:schemas-upnp-org:service:AVTransport:1</dev:serviceType>
                <dev:controlURL>/AVTransport/ctrl</dev:controlURL>
            </dev:service>
        </dev:serviceList>
    </dev:device>
</dev:root>
"""

TEST_BARE_DEVICE_XML = """<?xml version="1.0"?>
<device>
    <deviceType>urn:schemas-upnp-org:device:MediaRenderer:1</deviceType>
    <friendlyName>Bare Device</friendlyName>
    <serviceList>
        <service>
            <serviceType>urn:schemas-upnp-org:service:AVTransport:1</serviceType>
            <controlURL>/ctl</controlURL>
        </service>
    </serviceList>
</device>
"""

TEST_EMBEDDED_XML = """<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0">
    <device>
        <deviceType>urn:schemas-upnp-org:device:Basic:1</deviceType>
        <friendlyName>Soundbar</friendlyName>
        <serviceList>
            <service>
                <serviceType>urn:schemas-upnp-org:service:ConnectionManager:1</serviceType>
                <controlURL>/cm</controlURL>
            </service>
        </serviceList>
        <deviceList>
            <device>
                <deviceType>urn:schemas-upnp-org:device:MediaRenderer:1</deviceType>
                <serviceList>
                    <service>
                        <serviceType>urn:schemas-upnp-org:service:AVTransport:1</serviceType>
                        <controlURL>/embedded/AVTransport</controlURL>
                    </service>
                </serviceList>
            </device>
        </deviceList>
    </device>
</root>
"""

TEST_NOT_RENDERER_XML = """<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0">
    <device>
        <deviceType>urn:schemas-upnp-org:device:MediaServer:1</deviceType>
        <friendlyName>NAS</friendlyName>
        <serviceList>
            <service>
                <serviceType>urn:schemas-upnp-org:service:RenderingControl:1</serviceType>
                <controlURL>/rc</controlURL>
            </service>
            <service>
                <serviceType>urn:schemas-upnp-org:service:ConnectionManager:1</serviceType>
                <controlURL>/cm</controlURL>
            </service>
        </serviceList>
    </device>
</root>
"""

TEST_MINIMAL_XML = """<?xml version="1.0"?>
<root>
    <device>
        <deviceType>MediaRenderer</deviceType>
        <friendlyName>   </friendlyName>
        <serviceList>
            <service>
                <serviceType>urn:schemas-upnp-org:service:AVTransport:1</serviceType>
                <controlURL>/ctl</controlURL>
            </service>
        </serviceList>
    </device>
</root>
"""

TEST_NO_CONTROL_URL_XML = """<?xml version="1.0"?>
<root>
    <device>
        <serviceList>
            <service>
                <serviceType>urn:schemas-upnp-org:service:AVTransport:1</serviceType>
            </service>
        </serviceList>
    </device>
</root>
"""

TEST_NO_DEVICE_XML = """<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0">
    <specVersion><major>1</major></specVersion>
</root>
"""

# Cut off mid-document; everything up to the AVTransport service is intact.
TEST_TRUNCATED_XML = """<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0">
    <device>
        <deviceType>urn:schemas-upnp-org:device:MediaRenderer:1</deviceType>
        <friendlyName>Broken TV</friendlyName>
        <serviceList>
            <service>
                <serviceType>urn:schemas-upnp-org:service:AVTransport:1</serviceType>
                <controlURL>/ctl</controlURL>
            </service>
        </serviceList>
"""

TEST_MISMATCHED_XML = """<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0">
    <device>
        <deviceType>urn:schemas-upnp-org:device:MediaRenderer:1</deviceType>
        <friendlyName>Broken TV</bogus>
        <serviceList>
            <service>
                <serviceType>urn:schemas-upnp-org:service:AVTransport:1</serviceType>
                <controlURL>/ctl</controlURL>
            </service>
        </serviceList>
    </device>
</root>
"""

TEST_TRUNCATED_RESPONSE = """<?xml version="1.0"?>
<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/" s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">
    <s:Body>
        <u:PlayResponse xmlns:u="urn:schemas-upnp-org:service:AVTransport:1">
"""

TEST_SET_URI_RESPONSE = """<?xml version="1.0"?>
<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/" s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">
    <s:Body>
        <u:SetAVTransportURIResponse xmlns:u="urn:schemas-upnp-org:service:AVTransport:1"/>
    </s:Body>
</s:Envelope>
"""

TEST_PLAY_RESPONSE = """<?xml version="1.0"?>
<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/" s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">
    <s:Body>
        <u:PlayResponse xmlns:u="urn:schemas-upnp-org:service:AVTransport:1"/>
    </s:Body>
</s:Envelope>
"""

TEST_GET_INFO_RESPONSE = """<?xml version="1.0"?>
<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/" s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">
    <s:Body>
        <u:GetTransportInfoResponse xmlns:u="urn:schemas-upnp-org:service:AVTransport:1">
            <CurrentTransportState>PLAYING</CurrentTransportState>
            <CurrentTransportStatus>OK</CurrentTransportStatus>
            <CurrentSpeed>1</CurrentSpeed>
        </u:GetTransportInfoResponse>
    </s:Body>
</s:Envelope>
"""

TEST_UPNP_FAULT = """<?xml version="1.0"?>
<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/" s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">
    <s:Body>
        <s:Fault>
            <faultcode>s:Client</faultcode>
            <faultstring>UPnPError</faultstring>
            <detail>
                <UPnPError xmlns="urn:schemas-upnp-org:control-1-0">
                    <errorCode>716</errorCode>
                    <errorDescription>Resource not found</errorDescription>
                </UPnPError>
            </detail>
        </s:Fault>
    </s:Body>
</s:Envelope>
"""


def ssdp_response(location, usn="uuid:test::urn:schemas-upnp-org:service:AVTransport:1"):
    lines = [
        "HTTP/1.1 200 OK",
        "CACHE-CONTROL: max-age=1800",
        "EXT:",
        "LOCATION: %s" % location,
        "SERVER: Linux/4.9 UPnP/1.0 Test/1.0",
        "ST: urn:schemas-upnp-org:service:AVTransport:1",
        "USN: %s" % usn,
        "",
        "",
    ]
    return "\r\n".join(lines).encode("utf-8")
