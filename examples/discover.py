#!/usr/bin/env python
#
# Demonstrate a simple media renderer discovery.
#

import logging

import dlnacast

logging.basicConfig(level=logging.INFO)

# Listen for SSDP responses for 3 seconds. Devices without an AVTransport
# service are left out.
devices = dlnacast.discover(3000)

if not devices:
    print("No media renderers discovered on your network.")

for device in devices:
    print("%s (%s, %s) @ %s" % (device.name, device.manufacturer, device.device_type, device.address))
    print("    %s" % device.location)
    print("    %s -> %s" % (device.av_transport.service_type, device.av_transport.control_url))
