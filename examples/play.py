#!/usr/bin/env python
#
# Play a media URL on a media renderer, either the first one discovered or the
# one whose device description lives at the given location.
#
#   python play.py http://192.168.1.10:8000/movie.mp4 [http://192.168.1.5:49152/desc.xml]
#

import sys
import logging

import dlnacast

logging.basicConfig(level=logging.INFO)

media_url = sys.argv[1]

if len(sys.argv) > 2:
    # Skip discovery when the device's location is already known.
    device = dlnacast.resolve(sys.argv[2])
    devices = [device] if device is not None else []
else:
    devices = dlnacast.discover(3000)

if not devices:
    sys.exit("No media renderer found.")

result = dlnacast.play(devices[0], media_url)
if result:
    print("Playing on %s" % devices[0].name)
else:
    sys.exit("Unable to play on %s: %s" % (devices[0].name, result.error))
