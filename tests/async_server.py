from aiohttp import web

from tests.const import LOCALHOST
from tests.helpers import SimpleMockRequest


class MockUPnPServer(object):
    """
    Local HTTP server standing in for a UPnP device. `responses` maps a path to
    a list of (status, body) tuples served in turn; the last one is repeated.
    Every request is recorded in `requests`.
    """

    def __init__(self, host=LOCALHOST):
        self.host = host
        self.port = None
        self.responses = {}
        self.requests = []
        self._runner = None
        self.app = web.Application()
        self.app.router.add_route("*", "/{_:.*}", self.handler)

    def url(self, path):
        return "http://%s:%d%s" % (self.host, self.port, path)

    def requests_for(self, path):
        return [r for r in self.requests if r.path == path]

    async def handler(self, request):
        mock_req = SimpleMockRequest()
        mock_req.update(request, await request.read())
        self.requests.append(mock_req)

        queue = self.responses.get(request.path)
        if not queue:
            return web.Response(status=404, text="Not Found")
        status, body = queue.pop(0) if len(queue) > 1 else queue[0]
        return web.Response(status=status, text=body, content_type="text/xml")

    async def start(self):
        self._runner = web.AppRunner(self.app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, 0)
        await site.start()
        self.port = self._runner.addresses[0][1]

    async def stop(self):
        await self._runner.cleanup()
