import time
import httpx
from jamii.core.logger import logger

class LogMiddleware:
    """Logs every outbound API call through httpx event hooks."""

    async def on_request(self, request: httpx.Request):
        request.extensions["jamii_start_time"] = time.time()

    async def on_response(self, response: httpx.Response):
        request = response.request
        start_time = request.extensions.get("jamii_start_time", time.time())

        # Calculate processing time
        process_time = time.time() - start_time

        # Log the request details
        logger.info(
            f"Method: {request.method} | "
            f"Path: {request.url.path} | "
            f"Status: {response.status_code} | "
            f"Duration: {process_time:.4f}s"
        )

    @property
    def event_hooks(self):
        return {"request": [self.on_request], "response": [self.on_response]}
