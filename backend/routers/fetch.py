"""
Fetch router exposing the remote data fetch operation.
"""
from fastapi import APIRouter, Query, Request
from fastapi.responses import RedirectResponse

from core.exceptions import AuthException
from schema.fetch import FetchResponse
from services import DataFetchService
from .base import BaseRouter

LOGIN_PATH = "/login"


class FetchRouter(BaseRouter):
    """Router for fetching remote resources. Failures propagate to the middleware."""

    def _service(self) -> DataFetchService:
        return self.check_container().get(DataFetchService)

    def get_router(self) -> APIRouter:
        """Get fetch router."""
        router = APIRouter(prefix="/fetch", tags=["fetch"])

        @router.get("", response_model=FetchResponse)
        async def fetch(request: Request, url: str = Query("", description="Resource URL")):
            """Fetch a resource once."""
            result = await self._service().fetch_data(url)
            return FetchResponse(
                message=f"Fetched {result.url}",
                trace_id=getattr(request.state, "trace_id", None),
                result=result
            )

        @router.get("/retry", response_model=FetchResponse)
        async def fetch_with_retry(request: Request, url: str = Query("", description="Resource URL")):
            """Fetch a resource, retrying retryable server failures."""
            result = await self._service().fetch_with_retry(url)
            return FetchResponse(
                message=f"Fetched {result.url} in {result.attempts} attempt(s)",
                trace_id=getattr(request.state, "trace_id", None),
                result=result
            )

        @router.get("/page", response_model=FetchResponse)
        async def fetch_page(request: Request, url: str = Query("", description="Resource URL")):
            """Fetch a resource for a page view; auth failures redirect to login."""
            try:
                result = await self._service().fetch_data(url)
            except AuthException:
                return RedirectResponse(url=f"{LOGIN_PATH}?next={request.url.path}", status_code=303)
            return FetchResponse(
                message=f"Fetched {result.url}",
                trace_id=getattr(request.state, "trace_id", None),
                result=result
            )

        return router
