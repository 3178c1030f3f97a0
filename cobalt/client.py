import httpx


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class MsdsClient:
    """Thin async client for the cobalt REST API."""

    def __init__(self, base_url: str, transport: httpx.AsyncBaseTransport | None = None):
        self.http = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/api/v1/",
            transport=transport,
            timeout=30,
        )

    async def __aenter__(self) -> "MsdsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.http.aclose()

    @staticmethod
    def _check(response: httpx.Response) -> dict:
        if response.is_success:
            return response.json()

        try:
            detail = response.json().get("detail", response.text)
        except ValueError:
            detail = response.text
        if isinstance(detail, list):
            detail = "; ".join(error.get("msg", str(error)) for error in detail)
        raise ApiError(response.status_code, str(detail) or response.reason_phrase)

    async def create_msds(self, payload: dict) -> dict:
        return self._check(await self.http.post("msds/", json=payload))

    async def list_msds(self, q: str | None = None, page: int = 1, page_size: int = 12) -> dict:
        params = {"page": page, "page_size": page_size}
        if q:
            params["q"] = q
        return self._check(await self.http.get("msds/", params=params))
