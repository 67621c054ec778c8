"""HTTP access to the platform's web pages and private JSON API."""

import json
import logging
from typing import Any, Dict, Optional

import requests

from .errors import DecodeError, TransportError

logger = logging.getLogger(__name__)

BASE_URL = "https://www.youtube.com"
API_URL = f"{BASE_URL}/youtubei/v1"

VISITOR_COOKIE = "__Secure-YEC"


class InnerTubeClient:
    """Owns the one HTTP session used for every request.

    The session's cookie jar is what authenticates continuation requests: the
    home page sets a visitor cookie that later browse requests must echo back.
    """

    HEADERS = {
        "User-Agent": (
            "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
        ),
        "Accept-Language": "en-US,en;q=0.9",
        # The API rejects POSTs without it
        "Content-Type": "application/json",
    }

    def __init__(self, client_version: str, hl: Optional[str] = None,
                 gl: Optional[str] = None, session: Optional[requests.Session] = None):
        self.client_version = client_version
        self.hl = hl
        self.gl = gl
        self.session = session or requests.Session()
        self.session.headers.update(self.HEADERS)

    def get(self, url: str) -> str:
        """Send a GET request and return the body as text."""
        logger.debug(f"GET {url}")
        try:
            resp = self.session.get(url)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"GET {url} failed: {e}") from e
        return resp.text

    def post(self, endpoint: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """POST a JSON body to an API endpoint and return the parsed reply."""
        url = f"{API_URL}/{endpoint}"
        logger.debug(f"POST {url}")
        try:
            resp = self.session.post(url, data=json.dumps(body))
            resp.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"POST {url} failed: {e}") from e
        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(f"{endpoint} response is not JSON: {e}") from e

    # Request bodies

    def context(self, visitor_data: Optional[str] = None) -> Dict[str, Any]:
        client: Dict[str, Any] = {
            "clientName": "WEB",
            "clientVersion": self.client_version,
        }
        if self.hl:
            client["hl"] = self.hl
        if self.gl:
            client["gl"] = self.gl
        if visitor_data:
            client["visitorData"] = visitor_data
        return {"client": client}

    def visitor_data(self) -> str:
        """The visitor cookie set by the home page, required for browse continuations."""
        value = self.session.cookies.get(VISITOR_COOKIE)
        if not value:
            raise DecodeError("The platform did not set the visitor cookie", VISITOR_COOKIE)
        return value

    def visitor_context(self) -> Dict[str, Any]:
        return self.context(self.visitor_data())

    def browse(self, continuation: Optional[str] = None, browse_id: Optional[str] = None,
               params: Optional[str] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {"context": self.visitor_context()}
        if continuation is not None:
            body["continuation"] = continuation
        if browse_id is not None:
            body["browseId"] = browse_id
        if params is not None:
            body["params"] = params
        return self.post("browse", body)

    def search(self, query: str, params: Optional[str] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {"context": self.context(), "query": query}
        if params is not None:
            body["params"] = params
        return self.post("search", body)

    def search_continuation(self, continuation: str) -> Dict[str, Any]:
        return self.post("search", {"context": self.context(), "continuation": continuation})

    def next(self, video_id: str) -> Dict[str, Any]:
        return self.post("next", {"context": self.context(), "videoId": video_id})

    def next_continuation(self, continuation: str, visitor: bool = False) -> Dict[str, Any]:
        context = self.visitor_context() if visitor else self.context()
        return self.post("next", {"context": context, "continuation": continuation})

    def transcript(self, params: str) -> Dict[str, Any]:
        return self.post("get_transcript", {"context": self.context(), "params": params})

    def player(self, video_id: str) -> Dict[str, Any]:
        return self.post("player", {"context": self.context(), "videoId": video_id})

    def home_page(self) -> str:
        return self.get(BASE_URL)

    def watch_page(self, video_id: str) -> str:
        return self.get(f"{BASE_URL}/watch?v={video_id}")

    def player_script(self, path: str) -> str:
        return self.get(f"{BASE_URL}{path}")
