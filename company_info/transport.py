# transport.py
# -*- coding: utf-8 -*-

import logging
import re
import threading
from typing import Dict, List, Optional

import requests

from company_info import __version__
from company_info.config import REQUEST_TIMEOUT
from company_info.exceptions import TransportError
from company_info.models import HttpResponse

logger = logging.getLogger(__name__)

# Tham số `id` của MOF là application ID
CREDENTIAL_PARAM_PATTERN = re.compile(r"([?&]id=)[^&\s'\"()]+")

DEFAULT_HEADERS = {
    "User-Agent": f"company-info/{__version__}",
    "Accept": "application/json, application/xml, text/csv, */*",
}


def redact_credentials(text: str) -> str:
    """Che application ID trong URL / thông báo lỗi trước khi log hoặc raise"""
    return CREDENTIAL_PARAM_PATTERN.sub(r"\1***", text)


class HttpTransport:
    """
    Interface HTTP GET dùng bởi orchestrator.

    get() trả về HttpResponse cho mọi status code (kể cả >= 400) và chỉ raise
    TransportError khi không nhận được response.
    """

    def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> HttpResponse:
        raise NotImplementedError

    def close(self) -> None:
        pass


class RequestsTransport(HttpTransport):
    """
    HttpTransport dùng requests.Session.

    requests.Session không đảm bảo thread-safe, nên mỗi thread (vd: các worker
    của METI detail fan-out) dùng Session riêng. Nếu truyền `session` vào thì
    session đó được dùng chung cho mọi thread.
    """

    def __init__(self, timeout: float = None, session: requests.Session = None):
        self.timeout = timeout or REQUEST_TIMEOUT
        self._shared_session = session
        self._local = threading.local()
        self._lock = threading.Lock()
        self._sessions: List[requests.Session] = []
        if session is not None:
            session.headers.update(DEFAULT_HEADERS)

    @property
    def session(self) -> requests.Session:
        """Session của thread hiện tại"""
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(DEFAULT_HEADERS)
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> HttpResponse:
        safe_url = redact_credentials(url)
        try:
            resp = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            # str(e) của urllib3 chứa cả path + query string
            error_text = redact_credentials(str(e))
            logger.warning(f"Request error khi request {safe_url}: {error_text}")
            raise TransportError(
                message=f"Lỗi kết nối khi truy cập {safe_url}: {error_text}",
                url=safe_url,
                original_error=e
            ) from e

        logger.debug("GET %s -> %s", safe_url, resp.status_code)
        return HttpResponse(
            status_code=resp.status_code,
            content=resp.content,
            headers=dict(resp.headers),
        )

    def close(self) -> None:
        if self._shared_session is not None:
            self._shared_session.close()
            return
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
