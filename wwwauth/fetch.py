"""
Fetch a URL and collect the challenges in its response.

ChallengeFetcher makes a single GET request using thor's HTTP client, runs
the response headers through HeaderProcessor and emits 'fetch_done' when it's
finished, whether or not the fetch succeeded.
"""

from configparser import SectionProxy
import logging
from typing import List, Optional

from netaddr import IPAddress  # type: ignore
import thor
from thor.http.client import HttpClientExchange
import thor.http.error as httperr

from wwwauth import __version__
from wwwauth.challenge import PROXY_AUTHENTICATE, WWW_AUTHENTICATE, Challenge
from wwwauth.headers import HeaderProcessor
from wwwauth.speak import NoteList
from wwwauth.type import HeaderDictType, RawHeaderListType, StrHeaderListType

log = logging.getLogger(__name__)

UA_STRING = f"wwwauth/{__version__}".encode("ascii")


class ChallengeHttpClient(thor.http.HttpClient):
    "Thor HttpClient for ChallengeFetcher"

    def __init__(self, loop: Optional[thor.loop.LoopBase] = None) -> None:
        thor.http.HttpClient.__init__(self, loop)
        self.connect_timeout = 10
        self.read_timeout = 15
        self.retry_delay = 1
        self.careful = False


class ChallengeFetcher(thor.events.EventEmitter):
    """
    Fetches a URI and:
        - collects notes about its challenge headers in notes
        - emits 'fetch_done' when the fetch is finished.
    """

    def __init__(self, config: SectionProxy) -> None:
        thor.events.EventEmitter.__init__(self)
        self.config = config
        self.uri: Optional[str] = None
        self.notes = NoteList()
        self.status_code: Optional[bytes] = None
        self.status_phrase: Optional[bytes] = None
        self.headers: StrHeaderListType = []
        self.parsed_headers: HeaderDictType = {}
        self.exchange: HttpClientExchange
        self.fetch_started = False
        self.fetch_error: Optional[httperr.HttpError] = None
        self.fetch_done = False
        self.client = ChallengeHttpClient()
        self.client.connect_timeout = config.getint("connect_timeout", fallback=10)
        self.client.read_timeout = config.getint("read_timeout", fallback=15)
        self.setup_check_ip()

    def __repr__(self) -> str:
        out = [self.__class__.__name__]
        if self.uri:
            out.append(self.uri)
        if self.fetch_started:
            out.append("fetch_started")
        if self.fetch_done:
            out.append("fetch_done")
        return f"<{', '.join(out)} at {id(self):#x}>"

    @property
    def challenges(self) -> List[Challenge]:
        "The challenges from WWW-Authenticate, then Proxy-Authenticate."
        return self.parsed_headers.get(
            WWW_AUTHENTICATE.lower(), []
        ) + self.parsed_headers.get(PROXY_AUTHENTICATE.lower(), [])

    def setup_check_ip(self) -> None:
        """
        Check to see if access to this IP is allowed.
        """
        if not self.config.getboolean("enable_local_access", fallback=False):

            def check_ip(dns_result: str) -> bool:
                addr = IPAddress(dns_result)
                if not addr.is_global():
                    return False
                return True

            self.client.check_ip = check_ip

    def check(self, uri: str) -> None:
        """
        Make an asynchronous GET request to uri, emitting 'fetch_done' when
        it's done.
        """
        self.uri = uri
        self.fetch_started = True
        self.exchange = self.client.exchange()
        self.exchange.once("response_start", self._response_start)
        self.exchange.once("response_done", self._response_done)
        self.exchange.on("error", self._response_error)
        log.debug("fetching %s", uri)
        self.exchange.request_start(
            b"GET", uri.encode("ascii"), [(b"User-Agent", UA_STRING)]
        )
        if not self.fetch_done:  # the request could have immediately failed.
            self.exchange.request_done([])

    def _response_start(
        self, status: bytes, phrase: bytes, res_headers: RawHeaderListType
    ) -> None:
        "Process the response start-line and headers."
        if self.fetch_done:
            return
        self.status_code = status
        self.status_phrase = phrase
        processor = HeaderProcessor(self.notes.add)
        self.headers, self.parsed_headers = processor.process(res_headers)

    def _response_done(self, trailers: RawHeaderListType) -> None:
        log.debug("fetched %s", self.uri)
        self._fetch_done()

    def _response_error(self, error: httperr.HttpError) -> None:
        "Handle an error encountered while fetching the response."
        log.warning("fetch error %s: %s (%s)", self.uri, error.desc, error.detail)
        self.fetch_error = error
        self._fetch_done()

    def _fetch_done(self) -> None:
        if not self.fetch_done:
            self.fetch_done = True
            try:
                delattr(self, "exchange")
            except AttributeError:
                pass
            self.emit("fetch_done")
