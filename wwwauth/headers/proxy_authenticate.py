from wwwauth import headers
from wwwauth.challenge import PROXY_AUTHENTICATE, Challenge, Param
from wwwauth.syntax import rfc7235


class proxy_authenticate(headers.ChallengeHeader):
    canonical_name = PROXY_AUTHENTICATE
    reference = f"{rfc7235.SPEC_URL}#header.proxy-authenticate"
    syntax = rfc7235.Proxy_Authenticate


class ProxyAuthTest(headers.HeaderTest):
    name = "Proxy-Authenticate"
    inputs = [b'Basic realm="proxy", Digest realm="proxy", nonce="abc"']
    expected_out = [
        Challenge("Basic", [Param("realm", "proxy")]),
        Challenge("Digest", [Param("realm", "proxy"), Param("nonce", "abc")]),
    ]


class ProxyAuthInRequestTest(headers.HeaderTest):
    name = "Proxy-Authenticate"
    inputs = [b'Basic realm="proxy"']
    expected_out = [Challenge("Basic", [Param("realm", "proxy")])]
    expected_err = [headers.RESPONSE_HDR_IN_REQUEST]
    is_request = True
