from __future__ import annotations

from pathlib import Path

import requests

from wfsclient.parsers.xml import NSElement, parse_xml_from_string, xmlns

FILES_ROOT = Path(__file__).parent.joinpath("files")


def read_file(name: str) -> bytes:
    return FILES_ROOT.joinpath(name).read_bytes()


def capabilities_xml(version: str | None, ns: str = xmlns.wfs1.value) -> bytes:
    """Build a minimal capabilities document that reports a given version."""
    version_attr = f' version="{version}"' if version is not None else ""
    return f'<wfs:WFS_Capabilities xmlns:wfs="{ns}"{version_attr}/>'.encode()


def exception_xml(code="InvalidParameterValue", text="Invalid version") -> bytes:
    return (
        f'<ows:ExceptionReport xmlns:ows="{xmlns.ows11}" version="2.0.0">'
        f'<ows:Exception exceptionCode="{code}" locator="version">'
        f"<ows:ExceptionText>{text}</ows:ExceptionText>"
        f"</ows:Exception>"
        f"</ows:ExceptionReport>"
    ).encode()


class FakeServer:
    """A scripted server for version negotiation.

    The responses are given as {requested version: XML body}.
    A "*" key provides the response for all other versions.
    """

    def __init__(self, responses: dict[str, bytes]):
        self.responses = responses
        self.requested_versions = []

    def __call__(self, version: str) -> NSElement:
        self.requested_versions.append(version)
        try:
            body = self.responses[version]
        except KeyError:
            body = self.responses["*"]
        return parse_xml_from_string(body)


def make_response(content: bytes, status_code=200, url="https://example.com/wfs"):
    """Construct a response object like the requests library returns it."""
    response = requests.Response()
    response._content = content
    response.status_code = status_code
    response.reason = "OK" if status_code < 400 else "Error"
    response.url = url
    response.headers["Content-Type"] = "text/xml; charset=utf-8"
    return response


def requested_versions(mock_get) -> list[str]:
    """Tell which versions were requested from the mocked HTTP layer."""
    return [call.kwargs["params"]["version"] for call in mock_get.call_args_list]
