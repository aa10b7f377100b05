"""Protocol version negotiation.

WFS servers don't tell which version they speak until they are asked.
The client sends a ``GetCapabilities`` request with a candidate version,
and the server answers with the version it prefers. The candidate is lowered
until both sides agree. Each step moves to a strictly smaller supported version,
so negotiation ends after at most one request per supported version.

See:
https://docs.opengeospatial.org/is/09-025r2/09-025r2.html#30
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import semver

from wfsclient.exceptions import (
    NoOverlap,
    NoSmallerCandidate,
    RecoveryExhausted,
    UnreadableVersion,
    VersionNotSupported,
)
from wfsclient.parsers.xml import NSElement, split_ns

logger = logging.getLogger(__name__)

#: The local name of the root element of a capabilities document (in all versions).
CAPABILITIES_ROOT = "WFS_Capabilities"

__all__ = ("NegotiationResult", "VersionNegotiator", "CAPABILITIES_ROOT")


@dataclass(frozen=True)
class NegotiationResult:
    """The version both sides agreed on."""

    version: str
    #: All candidate versions that were sent to the server, in order.
    candidates: tuple[str, ...]

    @property
    def request_count(self) -> int:
        return len(self.candidates)


class VersionNegotiator:
    """Find the protocol version that both the client and server support.

    :param fetch_capabilities: Performs a ``GetCapabilities`` request for a given version,
        and returns the parsed root element. Transport errors are not handled here.
    :param supported_versions: The versions of the client, lowest first.
    """

    def __init__(
        self,
        fetch_capabilities: Callable[[str], NSElement],
        supported_versions: Sequence[str],
    ):
        if not supported_versions:
            raise ValueError("At least one supported version is required")

        self.fetch_capabilities = fetch_capabilities
        self.supported_versions = tuple(supported_versions)
        self._parsed_versions = [semver.Version.parse(v) for v in self.supported_versions]

    def negotiate(self, starting_candidate: str) -> NegotiationResult:
        """Perform the negotiation, starting with the given candidate version.

        :raises VersionNegotiationFailed: When no common version could be found.
        """
        if starting_candidate not in self.supported_versions:
            raise VersionNotSupported(starting_candidate)

        candidate = starting_candidate
        candidates = []
        while True:
            logger.debug("client is trying with version %s", candidate)
            candidates.append(candidate)
            root = self.fetch_capabilities(candidate)

            if split_ns(root.tag)[1] != CAPABILITIES_ROOT:
                # The server didn't respond with a capabilities document (e.g. an exception report).
                # Try the next lower version the client knows about.
                logger.debug("enter in recovery mode (unable to read capabilities)")
                next_candidate = self._find_lower_version(candidate)
                if next_candidate is None:
                    logger.debug("version negotiation failed - recovery mode")
                    raise RecoveryExhausted(candidate, candidates=candidates)

                logger.debug("nearest smaller version supported by client is %s", next_candidate)
                candidate = next_candidate
                continue

            detected = root.attrib.get("version")
            if not detected or not semver.Version.is_valid(detected):
                logger.debug("unable to read version in Capabilities: %r", detected)
                raise UnreadableVersion(candidates=candidates)

            logger.debug("server responded with version %s", detected)
            if detected == candidate:
                logger.debug("client and server versions are matching!")
                return NegotiationResult(detected, tuple(candidates))

            if semver.Version.parse(detected) > semver.Version.parse(candidate):
                logger.debug(
                    "client candidate version (%s) is smaller than"
                    " the lowest supported by server (%s)",
                    candidate,
                    detected,
                )
                raise NoOverlap(detected, candidate, candidates=candidates)

            logger.debug("candidate version (%s) is greater than server one (%s)", candidate, detected)
            if detected in self.supported_versions:
                # The server already told which version it speaks, no need to ask again.
                logger.debug("version returned by server (%s) is supported by client", detected)
                return NegotiationResult(detected, tuple(candidates))

            # Step below the version of the server, not below the candidate.
            next_candidate = self._find_lower_version(detected)
            if next_candidate is None:
                raise NoSmallerCandidate(detected, candidates=candidates)

            logger.debug("nearest smaller version supported by client is %s", next_candidate)
            candidate = next_candidate

    def _find_lower_version(self, version: str) -> str | None:
        """Find the largest supported version that is strictly lower than the given version."""
        parsed = semver.Version.parse(version)
        for supported, supported_parsed in zip(
            reversed(self.supported_versions), reversed(self._parsed_versions)
        ):
            if supported_parsed < parsed:
                return supported
        return None
